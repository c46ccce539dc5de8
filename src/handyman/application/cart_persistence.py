"""Application service: best-effort cart persistence.

Loading validates every stored record and silently drops the ones that
do not look like a cart line. Saving is fire-and-forget: any failure is
logged and swallowed, never retried and never raised to the caller.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import Executor

from handyman.domain.exceptions import StorageError, ValidationError
from handyman.domain.model.cart import CartLineItem, CartState
from handyman.domain.repository.cart_storage import CartStorage

logger = logging.getLogger(__name__)


def is_valid_record(raw: object) -> bool:
    """A stored record is usable if it has an id, a name, a finite numeric
    price and a positive finite quantity."""
    if not isinstance(raw, dict):
        return False
    return (
        _non_empty(raw.get("id"))
        and _non_empty(raw.get("name"))
        and _is_number(raw.get("price"))
        and _is_number(raw.get("quantity"))
        and raw["quantity"] > 0
    )


def records_to_items(records: list) -> list[CartLineItem]:
    items: list[CartLineItem] = []
    for raw in records:
        if not is_valid_record(raw):
            continue
        try:
            items.append(CartLineItem.from_record(raw))
        except (ValidationError, TypeError, ValueError):
            # Well-formed core fields but unusable optional ones (e.g. variants)
            continue
    return items


class CartPersistence:
    """Bridges the cart state and a CartStorage.

    Used as a CartService subscriber: once ``enable()`` has been called,
    every state whose items changed is written back. Pass a
    single-worker executor to move writes off the caller's thread while
    keeping them in order.
    """

    def __init__(self, storage: CartStorage, executor: Executor | None = None) -> None:
        self._storage = storage
        self._executor = executor
        self._enabled = False
        self._last_items: tuple[CartLineItem, ...] | None = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self, state: CartState) -> None:
        """Start persisting; ``state`` is what is already in storage."""
        self._enabled = True
        self._last_items = state.items

    # --- Load -----------------------------------------------------------------

    def load_items(self) -> list[CartLineItem] | None:
        """Return the valid saved items, or None if nothing was saved.

        Raises StorageError if the store cannot be read.
        """
        records = self._storage.load()
        if records is None:
            return None
        items = records_to_items(records)
        dropped = len(records) - len(items)
        if dropped:
            logger.debug("Dropped %d invalid cart record(s) on load", dropped)
        return items

    # --- Save -----------------------------------------------------------------

    def __call__(self, state: CartState) -> None:
        if not self._enabled or state.is_loading:
            return
        if state.items is self._last_items:
            return
        self._last_items = state.items
        self.save_items(state.items)

    def save_items(self, items: tuple[CartLineItem, ...] | list[CartLineItem]) -> None:
        records = [item.to_record() for item in items]
        if self._executor is not None:
            self._executor.submit(self._write, records)
        else:
            self._write(records)

    def close(self) -> None:
        """Wait for queued writes, then write synchronously from here on."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def _write(self, records: list[dict]) -> None:
        try:
            self._storage.save(records)
        except StorageError as exc:
            logger.error("Error saving cart to storage: %s", exc)
        except Exception:
            logger.exception("Unexpected error saving cart to storage")


# --- Helpers ------------------------------------------------------------------


def _non_empty(value: object) -> bool:
    if isinstance(value, str):
        return value != ""
    return _is_number(value) and value != 0


def _is_number(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )
