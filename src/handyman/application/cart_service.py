"""Application service: the cart facade.

``CartService`` owns the single CartState of a session. It is the only
place commands are dispatched from, and it notifies subscribers after
every state change. Consumers receive the service explicitly; there is
no ambient or global cart.

Lifecycle:
  1. construct with a CartStorage (state starts empty)
  2. ``await load_saved_cart()`` once to restore the saved items
  3. from then on every change to the items is written back
  4. ``close()`` when done, to flush writes queued on the executor
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Executor
from decimal import Decimal
from typing import Callable

from handyman.application.cart_persistence import CartPersistence
from handyman.domain.exceptions import StorageError
from handyman.domain.model.cart import CartLineItem, CartState
from handyman.domain.model.commands import (
    AddItem,
    CartCommand,
    ClearCart,
    LoadCart,
    RemoveItem,
    SetLoading,
    UpdateQuantity,
)
from handyman.domain.model.value_objects import Variants
from handyman.domain.repository.cart_storage import CartStorage
from handyman.domain.service import pricing_calculator
from handyman.domain.service.cart_reducer import reduce
from handyman.domain.service.pricing_calculator import CartSummary

logger = logging.getLogger(__name__)

Listener = Callable[[CartState], None]


class CartService:

    def __init__(self, storage: CartStorage, executor: Executor | None = None) -> None:
        self._state = CartState.empty()
        self._listeners: list[Listener] = []
        self._persistence = CartPersistence(storage, executor)
        self._load_started = False
        self.subscribe(self._persistence)

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        """True once the initial load finished (successfully or not)."""
        return self._persistence.enabled

    # --- Subscription ---------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new state after every change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, command: CartCommand) -> None:
        """Run ``command`` through the reducer and notify subscribers."""
        new_state = reduce(self._state, command)
        if new_state is self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)

    # --- Loading --------------------------------------------------------------

    async def load_saved_cart(self) -> None:
        """Restore the saved cart once, at startup.

        Any storage failure is logged and leaves the cart empty. Persistence
        starts as soon as this returns, whatever the outcome.
        """
        if self._load_started:
            logger.warning("Saved cart already loaded; ignoring repeated load")
            return
        self._load_started = True

        self.dispatch(SetLoading(True))
        try:
            items = await asyncio.to_thread(self._persistence.load_items)
        except StorageError as exc:
            logger.error("Error loading cart from storage: %s", exc)
            self.dispatch(SetLoading(False))
        except Exception:
            logger.exception("Unexpected error loading cart from storage")
            self.dispatch(SetLoading(False))
        else:
            if items is None:
                self.dispatch(SetLoading(False))
            else:
                self.dispatch(LoadCart(items))
        finally:
            self._persistence.enable(self._state)

    def close(self) -> None:
        """Wait for pending writes to land. Later writes run synchronously."""
        self._persistence.close()

    # --- Commands -------------------------------------------------------------

    def add_item(self, item: CartLineItem, quantity: int | None = None) -> None:
        """Add ``quantity`` units (default: ``item.quantity``), capped at stock."""
        self.dispatch(AddItem(item, item.quantity if quantity is None else quantity))

    def remove_item(self, item_id: str) -> None:
        self.dispatch(RemoveItem(item_id))

    def update_quantity(self, item_id: str, quantity: int) -> None:
        self.dispatch(UpdateQuantity(item_id, quantity))

    def clear_cart(self) -> None:
        self.dispatch(ClearCart())

    # --- Queries --------------------------------------------------------------

    def get_item_quantity(self, item_id: str, variants: Variants | None = None) -> int:
        item = self._state.find(item_id, variants)
        return item.quantity if item is not None else 0

    def is_item_in_cart(self, item_id: str, variants: Variants | None = None) -> bool:
        return self.get_item_quantity(item_id, variants) > 0

    def get_total_weight(self) -> Decimal:
        return pricing_calculator.total_weight(self._state.items)

    def get_cart_summary(self) -> CartSummary:
        return pricing_calculator.calculate_summary(
            self._state.total_price, self.get_total_weight()
        )
