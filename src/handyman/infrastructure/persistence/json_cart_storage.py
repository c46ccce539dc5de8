"""JSON-file-backed implementation of CartStorage.

The file plays the part of the browser's local storage: a flat JSON
object of named entries. The cart is one entry, under ``handyman-cart``,
holding the array of line-item records. Other entries are left alone.
"""

from __future__ import annotations

import json
from pathlib import Path

from handyman.domain.exceptions import StorageError
from handyman.domain.repository.cart_storage import CART_STORAGE_KEY, CartStorage


class JsonCartStorage(CartStorage):

    def __init__(self, file_path: Path, key: str = CART_STORAGE_KEY) -> None:
        self._file_path = file_path
        self._key = key

    # --- CartStorage interface ------------------------------------------------

    def load(self) -> list | None:
        entries = self._load_entries()
        if entries is None or self._key not in entries:
            return None
        records = entries[self._key]
        if not isinstance(records, list):
            raise StorageError(
                f"Entry '{self._key}' in {self._file_path} is not a list"
            )
        return records

    def save(self, records: list[dict]) -> None:
        try:
            entries = self._load_entries() or {}
        except StorageError:
            # An unreadable store is overwritten, like a fresh local storage
            entries = {}
        entries[self._key] = records
        self._persist_entries(entries)

    # --- File helpers ---------------------------------------------------------

    def _load_entries(self) -> dict | None:
        if not self._file_path.exists():
            return None
        try:
            raw = json.loads(
                self._file_path.read_text(encoding="utf-8"),
                parse_constant=_reject_constant,
            )
        except OSError as exc:
            raise StorageError(f"Cannot read {self._file_path}: {exc}") from exc
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            raise StorageError(f"Corrupt JSON in {self._file_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise StorageError(f"{self._file_path} does not hold a JSON object")
        return raw

    def _persist_entries(self, entries: dict) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            text = json.dumps(entries, indent=2, ensure_ascii=False, allow_nan=False)
            self._file_path.write_text(text + "\n", encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"Cannot write {self._file_path}: {exc}") from exc


def _reject_constant(name: str) -> None:
    raise ValueError(f"non-finite number {name} is not valid JSON")
