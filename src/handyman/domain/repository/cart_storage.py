"""Abstract storage for the persisted cart.

The cart core only sees raw records (plain dicts in the persisted
layout). Validation of what comes back is the caller's job, not the
storage's.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

CART_STORAGE_KEY = "handyman-cart"


class CartStorage(ABC):

    @abstractmethod
    def load(self) -> list | None:
        """Return the saved records, or None if nothing was ever saved.

        Raises StorageError if the store cannot be read or holds
        something that is not a list.
        """

    @abstractmethod
    def save(self, records: list[dict]) -> None:
        """Replace the saved records.

        Raises StorageError if the store cannot be written.
        """
