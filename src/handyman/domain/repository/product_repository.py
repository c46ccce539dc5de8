"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. The storefront ships a fixed sample catalog; the
concrete implementation lives in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from handyman.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def list_by_category(self, category: str) -> list[Product]:
        """Return the products of one category (case-insensitive)."""
