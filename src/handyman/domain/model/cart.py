"""Cart state: line items and the totals derived from them.

``CartState`` is an immutable snapshot. It is only ever replaced, by the
reducer in ``handyman.domain.service.cart_reducer``, never edited in place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from handyman.domain.model.value_objects import Variants, variants_match


@dataclass(frozen=True)
class CartLineItem:
    """One row of the cart: a product + variant combination and its quantity.

    ``price`` and ``stock`` are snapshots taken when the product was added.
    They are never re-validated against the catalog.
    """

    id: str
    name: str
    price: int  # whole COP, no subunits
    quantity: int = 1
    stock: int = 1
    image: str = ""
    image_alt: str = ""
    category: str = ""
    sku: str = ""
    variants: Variants | None = None
    original_price: int | None = None  # display only

    @property
    def line_total(self) -> int:
        return self.price * self.quantity

    def matches(self, item_id: str, variants: Variants | None) -> bool:
        return self.id == item_id and variants_match(self.variants, variants)

    # --- Serialization --------------------------------------------------------

    def to_record(self) -> dict:
        """Persisted layout, using the storefront's camelCase field names."""
        record = {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "imageAlt": self.image_alt,
            "category": self.category,
            "sku": self.sku,
            "quantity": self.quantity,
            "stock": self.stock,
        }
        if self.variants is not None:
            record["variants"] = self.variants.to_dict()
        if self.original_price is not None:
            record["originalPrice"] = self.original_price
        return record

    @staticmethod
    def from_record(raw: dict) -> CartLineItem:
        """Rebuild a line item from a record that already passed validation."""
        quantity = _whole(raw["quantity"])
        stock = raw.get("stock")
        # Restored stock is never below the restored quantity
        stock = max(_whole(stock), quantity) if _is_number(stock) else quantity
        original_price = raw.get("originalPrice")
        return CartLineItem(
            id=str(raw["id"]),
            name=str(raw["name"]),
            price=_whole(raw["price"]),
            quantity=quantity,
            stock=stock,
            image=raw.get("image", ""),
            image_alt=raw.get("imageAlt", ""),
            category=raw.get("category", ""),
            sku=raw.get("sku", ""),
            variants=Variants.from_dict(raw.get("variants")),
            original_price=(
                _whole(original_price) if _is_number(original_price) else None
            ),
        )


@dataclass(frozen=True)
class CartState:
    """Authoritative snapshot of the cart.

    Invariants:
    - ``total_items`` always equals the sum of item quantities
    - ``total_price`` always equals the sum of ``price * quantity``
    - no two items share the same ``(id, variants)`` identity
    """

    items: tuple[CartLineItem, ...] = ()
    total_items: int = 0
    total_price: int = 0
    is_loading: bool = False

    @staticmethod
    def empty() -> CartState:
        return CartState()

    @staticmethod
    def with_items(
        items: tuple[CartLineItem, ...] | list[CartLineItem],
        is_loading: bool = False,
    ) -> CartState:
        """Build a state whose totals are folded from ``items``."""
        items = tuple(items)
        total_items, total_price = calculate_totals(items)
        return CartState(
            items=items,
            total_items=total_items,
            total_price=total_price,
            is_loading=is_loading,
        )

    def find_index(self, item_id: str, variants: Variants | None = None) -> int:
        """Index of the line with this ``(id, variants)`` identity, or -1."""
        for index, item in enumerate(self.items):
            if item.matches(item_id, variants):
                return index
        return -1

    def find(self, item_id: str, variants: Variants | None = None) -> CartLineItem | None:
        index = self.find_index(item_id, variants)
        return self.items[index] if index >= 0 else None


def calculate_totals(items: tuple[CartLineItem, ...] | list[CartLineItem]) -> tuple[int, int]:
    """Fold ``(total_items, total_price)`` from scratch."""
    total_items = sum(item.quantity for item in items)
    total_price = sum(item.price * item.quantity for item in items)
    return total_items, total_price


# --- Record helpers -----------------------------------------------------------


def _is_number(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _whole(value: int | float) -> int | float:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
