"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry display-ready data from the application layer to the CLI
without exposing domain internals. Money fields are already formatted.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the shopper."""

    product_id: str
    name: str
    variants: str  # e.g. "color=Rojo, size=M"; empty when none
    quantity: int
    stock: int
    unit_price: str  # formatted, e.g. "$ 45.000"
    line_total: str
    original_price: str | None = None
    low_stock: bool = False


@dataclass(frozen=True)
class CartSummaryDTO:
    subtotal: str
    tax: str
    shipping: str  # "Gratis" when free
    total: str
    free_shipping_hint: str | None = None


@dataclass(frozen=True)
class CartDTO:
    """Output: the whole cart as displayed to the shopper."""

    items: list[CartLineDTO]
    total_items: int
    summary: CartSummaryDTO

    @property
    def is_empty(self) -> bool:
        return not self.items
