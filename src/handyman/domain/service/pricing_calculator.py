"""Domain service: cart pricing.

Derives the checkout summary from the cart subtotal and a nominal
shipping weight. Colombian rules: 19% VAT, free shipping from 100.000 COP,
otherwise a weight-tiered flat rate.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from handyman.domain.model.cart import CartLineItem

# ---------------------------------------------------------------------------
# Constants for pricing rules
# ---------------------------------------------------------------------------
TAX_RATE = Decimal("0.19")
FREE_SHIPPING_THRESHOLD = 100000
NOMINAL_ITEM_WEIGHT_KG = Decimal("0.2")

# (max weight in kg, rate); the last tier applies above every bound
SHIPPING_TIERS: tuple[tuple[Decimal, int], ...] = (
    (Decimal("1"), 8000),
    (Decimal("3"), 12000),
)
HEAVY_SHIPPING_RATE = 15000


@dataclass(frozen=True)
class CartSummary:
    subtotal: int
    tax: Decimal
    shipping: int
    total: Decimal

    @property
    def has_free_shipping(self) -> bool:
        return self.shipping == 0


def total_weight(items: Iterable[CartLineItem]) -> Decimal:
    """Nominal weight in kg; real per-product weight is not modelled."""
    return sum(
        (NOMINAL_ITEM_WEIGHT_KG * item.quantity for item in items),
        Decimal("0"),
    )


def shipping_cost(subtotal: int | Decimal, weight: Decimal) -> int:
    """Flat shipping rate.

    Weight tiers are only consulted for a non-empty cart below the
    free-shipping threshold.
    """
    if subtotal == 0:
        return 0
    if subtotal >= FREE_SHIPPING_THRESHOLD:
        return 0
    for max_weight, rate in SHIPPING_TIERS:
        if weight <= max_weight:
            return rate
    return HEAVY_SHIPPING_RATE


def calculate_summary(subtotal: int, weight: Decimal) -> CartSummary:
    amount = Decimal(str(subtotal))
    tax = amount * TAX_RATE
    shipping = shipping_cost(subtotal, weight)
    return CartSummary(
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        total=amount + tax + shipping,
    )


def amount_until_free_shipping(subtotal: int) -> int:
    """How much more the customer must spend to ship for free (0 if already free)."""
    return max(FREE_SHIPPING_THRESHOLD - subtotal, 0)
