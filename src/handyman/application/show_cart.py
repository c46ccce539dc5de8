"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from handyman.application.cart_service import CartService
from handyman.application.dto import CartDTO, CartLineDTO, CartSummaryDTO
from handyman.domain.model.cart import CartLineItem
from handyman.domain.model.currency import format_price
from handyman.domain.service.pricing_calculator import (
    CartSummary,
    amount_until_free_shipping,
)

LOW_STOCK_LIMIT = 5
FREE_SHIPPING_LABEL = "Gratis"


class ShowCartHandler:

    def __init__(self, cart: CartService, currency: str = "COP") -> None:
        self._cart = cart
        self._currency = currency

    def handle(self) -> CartDTO:
        state = self._cart.state
        return CartDTO(
            items=[self._line_to_dto(item) for item in state.items],
            total_items=state.total_items,
            summary=self.summary(),
        )

    def summary(self) -> CartSummaryDTO:
        return self._summary_to_dto(self._cart.get_cart_summary())

    # --- Mapping --------------------------------------------------------------

    def _line_to_dto(self, item: CartLineItem) -> CartLineDTO:
        variants = item.variants.to_dict() if item.variants is not None else {}
        return CartLineDTO(
            product_id=item.id,
            name=item.name,
            variants=", ".join(f"{axis}={value}" for axis, value in variants.items()),
            quantity=item.quantity,
            stock=item.stock,
            unit_price=self._fmt(item.price),
            line_total=self._fmt(item.line_total),
            original_price=(
                self._fmt(item.original_price)
                if item.original_price is not None
                else None
            ),
            low_stock=item.stock <= LOW_STOCK_LIMIT,
        )

    def _summary_to_dto(self, summary: CartSummary) -> CartSummaryDTO:
        hint = None
        if summary.subtotal > 0:
            missing = amount_until_free_shipping(summary.subtotal)
            if missing > 0:
                hint = f"Add {self._fmt(missing)} more for free shipping"
        return CartSummaryDTO(
            subtotal=self._fmt(summary.subtotal),
            tax=self._fmt(summary.tax),
            shipping=(
                FREE_SHIPPING_LABEL
                if summary.has_free_shipping
                else self._fmt(summary.shipping)
            ),
            total=self._fmt(summary.total),
            free_shipping_hint=hint,
        )

    def _fmt(self, amount) -> str:
        return format_price(amount, self._currency)
