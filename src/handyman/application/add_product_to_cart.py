"""Application service: Add Product To Cart use case.

Resolves a catalog product, snapshots its current price and stock into a
cart line and hands it to the cart. Later catalog changes never touch
lines that are already in the cart.
"""

from __future__ import annotations

import logging

from handyman.application.cart_service import CartService
from handyman.domain.exceptions import EntityNotFoundError
from handyman.domain.model.value_objects import Variants
from handyman.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductToCartHandler:

    def __init__(self, cart: CartService, product_repo: ProductRepository) -> None:
        self._cart = cart
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        quantity: int = 1,
        variants: Variants | None = None,
    ) -> int:
        """Add ``quantity`` units and return the line's resulting quantity.

        The result can be lower than requested when the stock snapshot
        caps it.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        item = product.to_line_item(variants)
        self._cart.add_item(item, quantity)

        in_cart = self._cart.get_item_quantity(item.id, item.variants)
        logger.info(
            "Added product %s to cart (requested %d, line now %d)",
            product.id,
            quantity,
            in_cart,
        )
        return in_cart
