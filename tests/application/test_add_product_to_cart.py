"""Integration tests for the AddProductToCart use case.

Uses in-memory fakes — no file I/O.
"""

import asyncio

import pytest

from handyman.application.add_product_to_cart import AddProductToCartHandler
from handyman.application.cart_service import CartService
from handyman.domain.exceptions import EntityNotFoundError, ValidationError
from handyman.domain.model.product import Product
from handyman.domain.model.value_objects import Variants
from handyman.infrastructure.persistence.sample_catalog import InMemoryProductRepository
from tests.fakes import FakeCartStorage


def _setup(
    products: list[Product] | None = None,
) -> tuple[AddProductToCartHandler, CartService, InMemoryProductRepository]:
    """Build handler with a loaded cart and a small catalog."""
    if products is None:
        products = [
            Product(id="1", name="Gorra", price=45000, category="Gorras", stock=3,
                    colors=("Rojo", "Azul")),
            Product(id="2", name="Muñeco", price=35000, category="Muñecos", stock=8),
            Product(id="4", name="Poncho", price=85000, category="Ponchos", stock=0),
        ]
    cart = CartService(FakeCartStorage())
    asyncio.run(cart.load_saved_cart())
    product_repo = InMemoryProductRepository(products)
    return AddProductToCartHandler(cart, product_repo), cart, product_repo


class TestAddProductHappyPath:

    def test_adds_line_with_catalog_snapshot(self):
        handler, cart, _ = _setup()
        assert handler.handle("2", quantity=2) == 2
        line = cart.state.items[0]
        assert line.name == "Muñeco"
        assert line.price == 35000
        assert line.stock == 8

    def test_returns_capped_quantity(self):
        handler, cart, _ = _setup()
        assert handler.handle("1", quantity=5) == 3
        assert cart.state.total_price == 135000

    def test_variants_are_separate_lines(self):
        handler, cart, _ = _setup()
        handler.handle("1", variants=Variants(color="Rojo"))
        handler.handle("1", variants=Variants(color="Azul"))
        assert len(cart.state.items) == 2
        assert cart.get_item_quantity("1", Variants(color="Rojo")) == 1


class TestAddProductPriceLock:

    def test_price_snapshot_at_add_time(self):
        handler, cart, product_repo = _setup()
        handler.handle("2")

        product_repo.get_by_id("2").price = 99000

        assert cart.state.items[0].price == 35000
        assert cart.state.total_price == 35000


class TestAddProductValidation:

    def test_unknown_product_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            handler.handle("99")

    def test_out_of_stock_rejected(self):
        handler, cart, _ = _setup()
        with pytest.raises(ValidationError, match="out of stock"):
            handler.handle("4")
        assert cart.state.items == ()

    def test_unavailable_variant_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="not available"):
            handler.handle("1", variants=Variants(color="Verde"))

    def test_non_positive_quantity_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle("2", quantity=0)
