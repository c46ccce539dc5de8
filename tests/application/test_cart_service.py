"""Integration tests for the CartService facade.

Uses in-memory fake storage — no file I/O.
"""

import asyncio
from decimal import Decimal

from handyman.application.cart_service import CartService
from handyman.domain.model.cart import CartState
from handyman.domain.model.commands import AddItem
from handyman.domain.model.value_objects import Variants
from tests.fakes import FakeCartStorage, make_item


def _setup(records: list | None = None, load: bool = True) -> tuple[CartService, FakeCartStorage]:
    storage = FakeCartStorage(records)
    service = CartService(storage)
    if load:
        asyncio.run(service.load_saved_cart())
    return service, storage


class TestCommands:

    def test_add_item_twice_merges(self):
        cart, _ = _setup()
        item = make_item("A", price=1000, stock=5)
        cart.add_item(item)
        cart.add_item(item)
        assert cart.state.total_items == 2
        assert cart.state.total_price == 2000
        assert len(cart.state.items) == 1

    def test_add_item_uses_item_quantity_by_default(self):
        cart, _ = _setup()
        cart.add_item(make_item("B", price=5000, quantity=10, stock=3))
        assert cart.get_item_quantity("B") == 3
        assert cart.state.total_price == 15000

    def test_explicit_quantity_overrides_item_quantity(self):
        cart, _ = _setup()
        cart.add_item(make_item("A", quantity=4), quantity=2)
        assert cart.get_item_quantity("A") == 2

    def test_update_and_remove(self):
        cart, _ = _setup()
        cart.add_item(make_item("A"))
        cart.add_item(make_item("B"))
        cart.update_quantity("A", 3)
        assert cart.get_item_quantity("A") == 3
        cart.remove_item("B")
        assert not cart.is_item_in_cart("B")

    def test_update_to_zero_removes(self):
        cart, _ = _setup()
        cart.add_item(make_item("A"))
        cart.update_quantity("A", 0)
        assert cart.state.items == ()

    def test_remove_drops_all_variants(self):
        cart, _ = _setup()
        cart.add_item(make_item("A", variants=Variants(color="Rojo")))
        cart.add_item(make_item("A", variants=Variants(color="Azul")))
        cart.remove_item("A")
        assert cart.state.items == ()

    def test_clear(self):
        cart, _ = _setup()
        cart.add_item(make_item("A"), 2)
        cart.clear_cart()
        assert cart.state.total_items == 0
        assert cart.state.total_price == 0


class TestQueries:

    def test_quantity_zero_when_absent(self):
        cart, _ = _setup()
        assert cart.get_item_quantity("nope") == 0
        assert not cart.is_item_in_cart("nope")

    def test_queries_are_variant_aware(self):
        cart, _ = _setup()
        cart.add_item(make_item("A", variants=Variants(size="M")), 2)
        assert cart.get_item_quantity("A", Variants(size="M")) == 2
        assert cart.get_item_quantity("A", Variants(size="L")) == 0
        assert cart.get_item_quantity("A") == 0
        assert cart.is_item_in_cart("A", Variants(size="M"))

    def test_total_weight(self):
        cart, _ = _setup()
        cart.add_item(make_item("A"), 3)
        assert cart.get_total_weight() == Decimal("0.6")

    def test_summary(self):
        cart, _ = _setup()
        cart.add_item(make_item("A", price=25000, stock=10), 2)
        summary = cart.get_cart_summary()
        assert summary.subtotal == 50000
        assert summary.tax == 9500
        assert summary.shipping == 8000
        assert summary.total == 67500

    def test_summary_free_shipping(self):
        cart, _ = _setup()
        cart.add_item(make_item("A", price=75000, stock=10), 2)
        assert cart.get_cart_summary().shipping == 0


class TestSubscriptions:

    def test_listener_called_after_each_change(self):
        cart, _ = _setup()
        seen: list[CartState] = []
        cart.subscribe(seen.append)
        cart.add_item(make_item("A"))
        cart.add_item(make_item("A"))
        cart.clear_cart()
        assert [s.total_items for s in seen] == [1, 2, 0]

    def test_unsubscribe(self):
        cart, _ = _setup()
        seen: list[CartState] = []
        unsubscribe = cart.subscribe(seen.append)
        cart.add_item(make_item("A"))
        unsubscribe()
        cart.add_item(make_item("B"))
        assert len(seen) == 1

    def test_unknown_command_does_not_notify(self):
        cart, _ = _setup()
        seen: list[CartState] = []
        cart.subscribe(seen.append)
        cart.dispatch("not a command")
        assert seen == []

    def test_dispatch_applies_commands_in_order(self):
        cart, _ = _setup()
        item = make_item("A", stock=3)
        for _ in range(5):
            cart.dispatch(AddItem(item))
        assert cart.get_item_quantity("A") == 3
