"""Unit tests for the cart reducer (pure state transitions)."""

from handyman.domain.model.cart import CartState, calculate_totals
from handyman.domain.model.commands import (
    AddItem,
    ClearCart,
    LoadCart,
    RemoveItem,
    SetLoading,
    UpdateQuantity,
)
from handyman.domain.model.value_objects import Variants
from handyman.domain.service.cart_reducer import reduce
from tests.fakes import make_item


def _apply(*commands, state: CartState | None = None) -> CartState:
    """Fold commands over a state, checking derived totals after each step."""
    state = state or CartState.empty()
    for command in commands:
        state = reduce(state, command)
        _assert_totals_derived(state)
    return state


def _assert_totals_derived(state: CartState) -> None:
    assert state.total_items == sum(i.quantity for i in state.items)
    assert state.total_price == sum(i.price * i.quantity for i in state.items)


class TestAddItem:

    def test_adds_new_line(self):
        state = _apply(AddItem(make_item("A", price=1000)))
        assert len(state.items) == 1
        assert state.items[0].quantity == 1
        assert state.total_price == 1000

    def test_same_item_twice_merges(self):
        item = make_item("A", price=1000, stock=5)
        state = _apply(AddItem(item), AddItem(item))
        assert len(state.items) == 1
        assert state.items[0].quantity == 2
        assert state.total_price == 2000

    def test_new_line_clamped_to_stock(self):
        state = _apply(AddItem(make_item("B", price=5000, stock=3), quantity=10))
        assert state.items[0].quantity == 3
        assert state.total_price == 15000

    def test_merge_clamped_to_stock(self):
        item = make_item("A", stock=5)
        state = _apply(AddItem(item, 3), AddItem(item, 4))
        assert state.items[0].quantity == 5

    def test_repeated_adds_equal_min_of_sum_and_stock(self):
        item = make_item("A", stock=7)
        requested = [2, 1, 3, 4]
        state = _apply(*(AddItem(item, q) for q in requested))
        assert len(state.items) == 1
        assert state.items[0].quantity == min(sum(requested), 7)

    def test_merge_keeps_existing_stock_snapshot(self):
        state = _apply(
            AddItem(make_item("A", stock=2)),
            AddItem(make_item("A", stock=10), 5),
        )
        assert state.items[0].quantity == 2

    def test_different_variants_are_separate_lines(self):
        red = make_item("A", variants=Variants(color="Rojo"))
        blue = make_item("A", variants=Variants(color="Azul"))
        state = _apply(AddItem(red), AddItem(blue), AddItem(red))
        assert len(state.items) == 2
        assert [i.quantity for i in state.items] == [2, 1]

    def test_plain_and_variant_lines_do_not_merge(self):
        state = _apply(
            AddItem(make_item("A")),
            AddItem(make_item("A", variants=Variants(size="M"))),
        )
        assert len(state.items) == 2

    def test_insertion_order_preserved(self):
        state = _apply(
            AddItem(make_item("C")),
            AddItem(make_item("A")),
            AddItem(make_item("B")),
            AddItem(make_item("A")),
        )
        assert [i.id for i in state.items] == ["C", "A", "B"]

    def test_does_not_mutate_previous_state(self):
        before = _apply(AddItem(make_item("A")))
        after = reduce(before, AddItem(make_item("A")))
        assert before.items[0].quantity == 1
        assert after.items[0].quantity == 2


class TestRemoveItem:

    def test_removes_line(self):
        state = _apply(AddItem(make_item("A")), AddItem(make_item("B")), RemoveItem("A"))
        assert [i.id for i in state.items] == ["B"]

    def test_removes_every_variant_of_the_product(self):
        state = _apply(
            AddItem(make_item("A", variants=Variants(color="Rojo"))),
            AddItem(make_item("A", variants=Variants(color="Azul"))),
            AddItem(make_item("B")),
            RemoveItem("A"),
        )
        assert [i.id for i in state.items] == ["B"]
        assert state.total_items == 1

    def test_unknown_id_is_noop(self):
        state = _apply(AddItem(make_item("A")), RemoveItem("Z"))
        assert len(state.items) == 1


class TestUpdateQuantity:

    def test_sets_quantity(self):
        state = _apply(AddItem(make_item("A", price=1000)), UpdateQuantity("A", 4))
        assert state.items[0].quantity == 4
        assert state.total_price == 4000

    def test_clamped_to_stock(self):
        state = _apply(AddItem(make_item("A", stock=3)), UpdateQuantity("A", 9))
        assert state.items[0].quantity == 3

    def test_zero_removes(self):
        state = _apply(AddItem(make_item("A")), UpdateQuantity("A", 0))
        assert state.items == ()
        assert state.total_items == 0

    def test_negative_removes(self):
        state = _apply(AddItem(make_item("A")), UpdateQuantity("A", -3))
        assert state.items == ()

    def test_updates_every_variant_of_the_product(self):
        state = _apply(
            AddItem(make_item("A", stock=5, variants=Variants(size="S"))),
            AddItem(make_item("A", stock=2, variants=Variants(size="L"))),
            UpdateQuantity("A", 4),
        )
        assert [i.quantity for i in state.items] == [4, 2]


class TestClearAndLoad:

    def test_clear_empties_cart(self):
        state = _apply(
            AddItem(make_item("A"), 2),
            AddItem(make_item("B")),
            ClearCart(),
        )
        assert state.items == ()
        assert state.total_items == 0
        assert state.total_price == 0

    def test_clear_on_empty_cart(self):
        state = _apply(ClearCart())
        assert state == CartState.empty()

    def test_load_replaces_items_and_clears_loading(self):
        loading = _apply(AddItem(make_item("Z")), SetLoading(True))
        items = [make_item("A", quantity=2), make_item("B", price=500, quantity=3)]
        state = _apply(LoadCart(items), state=loading)
        assert [i.id for i in state.items] == ["A", "B"]
        assert state.total_items == 5
        assert state.total_price == 3500
        assert state.is_loading is False

    def test_set_loading_changes_only_the_flag(self):
        before = _apply(AddItem(make_item("A")))
        after = reduce(before, SetLoading(True))
        assert after.is_loading is True
        assert after.items == before.items
        assert after.total_price == before.total_price

    def test_structural_commands_keep_loading_flag(self):
        state = _apply(SetLoading(True), AddItem(make_item("A")))
        assert state.is_loading is True


class TestUnknownCommand:

    def test_returns_state_unchanged(self):
        state = _apply(AddItem(make_item("A")))
        assert reduce(state, object()) is state
        assert reduce(state, None) is state


def test_calculate_totals():
    items = [make_item("A", price=1000, quantity=2), make_item("B", price=250, quantity=4)]
    assert calculate_totals(items) == (6, 3000)
