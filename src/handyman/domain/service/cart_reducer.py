"""Domain service: the cart reducer.

A pure ``(state, command) -> state`` transition function. No I/O, no
logging, no exceptions: every structural change folds the totals again
from the resulting items instead of patching them.
"""

from __future__ import annotations

from dataclasses import replace

from handyman.domain.model.cart import CartLineItem, CartState
from handyman.domain.model.commands import (
    AddItem,
    ClearCart,
    LoadCart,
    RemoveItem,
    SetLoading,
    UpdateQuantity,
)


def reduce(state: CartState, command: object) -> CartState:
    """Apply ``command`` to ``state`` and return the new state.

    Unknown commands are ignored and return ``state`` unchanged.
    """
    if isinstance(command, AddItem):
        return _add_item(state, command)
    if isinstance(command, RemoveItem):
        return _remove_item(state, command.item_id)
    if isinstance(command, UpdateQuantity):
        return _update_quantity(state, command)
    if isinstance(command, ClearCart):
        return replace(state, items=(), total_items=0, total_price=0)
    if isinstance(command, LoadCart):
        return CartState.with_items(command.items, is_loading=False)
    if isinstance(command, SetLoading):
        return replace(state, is_loading=command.is_loading)
    return state


# --- Transitions --------------------------------------------------------------


def _add_item(state: CartState, command: AddItem) -> CartState:
    new_item = command.item
    index = state.find_index(new_item.id, new_item.variants)

    items = list(state.items)
    if index >= 0:
        existing = items[index]
        # Silently cap at the stock snapshot rather than rejecting
        quantity = min(existing.quantity + command.quantity, existing.stock)
        items[index] = replace(existing, quantity=quantity)
    else:
        items.append(
            replace(new_item, quantity=min(command.quantity, new_item.stock))
        )

    return _with_items(state, items)


def _remove_item(state: CartState, item_id: str) -> CartState:
    # Bare-id match: every variant of the product goes
    items = [item for item in state.items if item.id != item_id]
    return _with_items(state, items)


def _update_quantity(state: CartState, command: UpdateQuantity) -> CartState:
    if command.quantity <= 0:
        return _remove_item(state, command.item_id)

    items = [
        replace(item, quantity=min(command.quantity, item.stock))
        if item.id == command.item_id
        else item
        for item in state.items
    ]
    return _with_items(state, items)


def _with_items(state: CartState, items: list[CartLineItem]) -> CartState:
    return CartState.with_items(items, is_loading=state.is_loading)
