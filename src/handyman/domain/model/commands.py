"""Cart commands, the closed set of inputs the cart reducer understands.

Each command validates its own payload on construction, so the reducer
only ever sees well-formed input and can stay total (it never raises).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from handyman.domain.exceptions import ValidationError
from handyman.domain.model.cart import CartLineItem


def _require_id(item_id: object) -> None:
    if not isinstance(item_id, str) or not item_id.strip():
        raise ValidationError("Cart item id is required")


def _require_int(value: object, label: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(
            f"{label} must be an integer, got {type(value).__name__}"
        )


@dataclass(frozen=True)
class AddItem:
    """Add ``quantity`` units of ``item``, merging by ``(id, variants)``.

    The quantity carried by ``item`` itself is ignored; only the command's
    ``quantity`` counts.
    """

    item: CartLineItem
    quantity: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.item, CartLineItem):
            raise ValidationError("AddItem requires a CartLineItem")
        _require_id(self.item.id)
        if not self.item.name or not self.item.name.strip():
            raise ValidationError("Cart item name is required")
        _require_int(self.item.price, "Price")
        if self.item.price < 0:
            raise ValidationError("Price cannot be negative")
        _require_int(self.item.stock, "Stock")
        if self.item.stock <= 0:
            raise ValidationError(f"{self.item.name} is out of stock")
        _require_int(self.quantity, "Quantity")
        if self.quantity <= 0:
            raise ValidationError("Quantity must be positive")


@dataclass(frozen=True)
class RemoveItem:
    """Remove every line with this product id, whatever its variants."""

    item_id: str

    def __post_init__(self) -> None:
        _require_id(self.item_id)


@dataclass(frozen=True)
class UpdateQuantity:
    """Set the quantity of every line with this id (``<= 0`` removes them)."""

    item_id: str
    quantity: int

    def __post_init__(self) -> None:
        _require_id(self.item_id)
        _require_int(self.quantity, "Quantity")


@dataclass(frozen=True)
class ClearCart:
    pass


@dataclass(frozen=True)
class LoadCart:
    """Replace the cart contents with items restored from storage."""

    items: tuple[CartLineItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable but store an immutable tuple
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class SetLoading:
    is_loading: bool


CartCommand = Union[AddItem, RemoveItem, UpdateQuantity, ClearCart, LoadCart, SetLoading]
