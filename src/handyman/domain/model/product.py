"""Product aggregate.

Products are the storefront's catalog entries. The cart never holds a
reference to a Product: adding one to the cart copies its price and stock
into a CartLineItem snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from handyman.domain.exceptions import ValidationError
from handyman.domain.model.cart import CartLineItem
from handyman.domain.model.value_objects import Variants


@dataclass
class Product:
    """A product in the catalog.

    ``colors``, ``sizes`` and ``materials`` list the variant options a
    shopper may pick; an empty tuple means the axis does not apply.
    """

    id: str
    name: str
    price: int
    category: str
    stock: int = 0
    sku: str = ""
    image: str = ""
    image_alt: str = ""
    original_price: int | None = None
    colors: tuple[str, ...] = field(default_factory=tuple)
    sizes: tuple[str, ...] = field(default_factory=tuple)
    materials: tuple[str, ...] = field(default_factory=tuple)

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def to_line_item(self, variants: Variants | None = None) -> CartLineItem:
        """Snapshot this product (price and stock) for the cart.

        Raises ValidationError if the product is sold out or the variant
        choice is not one the product offers.
        """
        if not self.in_stock:
            raise ValidationError(f"'{self.name}' is out of stock")
        if variants is not None:
            self._check_variants(variants)

        return CartLineItem(
            id=self.id,
            name=self.name,
            price=self.price,
            quantity=1,
            stock=self.stock,
            image=self.image,
            image_alt=self.image_alt,
            category=self.category,
            sku=self.sku,
            variants=None if variants is None or variants.is_empty else variants,
            original_price=self.original_price,
        )

    def _check_variants(self, variants: Variants) -> None:
        options = {
            "color": self.colors,
            "size": self.sizes,
            "material": self.materials,
        }
        for axis, allowed in options.items():
            chosen = getattr(variants, axis)
            if chosen is not None and chosen not in allowed:
                raise ValidationError(
                    f"'{self.name}' is not available with {axis} '{chosen}'"
                )
