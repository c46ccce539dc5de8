"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass

from handyman.domain.exceptions import ValidationError

VARIANT_AXES = ("color", "size", "material")


@dataclass(frozen=True)
class Variants:
    """A product configuration: any combination of color, size and material.

    The same base product id can appear several times in a cart, once per
    distinct Variants value.
    """

    color: str | None = None
    size: str | None = None
    material: str | None = None

    def __post_init__(self) -> None:
        for axis in VARIANT_AXES:
            value = getattr(self, axis)
            if value is not None and not isinstance(value, str):
                raise ValidationError(
                    f"Variant {axis} must be a string, got {type(value).__name__}"
                )

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, axis) is None for axis in VARIANT_AXES)

    def to_dict(self) -> dict[str, str]:
        return {
            axis: getattr(self, axis)
            for axis in VARIANT_AXES
            if getattr(self, axis) is not None
        }

    @staticmethod
    def from_dict(raw: dict | None) -> Variants | None:
        if not raw:
            return None
        if not isinstance(raw, dict):
            raise ValidationError(f"Variants must be a mapping, got {type(raw).__name__}")
        return Variants(**{axis: raw.get(axis) for axis in VARIANT_AXES})


def variants_match(left: Variants | None, right: Variants | None) -> bool:
    """Return True if two (possibly absent) variant sets denote the same line.

    Absent variants behave like a set with every axis undefined, so a line
    without variants only matches another line whose variants are empty.
    """
    if left is None and right is None:
        return True
    left = left or Variants()
    right = right or Variants()
    return (
        left.color == right.color
        and left.size == right.size
        and left.material == right.material
    )
