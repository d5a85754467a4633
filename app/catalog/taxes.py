"""Tax resolution for new subcategories and items.

Children inherit ``tax_applicability`` and ``tax`` from their parents
unless the caller supplies a value. Priority, per field:

    item input > subcategory > category

``None`` is the only "not provided" marker. ``False`` and ``0`` are
real values and always win over inherited ones. The two fields are
resolved independently, so an explicit tax can be combined with an
inherited applicability and vice versa.

Resolution only happens at creation time; stored values are never
recomputed when a parent changes.
"""

from dataclasses import dataclass
from typing import Protocol, TypeVar

T = TypeVar("T")


class TaxSource(Protocol):
    """Anything carrying tax settings (a category or subcategory)."""

    tax_applicability: bool | None
    tax: float | None


@dataclass(frozen=True)
class TaxSettings:
    """Effective tax settings for a new record."""

    tax_applicability: bool
    tax: float


def first_present(*values: T | None) -> T | None:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def resolve_subcategory_tax(
    tax_applicability: bool | None,
    tax: float | None,
    category: TaxSource,
) -> TaxSettings:
    """Resolve tax settings for a new subcategory.

    Args:
        tax_applicability: Value from the request, or None to inherit.
        tax: Value from the request, or None to inherit.
        category: Parent category.

    Returns:
        Effective tax settings.
    """
    return TaxSettings(
        tax_applicability=bool(first_present(tax_applicability, category.tax_applicability, False)),
        tax=first_present(tax, category.tax, 0),
    )


def resolve_item_tax(
    tax_applicability: bool | None,
    tax: float | None,
    subcategory: TaxSource | None,
    category: TaxSource,
) -> TaxSettings:
    """Resolve tax settings for a new item.

    Without a subcategory the lookup goes straight from the request to
    the category.

    Args:
        tax_applicability: Value from the request, or None to inherit.
        tax: Value from the request, or None to inherit.
        subcategory: Parent subcategory, if the item has one.
        category: Parent category.

    Returns:
        Effective tax settings.
    """
    sub_applicability = subcategory.tax_applicability if subcategory is not None else None
    sub_tax = subcategory.tax if subcategory is not None else None

    return TaxSettings(
        tax_applicability=bool(
            first_present(tax_applicability, sub_applicability, category.tax_applicability, False)
        ),
        tax=first_present(tax, sub_tax, category.tax, 0),
    )
