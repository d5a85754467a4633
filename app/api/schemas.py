"""API schemas for the menu catalog.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, Field, ValidationInfo, field_validator


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    message: str = Field(..., description="Human-readable error message")
    error: str | None = Field(default=None, description="Underlying error detail")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class _PartialUpdate(BaseModel):
    """Base for PATCH bodies.

    Every field is optional, but fields backed by NOT NULL columns may
    not be sent as an explicit null.
    """

    non_nullable: ClassVar[tuple[str, ...]] = ()

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name in cls.non_nullable:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryCreateRequest(BaseModel):
    """Request to create a category."""

    name: str = Field(..., min_length=1, max_length=200, description="Unique category name")
    image: str = Field(..., min_length=1, description="Image URL")
    description: str | None = Field(default=None, description="Optional description")
    tax_applicability: bool | None = Field(
        default=None, description="Whether tax applies (default false)"
    )
    tax: float | None = Field(default=None, description="Tax value (default 0)")
    tax_type: str | None = Field(
        default=None, max_length=50, description='Tax type, e.g. "percentage" or "fixed"'
    )


class CategoryUpdateRequest(_PartialUpdate):
    """Partial update of a category."""

    non_nullable: ClassVar[tuple[str, ...]] = ("name", "image", "tax_applicability", "tax")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    image: str | None = Field(default=None, min_length=1)
    description: str | None = None
    tax_applicability: bool | None = None
    tax: float | None = None
    tax_type: str | None = Field(default=None, max_length=50)


class CategoryResponse(BaseModel):
    """Response for a category."""

    id: str
    name: str
    image: str
    description: str | None = None
    tax_applicability: bool
    tax: float
    tax_type: str | None = None
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Subcategory Schemas
# ============================================================================


class SubcategoryCreateRequest(BaseModel):
    """Request to create a subcategory.

    Leaving a tax field out (or null) inherits it from the category.
    """

    name: str = Field(..., min_length=1, max_length=200)
    image: str = Field(..., min_length=1)
    description: str | None = None
    category_id: str = Field(..., min_length=1, description="Parent category ID")
    tax_applicability: bool | None = Field(
        default=None, description="Overrides the category value when set"
    )
    tax: float | None = Field(default=None, description="Overrides the category value when set")


class SubcategoryUpdateRequest(_PartialUpdate):
    """Partial update of a subcategory. The parent category cannot change."""

    non_nullable: ClassVar[tuple[str, ...]] = ("name", "image")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    image: str | None = Field(default=None, min_length=1)
    description: str | None = None
    tax_applicability: bool | None = None
    tax: float | None = None


class SubcategoryResponse(BaseModel):
    """Response for a subcategory."""

    id: str
    name: str
    image: str
    description: str | None = None
    category_id: str
    category_name: str | None = Field(default=None, description="Name of the parent category")
    tax_applicability: bool | None = None
    tax: float | None = None
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Item Schemas
# ============================================================================


class ItemCreateRequest(BaseModel):
    """Request to create an item.

    Leaving a tax field out (or null) inherits it from the subcategory,
    or from the category when there is no subcategory.
    """

    name: str = Field(..., min_length=1, max_length=200)
    image: str = Field(..., min_length=1)
    description: str | None = None
    category_id: str = Field(..., min_length=1, description="Parent category ID")
    subcategory_id: str | None = Field(default=None, description="Optional parent subcategory ID")
    tax_applicability: bool | None = None
    tax: float | None = None
    base_amount: float = Field(..., description="Price before discount")
    discount: float | None = Field(default=None, description="Discount (default 0)")


class ItemUpdateRequest(_PartialUpdate):
    """Partial update of an item.

    The category cannot change. ``subcategory_id`` moves the item to
    another subcategory of the same category, or detaches it when null.
    Taxes are not re-resolved.
    """

    non_nullable: ClassVar[tuple[str, ...]] = (
        "name",
        "image",
        "tax_applicability",
        "tax",
        "base_amount",
        "discount",
    )

    name: str | None = Field(default=None, min_length=1, max_length=200)
    image: str | None = Field(default=None, min_length=1)
    description: str | None = None
    subcategory_id: str | None = Field(
        default=None, description="New parent subcategory ID, or null to detach"
    )
    tax_applicability: bool | None = None
    tax: float | None = None
    base_amount: float | None = None
    discount: float | None = None


class ItemResponse(BaseModel):
    """Response for an item. ``total_amount`` is always computed."""

    id: str
    name: str
    image: str
    description: str | None = None
    category_id: str
    category_name: str | None = None
    subcategory_id: str | None = None
    subcategory_name: str | None = None
    tax_applicability: bool
    tax: float
    base_amount: float
    discount: float
    total_amount: float = Field(..., description="base_amount - discount")
    created_at: datetime
    updated_at: datetime


class SubcategoryDeleteResponse(MessageResponse):
    """Response for a subcategory delete."""

    items_updated: int = Field(..., description="Items whose sub-category was cleared")
