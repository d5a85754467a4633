"""SQLAlchemy models for the menu catalog.

Defines Category, Subcategory and Item tables. References between
them are plain indexed id columns without foreign keys: a record only
remembers the id of its parent and the service looks the parent up
when it needs it.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Creation and modification timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )


class Category(TimestampMixin, Base):
    """Top-level catalog grouping.

    Attributes:
        id: Unique category identifier (UUID string).
        name: Category name, unique across the catalog.
        image: Image URL.
        description: Optional description.
        tax_applicability: Whether tax applies by default to children.
        tax: Default tax value for children.
        tax_type: Free-form tax type, e.g. "percentage" or "fixed".
    """

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    image: Mapped[str] = mapped_column(String(1000), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    tax_applicability: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    tax: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    tax_type: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, name={self.name})>"


class Subcategory(TimestampMixin, Base):
    """Mid-level grouping belonging to exactly one category.

    Tax fields are nullable. They are filled from the parent category
    when the subcategory is created and stay as stored afterwards.
    """

    __tablename__ = "subcategories"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    image: Mapped[str] = mapped_column(String(1000), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    tax_applicability: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    tax: Mapped[float | None] = mapped_column(Float, nullable=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Subcategory(id={self.id}, name={self.name}, category_id={self.category_id})>"


class Item(TimestampMixin, Base):
    """Leaf catalog entry with pricing and resolved tax settings."""

    __tablename__ = "items"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    image: Mapped[str] = mapped_column(String(1000), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    subcategory_id: Mapped[str | None] = mapped_column(
        String(36), nullable=True, default=None, index=True
    )
    tax_applicability: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    tax: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    base_amount: Mapped[float] = mapped_column(Float, nullable=False)
    discount: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Item(id={self.id}, name={self.name})>"

    @property
    def total_amount(self) -> float:
        """Get price after discount. Computed on every access, never stored."""
        return self.base_amount - (self.discount or 0)
