"""Catalog repositories for database operations.

Provides CRUD operations for categories, subcategories and items.
Reads of subcategories and items outer-join the parent tables so the
parent names come back with each row.
"""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, NamedTuple

from sqlalchemy import Select, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.models import Category, Item, Subcategory
from app.domain.exceptions import ConflictError, StorageError

class SubcategoryRow(NamedTuple):
    """A subcategory with the name of its category, if that still exists."""

    subcategory: Subcategory
    category_name: str | None


class ItemRow(NamedTuple):
    """An item with the names of its category and subcategory."""

    item: Item
    category_name: str | None
    subcategory_name: str | None


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Translate SQLAlchemy errors into domain errors.

    Args:
        action: Description used in the error message, e.g. "creating item".

    Raises:
        ConflictError: On unique constraint violations.
        StorageError: On any other database failure.
    """
    try:
        yield
    except IntegrityError as e:
        raise ConflictError(
            f"Error {action}: constraint violated",
            details={"error": str(e.orig)},
        ) from e
    except SQLAlchemyError as e:
        raise StorageError(action, str(e)) from e


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term is matched literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class _BaseRepository:
    """Shared session handling."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def _add(self, record: Any, action: str) -> Any:
        with storage_errors(action):
            self.session.add(record)
            await self.session.flush()
        return record

    async def _update(self, record: Any, changes: dict[str, Any], action: str) -> Any:
        with storage_errors(action):
            for field, value in changes.items():
                setattr(record, field, value)
            await self.session.flush()
            # updated_at is expired by onupdate
            await self.session.refresh(record)
        return record


class CategoryRepository(_BaseRepository):
    """Repository for Category database operations."""

    async def save(self, category: Category) -> Category:
        """Insert a category."""
        return await self._add(category, "creating category")

    async def get_by_id(self, category_id: str) -> Category | None:
        """Get category by ID."""
        with storage_errors("fetching category"):
            return await self.session.get(Category, category_id)

    async def get_by_name(self, name: str) -> Category | None:
        """Get category by its exact name."""
        with storage_errors("fetching category"):
            result = await self.session.execute(
                select(Category).where(Category.name == name)
            )
            return result.scalar_one_or_none()

    async def find_all(self) -> Sequence[Category]:
        """Get all categories in creation order."""
        with storage_errors("fetching categories"):
            result = await self.session.execute(
                select(Category).order_by(Category.created_at, Category.id)
            )
            return result.scalars().all()

    async def update(self, category: Category, changes: dict[str, Any]) -> Category:
        """Apply field changes to a category."""
        return await self._update(category, changes, "updating category")


class SubcategoryRepository(_BaseRepository):
    """Repository for Subcategory database operations."""

    def _joined(self) -> Select:
        return select(Subcategory, Category.name).outerjoin(
            Category, Category.id == Subcategory.category_id
        )

    async def save(self, subcategory: Subcategory) -> Subcategory:
        """Insert a subcategory."""
        return await self._add(subcategory, "creating sub-category")

    async def get_by_id(self, subcategory_id: str) -> Subcategory | None:
        """Get subcategory by ID, without the join."""
        with storage_errors("fetching sub-category"):
            return await self.session.get(Subcategory, subcategory_id)

    async def get_row(self, subcategory_id: str) -> SubcategoryRow | None:
        """Get subcategory by ID together with its category name."""
        with storage_errors("fetching sub-category"):
            result = await self.session.execute(
                self._joined().where(Subcategory.id == subcategory_id)
            )
            row = result.one_or_none()
        return SubcategoryRow(*row) if row is not None else None

    async def find_all(self, category_id: str | None = None) -> list[SubcategoryRow]:
        """Get subcategories with category names.

        Args:
            category_id: Optional parent category filter.

        Returns:
            Rows in creation order.
        """
        query = self._joined()
        if category_id is not None:
            query = query.where(Subcategory.category_id == category_id)
        query = query.order_by(Subcategory.created_at, Subcategory.id)

        with storage_errors("fetching sub-categories"):
            result = await self.session.execute(query)
            return [SubcategoryRow(*row) for row in result.all()]

    async def update(self, subcategory: Subcategory, changes: dict[str, Any]) -> Subcategory:
        """Apply field changes to a subcategory."""
        return await self._update(subcategory, changes, "updating sub-category")

    async def delete(self, subcategory: Subcategory) -> None:
        """Delete a subcategory."""
        with storage_errors("deleting sub-category"):
            await self.session.delete(subcategory)
            await self.session.flush()


class ItemRepository(_BaseRepository):
    """Repository for Item database operations."""

    def _joined(self) -> Select:
        return (
            select(Item, Category.name, Subcategory.name)
            .outerjoin(Category, Category.id == Item.category_id)
            .outerjoin(Subcategory, Subcategory.id == Item.subcategory_id)
        )

    async def save(self, item: Item) -> Item:
        """Insert an item."""
        return await self._add(item, "creating item")

    async def get_by_id(self, item_id: str) -> Item | None:
        """Get item by ID, without the join."""
        with storage_errors("fetching item"):
            return await self.session.get(Item, item_id)

    async def get_row(self, item_id: str) -> ItemRow | None:
        """Get item by ID together with its parent names."""
        with storage_errors("fetching item"):
            result = await self.session.execute(self._joined().where(Item.id == item_id))
            row = result.one_or_none()
        return ItemRow(*row) if row is not None else None

    async def find_all(
        self,
        category_id: str | None = None,
        subcategory_id: str | None = None,
        name_contains: str | None = None,
    ) -> list[ItemRow]:
        """Find items with parent names.

        Args:
            category_id: Filter by category.
            subcategory_id: Filter by subcategory.
            name_contains: Case-insensitive substring of the item name.

        Returns:
            Rows in creation order.
        """
        query = self._joined()

        if category_id is not None:
            query = query.where(Item.category_id == category_id)

        if subcategory_id is not None:
            query = query.where(Item.subcategory_id == subcategory_id)

        if name_contains:
            pattern = f"%{_escape_like(name_contains)}%"
            query = query.where(Item.name.ilike(pattern, escape="\\"))

        query = query.order_by(Item.created_at, Item.id)

        action = "searching items" if name_contains else "fetching items"
        with storage_errors(action):
            result = await self.session.execute(query)
            return [ItemRow(*row) for row in result.all()]

    async def update(self, item: Item, changes: dict[str, Any]) -> Item:
        """Apply field changes to an item."""
        return await self._update(item, changes, "updating item")

    async def delete(self, item: Item) -> None:
        """Delete an item."""
        with storage_errors("deleting item"):
            await self.session.delete(item)
            await self.session.flush()

    async def detach_subcategory(self, subcategory_id: str) -> int:
        """Clear the subcategory reference of every item pointing at it.

        Args:
            subcategory_id: Subcategory being removed.

        Returns:
            Number of items updated.
        """
        with storage_errors("updating items of deleted sub-category"):
            result = await self.session.execute(
                update(Item)
                .where(Item.subcategory_id == subcategory_id)
                .values(subcategory_id=None)
            )
            return result.rowcount or 0


async def commit(session: AsyncSession, action: str) -> None:
    """Commit the session, translating database errors."""
    with storage_errors(action):
        await session.commit()
