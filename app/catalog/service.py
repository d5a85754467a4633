"""Catalog service for menu operations.

High-level service that combines repository operations with the
catalog's business rules: parent validation, tax inheritance at
creation time, and clearing item references when a subcategory is
deleted.
"""

from dataclasses import dataclass
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.models import Category, Item, Subcategory
from app.catalog.repository import (
    CategoryRepository,
    ItemRepository,
    SubcategoryRepository,
    commit,
)
from app.catalog.taxes import resolve_item_tax, resolve_subcategory_tax
from app.domain.exceptions import ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger()

CATEGORY_FIELDS = frozenset(
    {"name", "image", "description", "tax_applicability", "tax", "tax_type"}
)
SUBCATEGORY_FIELDS = frozenset({"name", "image", "description", "tax_applicability", "tax"})
ITEM_FIELDS = frozenset(
    {
        "name",
        "image",
        "description",
        "subcategory_id",
        "tax_applicability",
        "tax",
        "base_amount",
        "discount",
    }
)


# ============================================================================
# Read Views
# ============================================================================


@dataclass
class SubcategoryView:
    """Subcategory with its category name joined in."""

    subcategory: Subcategory
    category_name: str | None = None


@dataclass
class ItemView:
    """Item with its category and subcategory names joined in."""

    item: Item
    category_name: str | None = None
    subcategory_name: str | None = None


@dataclass
class DeleteSubcategoryResult:
    """Result of deleting a subcategory."""

    subcategory_id: str
    items_detached: int


# ============================================================================
# Catalog Service
# ============================================================================


class CatalogService:
    """Service for catalog operations.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(session)
            drinks = await service.create_category(name="Beverages", image="...")
            soda = await service.create_subcategory(
                name="Soda", image="...", category_id=drinks.id
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.categories = CategoryRepository(session)
        self.subcategories = SubcategoryRepository(session)
        self.items = ItemRepository(session)

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def create_category(
        self,
        name: str,
        image: str,
        description: str | None = None,
        tax_applicability: bool | None = None,
        tax: float | None = None,
        tax_type: str | None = None,
    ) -> Category:
        """Create a category.

        Raises:
            ConflictError: If a category with this name exists.
        """
        if await self.categories.get_by_name(name) is not None:
            raise ConflictError("Category already exists", details={"name": name})

        category = Category(
            name=name,
            image=image,
            description=description,
            tax_applicability=tax_applicability if tax_applicability is not None else False,
            tax=tax if tax is not None else 0,
            tax_type=tax_type,
        )
        await self.categories.save(category)
        await commit(self.session, "creating category")

        logger.info("Category created", category_id=category.id, name=name)
        return category

    async def list_categories(self) -> list[Category]:
        """Get all categories."""
        return list(await self.categories.find_all())

    async def get_category(self, category_id: str) -> Category:
        """Get a category by ID.

        Raises:
            NotFoundError: If the category does not exist.
        """
        category = await self.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    async def edit_category(self, category_id: str, changes: dict[str, Any]) -> Category:
        """Apply a partial update to a category.

        Unknown keys are ignored. Children keep the tax values they
        were created with.

        Raises:
            NotFoundError: If the category does not exist.
            ConflictError: If the new name is taken.
        """
        category = await self.get_category(category_id)
        changes = _restrict(changes, CATEGORY_FIELDS)
        await self.categories.update(category, changes)
        await commit(self.session, "updating category")

        logger.info("Category updated", category_id=category_id, fields=sorted(changes))
        return category

    # ------------------------------------------------------------------
    # Subcategories
    # ------------------------------------------------------------------

    async def create_subcategory(
        self,
        name: str,
        image: str,
        category_id: str,
        description: str | None = None,
        tax_applicability: bool | None = None,
        tax: float | None = None,
    ) -> SubcategoryView:
        """Create a subcategory under an existing category.

        Tax fields left as None are inherited from the category.

        Raises:
            NotFoundError: If the category does not exist.
        """
        category = await self.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Category", category_id, "Parent category not found")

        taxes = resolve_subcategory_tax(tax_applicability, tax, category)

        subcategory = Subcategory(
            name=name,
            image=image,
            description=description,
            category_id=category_id,
            tax_applicability=taxes.tax_applicability,
            tax=taxes.tax,
        )
        await self.subcategories.save(subcategory)
        await commit(self.session, "creating sub-category")

        logger.info(
            "Sub-category created",
            subcategory_id=subcategory.id,
            category_id=category_id,
            tax_applicability=taxes.tax_applicability,
            tax=taxes.tax,
        )
        return SubcategoryView(subcategory, category.name)

    async def list_subcategories(self) -> list[SubcategoryView]:
        """Get all subcategories."""
        return [SubcategoryView(*row) for row in await self.subcategories.find_all()]

    async def list_subcategories_by_category(self, category_id: str) -> list[SubcategoryView]:
        """Get subcategories of a category.

        Raises:
            NotFoundError: If the category does not exist.
        """
        await self.get_category(category_id)
        rows = await self.subcategories.find_all(category_id=category_id)
        return [SubcategoryView(*row) for row in rows]

    async def get_subcategory(self, subcategory_id: str) -> SubcategoryView:
        """Get a subcategory by ID.

        Raises:
            NotFoundError: If the subcategory does not exist.
        """
        row = await self.subcategories.get_row(subcategory_id)
        if row is None:
            raise NotFoundError("Sub-category", subcategory_id)
        return SubcategoryView(*row)

    async def edit_subcategory(
        self, subcategory_id: str, changes: dict[str, Any]
    ) -> SubcategoryView:
        """Apply a partial update to a subcategory.

        Raises:
            NotFoundError: If the subcategory does not exist.
        """
        subcategory = await self.subcategories.get_by_id(subcategory_id)
        if subcategory is None:
            raise NotFoundError("Sub-category", subcategory_id)

        changes = _restrict(changes, SUBCATEGORY_FIELDS)
        await self.subcategories.update(subcategory, changes)
        await commit(self.session, "updating sub-category")

        logger.info("Sub-category updated", subcategory_id=subcategory_id, fields=sorted(changes))
        return await self.get_subcategory(subcategory_id)

    async def delete_subcategory(self, subcategory_id: str) -> DeleteSubcategoryResult:
        """Delete a subcategory and detach its items.

        Items that pointed at the subcategory keep existing with
        ``subcategory_id`` set to None. The delete and the detach are
        committed together.

        Raises:
            NotFoundError: If the subcategory does not exist.
        """
        subcategory = await self.subcategories.get_by_id(subcategory_id)
        if subcategory is None:
            raise NotFoundError("Sub-category", subcategory_id)

        await self.subcategories.delete(subcategory)
        detached = await self.items.detach_subcategory(subcategory_id)
        await commit(self.session, "deleting sub-category")

        logger.info(
            "Sub-category deleted",
            subcategory_id=subcategory_id,
            items_detached=detached,
        )
        return DeleteSubcategoryResult(subcategory_id=subcategory_id, items_detached=detached)

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    async def create_item(
        self,
        name: str,
        image: str,
        category_id: str,
        base_amount: float,
        description: str | None = None,
        subcategory_id: str | None = None,
        tax_applicability: bool | None = None,
        tax: float | None = None,
        discount: float | None = None,
    ) -> ItemView:
        """Create an item.

        Tax fields left as None are taken from the subcategory (when
        given) and then from the category.

        Raises:
            NotFoundError: If the category or subcategory does not exist.
            ValidationError: If the subcategory belongs to another category.
        """
        category = await self.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Category", category_id, "Parent category not found")

        subcategory = None
        if subcategory_id:
            subcategory = await self._parent_subcategory(subcategory_id, category_id)

        taxes = resolve_item_tax(tax_applicability, tax, subcategory, category)

        item = Item(
            name=name,
            image=image,
            description=description,
            category_id=category_id,
            subcategory_id=subcategory_id or None,
            tax_applicability=taxes.tax_applicability,
            tax=taxes.tax,
            base_amount=base_amount,
            discount=discount if discount is not None else 0,
        )
        await self.items.save(item)
        await commit(self.session, "creating item")

        logger.info(
            "Item created",
            item_id=item.id,
            category_id=category_id,
            subcategory_id=item.subcategory_id,
            tax_applicability=taxes.tax_applicability,
            tax=taxes.tax,
        )
        return ItemView(
            item,
            category.name,
            subcategory.name if subcategory is not None else None,
        )

    async def list_items(self) -> list[ItemView]:
        """Get all items."""
        return [ItemView(*row) for row in await self.items.find_all()]

    async def list_items_by_category(self, category_id: str) -> list[ItemView]:
        """Get items of a category. Unknown categories give an empty list."""
        return [ItemView(*row) for row in await self.items.find_all(category_id=category_id)]

    async def list_items_by_subcategory(self, subcategory_id: str) -> list[ItemView]:
        """Get items of a subcategory. Unknown subcategories give an empty list."""
        rows = await self.items.find_all(subcategory_id=subcategory_id)
        return [ItemView(*row) for row in rows]

    async def search_items(self, name: str | None) -> list[ItemView]:
        """Search items by name, case-insensitively.

        Raises:
            ValidationError: If the search term is missing or empty.
        """
        if not name:
            raise ValidationError('Search query "name" is required.')
        rows = await self.items.find_all(name_contains=name)
        return [ItemView(*row) for row in rows]

    async def get_item(self, item_id: str) -> ItemView:
        """Get an item by ID.

        Raises:
            NotFoundError: If the item does not exist.
        """
        row = await self.items.get_row(item_id)
        if row is None:
            raise NotFoundError("Item", item_id)
        return ItemView(*row)

    async def edit_item(self, item_id: str, changes: dict[str, Any]) -> ItemView:
        """Apply a partial update to an item.

        ``total_amount`` follows the new ``base_amount``/``discount`` on
        the next read. ``subcategory_id`` may be set to another
        subcategory of the item's category, or to None to detach the
        item. The category itself cannot change.

        Raises:
            NotFoundError: If the item or the new subcategory does not exist.
            ValidationError: If the new subcategory belongs to another category.
        """
        item = await self.items.get_by_id(item_id)
        if item is None:
            raise NotFoundError("Item", item_id)

        changes = _restrict(changes, ITEM_FIELDS)
        if "subcategory_id" in changes:
            subcategory_id = changes["subcategory_id"] or None
            if subcategory_id is not None:
                await self._parent_subcategory(subcategory_id, item.category_id)
            changes["subcategory_id"] = subcategory_id

        await self.items.update(item, changes)
        await commit(self.session, "updating item")

        logger.info("Item updated", item_id=item_id, fields=sorted(changes))
        return await self.get_item(item_id)

    async def delete_item(self, item_id: str) -> None:
        """Delete an item.

        Raises:
            NotFoundError: If the item does not exist.
        """
        item = await self.items.get_by_id(item_id)
        if item is None:
            raise NotFoundError("Item", item_id)

        await self.items.delete(item)
        await commit(self.session, "deleting item")

        logger.info("Item deleted", item_id=item_id)

    async def _parent_subcategory(self, subcategory_id: str, category_id: str) -> Subcategory:
        """Look up the subcategory an item is filed under.

        Raises:
            NotFoundError: If the subcategory does not exist.
            ValidationError: If it belongs to a different category.
        """
        subcategory = await self.subcategories.get_by_id(subcategory_id)
        if subcategory is None:
            raise NotFoundError("Sub-category", subcategory_id, "Parent sub-category not found")
        if subcategory.category_id != category_id:
            raise ValidationError(
                "Sub-category does not belong to the provided category",
                details={
                    "subcategory_id": subcategory_id,
                    "category_id": category_id,
                    "subcategory_category_id": subcategory.category_id,
                },
            )
        return subcategory


def _restrict(changes: dict[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    """Keep only the keys a record may be edited on."""
    return {key: value for key, value in changes.items() if key in allowed}
