"""Menu catalog.

Category / subcategory / item models, their repositories, the tax
inheritance rule and the catalog service that ties them together.
"""

from app.catalog.models import Category, Item, Subcategory
from app.catalog.repository import CategoryRepository, ItemRepository, SubcategoryRepository
from app.catalog.service import (
    CatalogService,
    DeleteSubcategoryResult,
    ItemView,
    SubcategoryView,
)
from app.catalog.taxes import TaxSettings, resolve_item_tax, resolve_subcategory_tax

__all__ = [
    # Models
    "Category",
    "Item",
    "Subcategory",
    # Repositories
    "CategoryRepository",
    "ItemRepository",
    "SubcategoryRepository",
    # Tax rule
    "TaxSettings",
    "resolve_item_tax",
    "resolve_subcategory_tax",
    # Service
    "CatalogService",
    "DeleteSubcategoryResult",
    "ItemView",
    "SubcategoryView",
]
