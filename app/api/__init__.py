"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from app.api.categories import router as categories_router
from app.api.health import router as health_router
from app.api.items import router as items_router
from app.api.subcategories import router as subcategories_router

__all__ = [
    "categories_router",
    "health_router",
    "items_router",
    "subcategories_router",
]
