"""Category API endpoints.

Provides endpoints for managing categories and the nested reads of
their sub-categories and items. Categories cannot be deleted.
"""

from fastapi import APIRouter, status

from app.api.dependencies import CatalogServiceDep
from app.api.items import item_to_response
from app.api.schemas import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    ErrorResponse,
    ItemResponse,
    SubcategoryResponse,
)
from app.api.subcategories import subcategory_to_response
from app.catalog.models import Category

router = APIRouter(prefix="/categories", tags=["Categories"])


# ============================================================================
# Converters
# ============================================================================


def category_to_response(category: Category) -> CategoryResponse:
    """Convert Category model to response schema."""
    return CategoryResponse(
        id=category.id,
        name=category.name,
        image=category.image,
        description=category.description,
        tax_applicability=category.tax_applicability,
        tax=category.tax,
        tax_type=category.tax_type,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create category",
)
async def create_category(
    request: CategoryCreateRequest,
    service: CatalogServiceDep,
) -> CategoryResponse:
    """Create a new category.

    Raises:
        ConflictError: If the name is already used.
    """
    category = await service.create_category(
        name=request.name,
        image=request.image,
        description=request.description,
        tax_applicability=request.tax_applicability,
        tax=request.tax,
        tax_type=request.tax_type,
    )
    return category_to_response(category)


@router.get("", response_model=list[CategoryResponse], summary="List categories")
async def list_categories(service: CatalogServiceDep) -> list[CategoryResponse]:
    """Get all categories."""
    return [category_to_response(c) for c in await service.list_categories()]


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get category",
)
async def get_category(category_id: str, service: CatalogServiceDep) -> CategoryResponse:
    """Get a category by ID."""
    return category_to_response(await service.get_category(category_id))


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Edit category",
    description="Partial update. Existing sub-categories and items keep their tax values.",
)
async def edit_category(
    category_id: str,
    request: CategoryUpdateRequest,
    service: CatalogServiceDep,
) -> CategoryResponse:
    """Edit a category. Only fields present in the body are changed."""
    category = await service.edit_category(category_id, request.model_dump(exclude_unset=True))
    return category_to_response(category)


@router.get(
    "/{category_id}/subcategories",
    response_model=list[SubcategoryResponse],
    responses={404: {"model": ErrorResponse}},
    summary="List sub-categories of a category",
)
async def list_category_subcategories(
    category_id: str,
    service: CatalogServiceDep,
) -> list[SubcategoryResponse]:
    """Get sub-categories of a category. The category must exist."""
    views = await service.list_subcategories_by_category(category_id)
    return [subcategory_to_response(view) for view in views]


@router.get(
    "/{category_id}/items",
    response_model=list[ItemResponse],
    summary="List items of a category",
)
async def list_category_items(
    category_id: str,
    service: CatalogServiceDep,
) -> list[ItemResponse]:
    """Get items of a category. Unknown IDs give an empty list."""
    views = await service.list_items_by_category(category_id)
    return [item_to_response(view) for view in views]
