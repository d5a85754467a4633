"""Subcategory API endpoints.

Provides endpoints for managing sub-categories and reading the items
filed under one.
"""

from fastapi import APIRouter, status

from app.api.dependencies import CatalogServiceDep
from app.api.items import item_to_response
from app.api.schemas import (
    ErrorResponse,
    ItemResponse,
    SubcategoryCreateRequest,
    SubcategoryDeleteResponse,
    SubcategoryResponse,
    SubcategoryUpdateRequest,
)
from app.catalog.service import SubcategoryView

router = APIRouter(prefix="/subcategories", tags=["Subcategories"])


# ============================================================================
# Converters
# ============================================================================


def subcategory_to_response(view: SubcategoryView) -> SubcategoryResponse:
    """Convert a subcategory view to response schema."""
    subcategory = view.subcategory
    return SubcategoryResponse(
        id=subcategory.id,
        name=subcategory.name,
        image=subcategory.image,
        description=subcategory.description,
        category_id=subcategory.category_id,
        category_name=view.category_name,
        tax_applicability=subcategory.tax_applicability,
        tax=subcategory.tax,
        created_at=subcategory.created_at,
        updated_at=subcategory.updated_at,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=SubcategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Create sub-category",
    description="Create a sub-category. Missing tax fields are inherited from the category.",
)
async def create_subcategory(
    request: SubcategoryCreateRequest,
    service: CatalogServiceDep,
) -> SubcategoryResponse:
    """Create a new sub-category."""
    view = await service.create_subcategory(
        name=request.name,
        image=request.image,
        description=request.description,
        category_id=request.category_id,
        tax_applicability=request.tax_applicability,
        tax=request.tax,
    )
    return subcategory_to_response(view)


@router.get("", response_model=list[SubcategoryResponse], summary="List sub-categories")
async def list_subcategories(service: CatalogServiceDep) -> list[SubcategoryResponse]:
    """Get all sub-categories."""
    return [subcategory_to_response(view) for view in await service.list_subcategories()]


@router.get(
    "/{subcategory_id}",
    response_model=SubcategoryResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get sub-category",
)
async def get_subcategory(subcategory_id: str, service: CatalogServiceDep) -> SubcategoryResponse:
    """Get a sub-category by ID."""
    return subcategory_to_response(await service.get_subcategory(subcategory_id))


@router.patch(
    "/{subcategory_id}",
    response_model=SubcategoryResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Edit sub-category",
)
async def edit_subcategory(
    subcategory_id: str,
    request: SubcategoryUpdateRequest,
    service: CatalogServiceDep,
) -> SubcategoryResponse:
    """Edit a sub-category. Only fields present in the body are changed."""
    view = await service.edit_subcategory(
        subcategory_id, request.model_dump(exclude_unset=True)
    )
    return subcategory_to_response(view)


@router.delete(
    "/{subcategory_id}",
    response_model=SubcategoryDeleteResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete sub-category",
    description="Delete a sub-category. Its items are kept with no sub-category.",
)
async def delete_subcategory(
    subcategory_id: str,
    service: CatalogServiceDep,
) -> SubcategoryDeleteResponse:
    """Delete a sub-category and detach its items."""
    result = await service.delete_subcategory(subcategory_id)
    return SubcategoryDeleteResponse(
        message="Sub-category deleted successfully and items updated.",
        items_updated=result.items_detached,
    )


@router.get(
    "/{subcategory_id}/items",
    response_model=list[ItemResponse],
    summary="List items of a sub-category",
)
async def list_subcategory_items(
    subcategory_id: str,
    service: CatalogServiceDep,
) -> list[ItemResponse]:
    """Get items of a sub-category. Unknown IDs give an empty list."""
    views = await service.list_items_by_subcategory(subcategory_id)
    return [item_to_response(view) for view in views]
