"""Item API endpoints.

Provides endpoints for creating, reading, searching, editing and
deleting menu items.
"""

from fastapi import APIRouter, Query, status

from app.api.dependencies import CatalogServiceDep
from app.api.schemas import (
    ErrorResponse,
    ItemCreateRequest,
    ItemResponse,
    ItemUpdateRequest,
    MessageResponse,
)
from app.catalog.service import ItemView

router = APIRouter(prefix="/items", tags=["Items"])


# ============================================================================
# Converters
# ============================================================================


def item_to_response(view: ItemView) -> ItemResponse:
    """Convert an item view to response schema."""
    item = view.item
    return ItemResponse(
        id=item.id,
        name=item.name,
        image=item.image,
        description=item.description,
        category_id=item.category_id,
        category_name=view.category_name,
        subcategory_id=item.subcategory_id,
        subcategory_name=view.subcategory_name,
        tax_applicability=item.tax_applicability,
        tax=item.tax,
        base_amount=item.base_amount,
        discount=item.discount,
        total_amount=item.total_amount,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Create item",
    description=(
        "Create an item under a category and, optionally, a sub-category of "
        "that category. Missing tax fields are inherited."
    ),
)
async def create_item(request: ItemCreateRequest, service: CatalogServiceDep) -> ItemResponse:
    """Create a new item.

    Raises:
        NotFoundError: If the category or sub-category does not exist.
        ValidationError: If the sub-category belongs to another category.
    """
    view = await service.create_item(
        name=request.name,
        image=request.image,
        description=request.description,
        category_id=request.category_id,
        subcategory_id=request.subcategory_id,
        tax_applicability=request.tax_applicability,
        tax=request.tax,
        base_amount=request.base_amount,
        discount=request.discount,
    )
    return item_to_response(view)


@router.get("", response_model=list[ItemResponse], summary="List items")
async def list_items(service: CatalogServiceDep) -> list[ItemResponse]:
    """Get all items."""
    return [item_to_response(view) for view in await service.list_items()]


# Must be declared before "/{item_id}"
@router.get(
    "/search",
    response_model=list[ItemResponse],
    responses={400: {"model": ErrorResponse}},
    summary="Search items",
    description="Case-insensitive substring search on item names.",
)
async def search_items(
    service: CatalogServiceDep,
    name: str | None = Query(default=None, description="Search term"),
) -> list[ItemResponse]:
    """Search items by name."""
    return [item_to_response(view) for view in await service.search_items(name)]


@router.get(
    "/{item_id}",
    response_model=ItemResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get item",
)
async def get_item(item_id: str, service: CatalogServiceDep) -> ItemResponse:
    """Get an item by ID."""
    return item_to_response(await service.get_item(item_id))


@router.patch(
    "/{item_id}",
    response_model=ItemResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Edit item",
)
async def edit_item(
    item_id: str,
    request: ItemUpdateRequest,
    service: CatalogServiceDep,
) -> ItemResponse:
    """Edit an item. Only fields present in the body are changed."""
    view = await service.edit_item(item_id, request.model_dump(exclude_unset=True))
    return item_to_response(view)


@router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete item",
)
async def delete_item(item_id: str, service: CatalogServiceDep) -> MessageResponse:
    """Delete an item."""
    await service.delete_item(item_id)
    return MessageResponse(message="Item deleted successfully.")
