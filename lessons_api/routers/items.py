"""
Items router.

Provides REST API endpoints for:
- Listing items with category filter and pagination
- Reading, creating, replacing and partially updating items
- Deleting items (bearer token required)
- Purchasing stock

Missing items raise ItemNotFoundError (404); purchases beyond the stock
on hand raise InsufficientStockError (400).
"""

import structlog
from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, Path, Query, Response, status

from lessons_api.dependencies import (
    get_item_repository,
    get_pagination_params,
    PaginationParams,
    verify_token
)
from lessons_api.exceptions import ItemNotFoundError
from lessons_api.metrics import lesson_metrics
from lessons_api.models.items import (
    Category,
    ErrorResponse,
    Item,
    ItemCreate,
    ItemUpdate,
    PurchaseRequest
)
from lessons_api.repositories.item_repo import ItemRepository

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/items",
    tags=["Items"],
    responses={
        404: {"model": ErrorResponse, "description": "Item not found"},
        422: {"description": "Validation Error"}
    }
)

ItemId = Annotated[int, Path(ge=1, description="Item ID")]


@router.get(
    "",
    response_model=List[Item],
    status_code=status.HTTP_200_OK,
    summary="List Items",
    description="""
    List stored items ordered by ID.

    **Query Parameters:**
    - category: Only return items in this category
    - limit: Page size (clamped to the configured maximum)
    - offset: Number of items to skip

    The number of matching items before pagination is returned in the
    `X-Total-Count` header.
    """
)
async def list_items(
    response: Response,
    category: Optional[Category] = Query(None, description="Filter by category"),
    pagination: PaginationParams = Depends(get_pagination_params),
    repo: ItemRepository = Depends(get_item_repository)
) -> List[Item]:
    items, total = repo.list_items(
        category=category,
        offset=pagination.offset,
        limit=pagination.limit
    )
    response.headers["X-Total-Count"] = str(total)

    logger.debug(
        "items_listed",
        category=category.value if category else None,
        returned=len(items),
        total=total
    )
    return items


@router.get(
    "/{item_id}",
    response_model=Item,
    status_code=status.HTTP_200_OK,
    summary="Get Item"
)
async def get_item(
    item_id: ItemId,
    repo: ItemRepository = Depends(get_item_repository)
) -> Item:
    """Return one item or 404."""
    item = repo.get_item(item_id)
    if item is None:
        logger.warning("item_not_found", item_id=item_id)
        raise ItemNotFoundError(item_id)
    return item


@router.post(
    "",
    response_model=Item,
    status_code=status.HTTP_201_CREATED,
    summary="Create Item",
    description="""
    Create a new item.

    **Request Body:**
    - name: 1-100 characters, not blank
    - description: optional, up to 500 characters
    - price: greater than 0
    - quantity: 0 or more (default 0)
    - category: one of the item categories (default "other")

    **Error Responses:**
    - 422: Validation error
    """
)
async def create_item(
    data: ItemCreate,
    repo: ItemRepository = Depends(get_item_repository)
) -> Item:
    item = repo.create_item(data)

    lesson_metrics.items_created.labels(category=item.category.value).inc()
    lesson_metrics.items_stored.set(repo.count())

    return item


@router.put(
    "/{item_id}",
    response_model=Item,
    status_code=status.HTTP_200_OK,
    summary="Replace Item"
)
async def replace_item(
    item_id: ItemId,
    data: ItemCreate,
    repo: ItemRepository = Depends(get_item_repository)
) -> Item:
    """Replace every field of an item."""
    item = repo.replace_item(item_id, data)
    if item is None:
        logger.warning("item_not_found", item_id=item_id)
        raise ItemNotFoundError(item_id)
    return item


@router.patch(
    "/{item_id}",
    response_model=Item,
    status_code=status.HTTP_200_OK,
    summary="Update Item"
)
async def update_item(
    item_id: ItemId,
    changes: ItemUpdate,
    repo: ItemRepository = Depends(get_item_repository)
) -> Item:
    """Apply only the fields present in the body."""
    item = repo.update_item(item_id, changes)
    if item is None:
        logger.warning("item_not_found", item_id=item_id)
        raise ItemNotFoundError(item_id)
    return item


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Item",
    description="""
    Delete an item.

    **Authentication:** Required (bearer token)

    **Error Responses:**
    - 401: Missing or invalid token
    - 404: Item not found
    """,
    responses={401: {"model": ErrorResponse, "description": "Unauthorized"}},
    dependencies=[Depends(verify_token)]
)
async def delete_item(
    item_id: ItemId,
    repo: ItemRepository = Depends(get_item_repository)
) -> Response:
    if not repo.delete_item(item_id):
        logger.warning("item_not_found", item_id=item_id)
        raise ItemNotFoundError(item_id)

    lesson_metrics.items_deleted.inc()
    lesson_metrics.items_stored.set(repo.count())

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{item_id}/purchase",
    response_model=Item,
    status_code=status.HTTP_200_OK,
    summary="Purchase Item",
    description="""
    Take units out of stock.

    **Error Responses:**
    - 400: Not enough units in stock
    - 404: Item not found
    """,
    responses={400: {"model": ErrorResponse, "description": "Insufficient stock"}}
)
async def purchase_item(
    item_id: ItemId,
    purchase: PurchaseRequest,
    repo: ItemRepository = Depends(get_item_repository)
) -> Item:
    item = repo.purchase_item(item_id, purchase.quantity)
    if item is None:
        logger.warning("item_not_found", item_id=item_id)
        raise ItemNotFoundError(item_id)
    return item
