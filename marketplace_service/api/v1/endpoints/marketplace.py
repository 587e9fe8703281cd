from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from marketplace_service.schemas.marketplace import (
    MarketplaceItemCreateRequest,
    MarketplaceItemResponse,
    MarketplaceItemUpdateRequest,
    MarketplaceSort,
    MarketplaceStatsResponse,
)
from marketplace_service.services.marketplace import (
    create_item,
    delete_item,
    fetch_marketplace_stats,
    like_item,
    list_featured_items,
    list_items,
    list_items_by_category,
    list_items_by_seller,
    search_items,
    toggle_item_featured,
    toggle_item_status,
    update_item,
    view_item,
)
from shared.constants import (
    MARKETPLACE_FEATURED_LIMIT,
    MARKETPLACE_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from shared.core.api_response import api_response
from shared.db.models import ItemAvailability, ItemCondition
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentAdmin
from shared.utils.exception_handlers import exception_handler

router = APIRouter()


def _serialize(items) -> list:
    return [MarketplaceItemResponse.model_validate(i) for i in items]


@router.get("")
@exception_handler
async def get_items(
    query: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    subcategory: Optional[str] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    condition: Optional[ItemCondition] = Query(None),
    availability: Optional[ItemAvailability] = Query(None),
    location: Optional[str] = Query(None),
    sort_by: MarketplaceSort = Query("newest"),
    page: int = Query(1, ge=1),
    limit: int = Query(MARKETPLACE_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    items, pagination, filters = await list_items(
        db,
        page,
        limit,
        query_text=query,
        category=category,
        subcategory=subcategory,
        min_price=min_price,
        max_price=max_price,
        condition=condition,
        availability=availability,
        location=location,
        sort_by=sort_by,
    )
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Marketplace items retrieved successfully",
        data={
            "items": _serialize(items),
            "pagination": pagination,
            "filters": filters,
        },
    )


@router.get("/search")
@exception_handler
async def search(
    q: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    items = await search_items(db, q)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Marketplace items retrieved successfully",
        data=_serialize(items),
    )


@router.get("/featured")
@exception_handler
async def get_featured_items(
    limit: int = Query(MARKETPLACE_FEATURED_LIMIT, ge=1, le=MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    items = await list_featured_items(db, limit)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Featured items retrieved successfully",
        data=_serialize(items),
    )


@router.get("/stats")
@exception_handler
async def get_marketplace_stats(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    stats = await fetch_marketplace_stats(db)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Marketplace statistics retrieved successfully",
        data=MarketplaceStatsResponse(**stats),
    )


@router.get("/category/{category}")
@exception_handler
async def get_items_by_category(
    category: str, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    items = await list_items_by_category(db, category)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Marketplace items retrieved successfully",
        data=_serialize(items),
    )


@router.get("/seller/{seller_id}")
@exception_handler
async def get_items_by_seller(
    seller_id: str, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    items = await list_items_by_seller(db, seller_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Marketplace items retrieved successfully",
        data=_serialize(items),
    )


@router.get("/{item_id}")
@exception_handler
async def get_item(item_id: str, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """Fetch one item; every call counts as a view."""
    item = await view_item(db, item_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Marketplace item retrieved successfully",
        data=MarketplaceItemResponse.model_validate(item),
    )


@router.post("/{item_id}/like")
@exception_handler
async def like(item_id: str, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    item = await like_item(db, item_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Item liked successfully",
        data={"id": item.id, "likes": item.likes},
    )


@router.post("", status_code=status.HTTP_201_CREATED)
@exception_handler
async def add_item(
    payload: MarketplaceItemCreateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    item = await create_item(db, payload)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Marketplace item created successfully",
        data=MarketplaceItemResponse.model_validate(item),
    )


@router.put("/{item_id}")
@exception_handler
async def edit_item(
    item_id: str,
    payload: MarketplaceItemUpdateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    item = await update_item(db, item_id, payload)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Marketplace item updated successfully",
        data=MarketplaceItemResponse.model_validate(item),
    )


@router.delete("/{item_id}")
@exception_handler
async def remove_item(
    item_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    await delete_item(db, item_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Marketplace item deleted successfully",
        data={"id": item_id},
    )


@router.patch("/{item_id}/toggle-status")
@exception_handler
async def toggle_status(
    item_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    item = await toggle_item_status(db, item_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Item status updated successfully",
        data=MarketplaceItemResponse.model_validate(item),
    )


@router.patch("/{item_id}/toggle-featured")
@exception_handler
async def toggle_featured(
    item_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    item = await toggle_item_featured(db, item_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Item featured status updated successfully",
        data=MarketplaceItemResponse.model_validate(item),
    )
