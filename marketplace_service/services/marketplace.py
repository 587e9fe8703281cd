from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from fastapi import status
from sqlalchemy import String, cast, distinct, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from marketplace_service.schemas.marketplace import (
    MarketplaceItemCreateRequest,
    MarketplaceItemUpdateRequest,
)
from shared.constants import MARKETPLACE_FEATURED_LIMIT, MARKETPLACE_SEARCH_LIMIT
from shared.core.api_response import api_response
from shared.core.logging_config import get_logger
from shared.db.models import ItemAvailability, ItemCondition, MarketplaceItem
from shared.utils.data_utils import to_money
from shared.utils.pagination import like_pattern, paginate

logger = get_logger(__name__)

SORT_ORDERS = {
    "price_asc": MarketplaceItem.price.asc(),
    "price_desc": MarketplaceItem.price.desc(),
    "newest": MarketplaceItem.created_at.desc(),
    "oldest": MarketplaceItem.created_at.asc(),
    "popular": MarketplaceItem.views.desc(),
    "rating": MarketplaceItem.seller_rating.desc(),
}


def item_not_found_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_404_NOT_FOUND,
        message="Marketplace item not found",
        log_error=True,
    )


def _item_values(values: Dict[str, Any]) -> Dict[str, Any]:
    # seller_id, seller_rating and city are column copies of the JSON documents
    if values.get("seller"):
        values["seller_id"] = values["seller"]["id"]
        values["seller_rating"] = values["seller"].get("rating") or 0.0
    if values.get("location"):
        values["city"] = values["location"]["city"]
    return values


def _active_items():
    return select(MarketplaceItem).where(MarketplaceItem.is_active.is_(True))


async def create_item(
    db: AsyncSession, payload: MarketplaceItemCreateRequest
) -> MarketplaceItem:
    item = MarketplaceItem(**_item_values(payload.model_dump()))
    db.add(item)
    await db.commit()
    logger.info("Marketplace item %s listed by %s", item.id, item.seller_id)
    return item


async def get_item_or_404(db: AsyncSession, item_id: str) -> MarketplaceItem:
    item = await db.get(MarketplaceItem, item_id)
    if item is None:
        item_not_found_response()
    return item


async def _filter_options(db: AsyncSession) -> Dict[str, Any]:
    categories = await db.execute(
        select(distinct(MarketplaceItem.category))
        .where(MarketplaceItem.is_active.is_(True))
        .order_by(MarketplaceItem.category)
    )
    subcategories = await db.execute(
        select(distinct(MarketplaceItem.subcategory))
        .where(
            MarketplaceItem.is_active.is_(True),
            MarketplaceItem.subcategory.is_not(None),
        )
        .order_by(MarketplaceItem.subcategory)
    )
    price_range = await db.execute(
        select(
            func.min(MarketplaceItem.price), func.max(MarketplaceItem.price)
        ).where(MarketplaceItem.is_active.is_(True))
    )
    min_price, max_price = price_range.one()
    return {
        "categories": [c for c in categories.scalars().all() if c],
        "subcategories": [s for s in subcategories.scalars().all() if s],
        "price_range": {"min": to_money(min_price), "max": to_money(max_price)},
    }


async def list_items(
    db: AsyncSession,
    page: int,
    limit: int,
    query_text: Optional[str] = None,
    category: Optional[str] = None,
    subcategory: Optional[str] = None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
    condition: Optional[ItemCondition] = None,
    availability: Optional[ItemAvailability] = None,
    location: Optional[str] = None,
    sort_by: str = "newest",
) -> Tuple[List[MarketplaceItem], Dict[str, Any], Dict[str, Any]]:
    """Active items page, its pagination block and the filter options."""
    query = _active_items()

    if query_text:
        pattern = like_pattern(query_text)
        query = query.where(
            or_(
                MarketplaceItem.title.ilike(pattern, escape="\\"),
                MarketplaceItem.description.ilike(pattern, escape="\\"),
                cast(MarketplaceItem.tags, String).ilike(pattern, escape="\\"),
            )
        )
    if category:
        query = query.where(
            MarketplaceItem.category.ilike(like_pattern(category), escape="\\")
        )
    if subcategory:
        query = query.where(
            MarketplaceItem.subcategory.ilike(like_pattern(subcategory), escape="\\")
        )
    if min_price is not None:
        query = query.where(MarketplaceItem.price >= min_price)
    if max_price is not None:
        query = query.where(MarketplaceItem.price <= max_price)
    if condition is not None:
        query = query.where(MarketplaceItem.condition == condition)
    if availability is not None:
        query = query.where(MarketplaceItem.availability == availability)
    if location:
        query = query.where(
            MarketplaceItem.city.ilike(like_pattern(location), escape="\\")
        )

    query = query.order_by(SORT_ORDERS.get(sort_by, SORT_ORDERS["newest"]))
    items, pagination = await paginate(db, query, page, limit)
    return items, pagination, await _filter_options(db)


async def search_items(
    db: AsyncSession, term: str, limit: int = MARKETPLACE_SEARCH_LIMIT
) -> List[MarketplaceItem]:
    pattern = like_pattern(term)
    result = await db.execute(
        _active_items()
        .where(
            or_(
                MarketplaceItem.title.ilike(pattern, escape="\\"),
                MarketplaceItem.description.ilike(pattern, escape="\\"),
                MarketplaceItem.category.ilike(pattern, escape="\\"),
                MarketplaceItem.subcategory.ilike(pattern, escape="\\"),
                cast(MarketplaceItem.tags, String).ilike(pattern, escape="\\"),
            )
        )
        .order_by(MarketplaceItem.views.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def list_featured_items(
    db: AsyncSession, limit: int = MARKETPLACE_FEATURED_LIMIT
) -> List[MarketplaceItem]:
    result = await db.execute(
        _active_items()
        .where(MarketplaceItem.is_featured.is_(True))
        .order_by(MarketplaceItem.created_at.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def list_items_by_category(
    db: AsyncSession, category: str
) -> List[MarketplaceItem]:
    result = await db.execute(
        _active_items()
        .where(MarketplaceItem.category.ilike(like_pattern(category), escape="\\"))
        .order_by(MarketplaceItem.created_at.desc())
    )
    return list(result.scalars().all())


async def list_items_by_seller(
    db: AsyncSession, seller_id: str
) -> List[MarketplaceItem]:
    result = await db.execute(
        _active_items()
        .where(MarketplaceItem.seller_id == seller_id)
        .order_by(MarketplaceItem.created_at.desc())
    )
    return list(result.scalars().all())


async def fetch_marketplace_stats(db: AsyncSession) -> Dict[str, Any]:
    result = await db.execute(
        select(
            func.count(MarketplaceItem.id),
            func.count(distinct(MarketplaceItem.category)),
            func.count(distinct(MarketplaceItem.seller_id)),
            func.avg(MarketplaceItem.price),
            func.count(MarketplaceItem.id).filter(
                MarketplaceItem.is_featured.is_(True)
            ),
            func.count(MarketplaceItem.id).filter(
                MarketplaceItem.is_active.is_(True)
            ),
        )
    )
    total, categories, sellers, average_price, featured, active = result.one()
    return {
        "total_items": total,
        "total_categories": categories,
        "total_sellers": sellers,
        "average_price": to_money(average_price),
        "featured_items": featured,
        "active_items": active,
    }


async def _increment(db: AsyncSession, item_id: str, column: str) -> MarketplaceItem:
    item = await get_item_or_404(db, item_id)
    counter = getattr(MarketplaceItem, column)
    # Counter bumps happen in SQL so concurrent requests do not lose updates
    await db.execute(
        update(MarketplaceItem)
        .where(MarketplaceItem.id == item_id)
        .values({column: counter + 1})
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    await db.refresh(item)
    return item


async def view_item(db: AsyncSession, item_id: str) -> MarketplaceItem:
    return await _increment(db, item_id, "views")


async def like_item(db: AsyncSession, item_id: str) -> MarketplaceItem:
    return await _increment(db, item_id, "likes")


async def update_item(
    db: AsyncSession, item_id: str, payload: MarketplaceItemUpdateRequest
) -> MarketplaceItem:
    item = await get_item_or_404(db, item_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in _item_values(changes).items():
        setattr(item, field, value)
    await db.commit()
    return item


async def delete_item(db: AsyncSession, item_id: str) -> None:
    item = await get_item_or_404(db, item_id)
    await db.delete(item)
    await db.commit()
    logger.info("Marketplace item %s deleted", item_id)


async def toggle_item_status(db: AsyncSession, item_id: str) -> MarketplaceItem:
    item = await get_item_or_404(db, item_id)
    item.is_active = not item.is_active
    await db.commit()
    return item


async def toggle_item_featured(db: AsyncSession, item_id: str) -> MarketplaceItem:
    item = await get_item_or_404(db, item_id)
    item.is_featured = not item.is_featured
    await db.commit()
    return item
