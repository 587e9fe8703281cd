"""
Creator analytics, earnings and the money-moving media operations
(likes, purchases and withdrawals).
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from media_service.schemas.media import WithdrawalRequest
from media_service.services.media import get_media_or_404, get_owned_media_or_404
from shared.constants import (
    MONTHLY_WINDOW,
    PENDING_WITHDRAWAL_STATUSES,
    RECENT_ITEMS_LIMIT,
)
from shared.core.exceptions import ConflictError, NotFoundError, ValidationError
from shared.core.logging_config import get_logger
from shared.db.models import (
    Media,
    MediaLike,
    MediaSale,
    SaleStatus,
    User,
    Withdrawal,
    WithdrawalStatus,
)
from shared.db.sessions.database import atomic
from shared.utils.data_utils import ZERO, to_money
from shared.utils.execution_time import measure_execution_time
from shared.utils.timezone_utils import ensure_utc, last_month_keys, month_key

logger = get_logger(__name__)


async def _media_totals(db: AsyncSession, user_id: str) -> Dict[str, Any]:
    result = await db.execute(
        select(
            func.count(Media.id),
            func.coalesce(func.sum(Media.likes), 0),
            func.coalesce(func.sum(Media.views), 0),
            func.coalesce(func.sum(Media.sales), 0),
            func.coalesce(func.sum(Media.total_earnings), 0),
        ).where(Media.uploaded_by == user_id)
    )
    images, likes, views, sales, earnings = result.one()
    return {
        "total_images": images,
        "total_likes": int(likes),
        "total_views": int(views),
        "total_sales": int(sales),
        "total_earnings": to_money(earnings),
    }


async def _withdrawal_totals(db: AsyncSession, user_id: str) -> Dict[str, Decimal]:
    result = await db.execute(
        select(Withdrawal.status, func.sum(Withdrawal.amount))
        .where(Withdrawal.user_id == user_id)
        .group_by(Withdrawal.status)
    )
    withdrawn = pending = ZERO
    for withdrawal_status, amount in result.all():
        value = WithdrawalStatus(withdrawal_status).value
        if value == WithdrawalStatus.COMPLETED.value:
            withdrawn += to_money(amount)
        elif value in PENDING_WITHDRAWAL_STATUSES:
            pending += to_money(amount)
    return {"total_withdrawn": withdrawn, "pending_withdrawals": pending}


async def compute_balance(db: AsyncSession, user_id: str) -> Dict[str, Any]:
    """
    Earnings minus completed and in-flight withdrawals.

    Rejected withdrawals release their amount back to the balance.
    """
    totals = await _media_totals(db, user_id)
    withdrawals = await _withdrawal_totals(db, user_id)
    available = (
        totals["total_earnings"]
        - withdrawals["total_withdrawn"]
        - withdrawals["pending_withdrawals"]
    )
    return {**totals, **withdrawals, "available_balance": to_money(available)}


async def _monthly_earnings(db: AsyncSession, user_id: str) -> List[Dict[str, Any]]:
    keys = last_month_keys(MONTHLY_WINDOW)
    window_start = datetime(
        int(keys[0][:4]), int(keys[0][5:]), 1, tzinfo=timezone.utc
    )
    result = await db.execute(
        select(MediaSale.created_at, MediaSale.amount).where(
            MediaSale.seller_id == user_id,
            MediaSale.status == SaleStatus.COMPLETED,
            MediaSale.created_at >= window_start,
        )
    )
    buckets = {key: ZERO for key in keys}
    for created_at, amount in result.all():
        key = month_key(ensure_utc(created_at))
        if key in buckets:
            buckets[key] += to_money(amount)
    return [{"month": key, "earnings": value} for key, value in buckets.items()]


async def _category_breakdown(
    db: AsyncSession, user_id: str
) -> List[Dict[str, Any]]:
    result = await db.execute(
        select(
            Media.category,
            func.count(Media.id),
            func.coalesce(func.sum(Media.likes), 0),
            func.coalesce(func.sum(Media.views), 0),
            func.coalesce(func.sum(Media.sales), 0),
            func.coalesce(func.sum(Media.total_earnings), 0),
        )
        .where(Media.uploaded_by == user_id)
        .group_by(Media.category)
    )
    return [
        {
            "category": getattr(category, "value", category),
            "count": count,
            "likes": int(likes),
            "views": int(views),
            "sales": int(sales),
            "earnings": to_money(earnings),
        }
        for category, count, likes, views, sales, earnings in result.all()
    ]


async def _recent_sales(
    db: AsyncSession, user_id: str, limit: int = RECENT_ITEMS_LIMIT
) -> List[Dict[str, Any]]:
    result = await db.execute(
        select(MediaSale, Media.title, Media.original_name, Media.url)
        .join(Media, Media.id == MediaSale.media_id)
        .where(MediaSale.seller_id == user_id)
        .order_by(MediaSale.created_at.desc())
        .limit(limit)
    )
    return [
        {
            "id": sale.id,
            "media_id": sale.media_id,
            "media_title": title or original_name,
            "media_url": url,
            "buyer_id": sale.buyer_id,
            "amount": to_money(sale.amount),
            "status": sale.status,
            "created_at": sale.created_at,
        }
        for sale, title, original_name, url in result.all()
    ]


async def _recent_withdrawals(
    db: AsyncSession, user_id: str, limit: int = RECENT_ITEMS_LIMIT
) -> List[Withdrawal]:
    result = await db.execute(
        select(Withdrawal)
        .where(Withdrawal.user_id == user_id)
        .order_by(Withdrawal.created_at.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


@measure_execution_time("UserAnalytics")
async def fetch_user_analytics(db: AsyncSession, user_id: str) -> Dict[str, Any]:
    balance = await compute_balance(db, user_id)
    images = balance["total_images"]
    overview = {
        **balance,
        "average_earnings_per_image": (
            to_money(balance["total_earnings"] / images) if images else ZERO
        ),
    }

    media = await db.execute(
        select(Media)
        .where(Media.uploaded_by == user_id)
        .order_by(Media.created_at.desc())
    )
    return {
        "overview": overview,
        "recent_sales": await _recent_sales(db, user_id),
        "monthly_earnings": await _monthly_earnings(db, user_id),
        "category_breakdown": await _category_breakdown(db, user_id),
        "media": list(media.scalars().all()),
        "withdrawals": await _recent_withdrawals(db, user_id),
    }


async def fetch_user_earnings(db: AsyncSession, user_id: str) -> Dict[str, Any]:
    balance = await compute_balance(db, user_id)
    sales = await db.execute(
        select(MediaSale)
        .where(MediaSale.seller_id == user_id)
        .order_by(MediaSale.created_at.desc())
    )
    withdrawals = await db.execute(
        select(Withdrawal)
        .where(Withdrawal.user_id == user_id)
        .order_by(Withdrawal.created_at.desc())
    )
    return {
        "total_earnings": balance["total_earnings"],
        "total_sales": balance["total_sales"],
        "total_withdrawn": balance["total_withdrawn"],
        "pending_withdrawals": balance["pending_withdrawals"],
        "available_balance": balance["available_balance"],
        "sales": list(sales.scalars().all()),
        "withdrawals": list(withdrawals.scalars().all()),
    }


async def request_withdrawal(
    db: AsyncSession, user_id: str, payload: WithdrawalRequest
) -> Withdrawal:
    """
    Create a pending withdrawal if the balance covers it.

    The user row is locked for the duration of the check so two concurrent
    requests cannot both spend the same balance.
    """
    if payload.amount <= 0:
        raise ValidationError("Invalid amount")

    async with atomic(db):
        await db.execute(select(User.id).where(User.id == user_id).with_for_update())
        balance = await compute_balance(db, user_id)
        if payload.amount > balance["available_balance"]:
            raise ValidationError(
                "Insufficient balance",
                details={"available_balance": str(balance["available_balance"])},
            )
        withdrawal = Withdrawal(
            user_id=user_id,
            amount=payload.amount,
            status=WithdrawalStatus.PENDING,
            account_details=payload.account_details,
            notes=payload.notes,
        )
        db.add(withdrawal)

    logger.info(
        "Withdrawal %s of %s requested by %s", withdrawal.id, payload.amount, user_id
    )
    return withdrawal


async def fetch_media_analytics(
    db: AsyncSession, media_id: str, user_id: str
) -> Dict[str, Any]:
    media = await get_owned_media_or_404(db, media_id, user_id)
    likes = await db.execute(
        select(MediaLike)
        .where(MediaLike.media_id == media_id)
        .order_by(MediaLike.created_at.desc())
    )
    sales = await db.execute(
        select(MediaSale)
        .where(MediaSale.media_id == media_id)
        .order_by(MediaSale.created_at.desc())
    )
    return {
        "media": media,
        "likes": list(likes.scalars().all()),
        "sales": list(sales.scalars().all()),
    }


async def find_media_like(
    db: AsyncSession, media_id: str, user_id: str
) -> Optional[MediaLike]:
    return await db.scalar(
        select(MediaLike).where(
            MediaLike.media_id == media_id, MediaLike.user_id == user_id
        )
    )


async def toggle_media_like(
    db: AsyncSession, media_id: str, user_id: str
) -> Dict[str, Any]:
    """
    Like the media, or remove the like if the user already gave one.

    A concurrent request for the same user and media can change the row
    between the lookup and the commit. The unique constraint (or the
    vanished row) then fails the transaction, which is reported as a
    conflict.
    """
    media = await get_media_or_404(db, media_id)
    existing = await find_media_like(db, media_id, user_id)

    try:
        async with atomic(db):
            if existing is not None:
                await db.delete(existing)
                delta = -1
            else:
                db.add(MediaLike(media_id=media_id, user_id=user_id))
                delta = 1
            await db.execute(
                update(Media)
                .where(Media.id == media_id)
                .values(likes=Media.likes + delta)
                .execution_options(synchronize_session=False)
            )
    except IntegrityError as e:
        logger.warning("Duplicate like of media %s by %s", media_id, user_id)
        raise ConflictError("Media already liked") from e
    except StaleDataError as e:
        logger.warning("Like of media %s by %s already removed", media_id, user_id)
        raise ConflictError("Media like already removed") from e

    await db.refresh(media)
    return {"liked": existing is None, "likes": media.likes}


async def purchase_media(
    db: AsyncSession, media_id: str, buyer_id: str
) -> MediaSale:
    media = await db.get(Media, media_id)
    if media is None or not media.is_active or media.price <= 0:
        raise NotFoundError("Media not available for purchase")

    price = media.price
    async with atomic(db):
        sale = MediaSale(
            media_id=media.id,
            buyer_id=buyer_id,
            seller_id=media.uploaded_by,
            amount=price,
            status=SaleStatus.COMPLETED,
        )
        db.add(sale)
        await db.execute(
            update(Media)
            .where(Media.id == media_id)
            .values(
                sales=Media.sales + 1,
                total_earnings=Media.total_earnings + price,
            )
            .execution_options(synchronize_session=False)
        )

    await db.refresh(media)
    logger.info("Media %s purchased by %s for %s", media_id, buyer_id, price)
    return sale
