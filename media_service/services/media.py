from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from fastapi import UploadFile
from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from media_service.schemas.media import MediaCreateRequest, MediaUpdateRequest
from shared.constants import RECENT_MEDIA_LIMIT
from shared.core.config import settings
from shared.core.exceptions import NotFoundError, ValidationError
from shared.core.logging_config import get_logger
from shared.db.models import Media, MediaCategory
from shared.db.sessions.database import atomic
from shared.utils.file_uploads import (
    StoredFile,
    create_thumbnail,
    relative_path_from_url,
    remove_file_if_exists,
    resolve_category_dir,
    save_uploaded_file,
)
from shared.utils.pagination import like_pattern, paginate

logger = get_logger(__name__)


def parse_media_category(value: str) -> MediaCategory:
    try:
        return MediaCategory(value.strip().upper())
    except ValueError:
        raise ValidationError("Invalid category") from None


async def get_media_or_404(db: AsyncSession, media_id: str) -> Media:
    media = await db.get(Media, media_id)
    if media is None:
        raise NotFoundError("Media not found")
    return media


async def get_owned_media_or_404(
    db: AsyncSession, media_id: str, user_id: str
) -> Media:
    """Someone else's media is reported as missing rather than forbidden."""
    media = await db.get(Media, media_id)
    if media is None or media.uploaded_by != user_id:
        raise NotFoundError("Media not found")
    return media


async def create_media(
    db: AsyncSession, payload: MediaCreateRequest, uploader_id: str
) -> Media:
    media = Media(**payload.model_dump(), uploaded_by=uploader_id)
    db.add(media)
    await db.commit()
    logger.info("Media %s registered by %s", media.id, uploader_id)
    return media


async def _discard_stored(stored: List[Tuple[StoredFile, Optional[str]]]) -> None:
    for item, thumbnail_url in stored:
        await remove_file_if_exists(item.relative_path)
        await remove_file_if_exists(relative_path_from_url(thumbnail_url))


async def upload_media(
    db: AsyncSession,
    files: List[UploadFile],
    uploader_id: str,
    category: str,
    client_name: Optional[str] = None,
    title: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
    price: Optional[Decimal] = None,
) -> List[Media]:
    """
    Store the files on disk and create one media row per file.

    Files already written are removed again if a later file or the
    database insert fails.
    """
    media_category = parse_media_category(category)
    if not files:
        raise ValidationError("No files uploaded")
    if len(files) > settings.MAX_UPLOAD_FILES:
        raise ValidationError(
            f"Maximum {settings.MAX_UPLOAD_FILES} files allowed per upload"
        )
    client_name = (client_name or "").strip() or None
    if media_category == MediaCategory.CLIENT_PORTFOLIO and not client_name:
        raise ValidationError("Client name is required for client portfolio media")
    if price is not None and price < 0:
        raise ValidationError("Price cannot be negative")
    if description and len(description) > 1000:
        raise ValidationError("Description must be at most 1000 characters")

    directory = resolve_category_dir("media")
    stored: List[Tuple[StoredFile, Optional[str]]] = []
    try:
        for file in files:
            item = await save_uploaded_file(file, directory)
            stored.append((item, await create_thumbnail(item)))

        rows = [
            Media(
                filename=item.filename,
                original_name=item.original_name,
                mime_type=item.mime_type,
                size=item.size,
                url=item.url,
                thumbnail_url=thumbnail_url,
                category=media_category,
                client_name=client_name,
                title=title,
                description=description,
                tags=tags or [],
                price=price or Decimal("0"),
                uploaded_by=uploader_id,
            )
            for item, thumbnail_url in stored
        ]
        async with atomic(db):
            db.add_all(rows)
    except Exception:
        await _discard_stored(stored)
        raise

    logger.info("Uploaded %d media files for %s", len(rows), uploader_id)
    return rows


async def list_media(
    db: AsyncSession,
    page: int,
    limit: int,
    category: Optional[MediaCategory] = None,
    search: Optional[str] = None,
    is_active: Optional[bool] = True,
) -> Tuple[List[Media], Dict[str, Any]]:
    query = select(Media)
    if is_active is not None:
        query = query.where(Media.is_active.is_(is_active))
    if category is not None:
        query = query.where(Media.category == category)
    if search:
        pattern = like_pattern(search)
        query = query.where(
            or_(
                Media.original_name.ilike(pattern, escape="\\"),
                Media.title.ilike(pattern, escape="\\"),
                Media.description.ilike(pattern, escape="\\"),
                Media.client_name.ilike(pattern, escape="\\"),
                cast(Media.tags, String).ilike(pattern, escape="\\"),
            )
        )
    query = query.order_by(Media.created_at.desc())
    return await paginate(db, query, page, limit)


async def fetch_media_stats(db: AsyncSession) -> Dict[str, Any]:
    """Counts over active media plus the most recent uploads."""
    result = await db.execute(
        select(Media.category, func.count(Media.id))
        .where(Media.is_active.is_(True))
        .group_by(Media.category)
    )
    by_category = {category.value: 0 for category in MediaCategory}
    for category, count in result.all():
        by_category[MediaCategory(category).value] = count

    recent = await db.execute(
        select(Media)
        .where(Media.is_active.is_(True))
        .order_by(Media.created_at.desc())
        .limit(RECENT_MEDIA_LIMIT)
    )
    return {
        "total": sum(by_category.values()),
        "by_category": by_category,
        "recent": list(recent.scalars().all()),
    }


async def list_media_by_category(
    db: AsyncSession, category: MediaCategory
) -> List[Media]:
    result = await db.execute(
        select(Media)
        .where(Media.category == category, Media.is_active.is_(True))
        .order_by(Media.created_at.desc())
    )
    return list(result.scalars().all())


async def list_client_portfolio(db: AsyncSession, client_name: str) -> List[Media]:
    result = await db.execute(
        select(Media)
        .where(
            Media.category == MediaCategory.CLIENT_PORTFOLIO,
            Media.is_active.is_(True),
            Media.client_name.ilike(like_pattern(client_name), escape="\\"),
        )
        .order_by(Media.created_at.desc())
    )
    return list(result.scalars().all())


async def list_user_media(db: AsyncSession, user_id: str) -> List[Media]:
    result = await db.execute(
        select(Media)
        .where(Media.uploaded_by == user_id)
        .order_by(Media.created_at.desc())
    )
    return list(result.scalars().all())


async def update_media(
    db: AsyncSession, media_id: str, user_id: str, payload: MediaUpdateRequest
) -> Media:
    media = await get_owned_media_or_404(db, media_id, user_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    category = changes.get("category", media.category)
    client_name = changes.get("client_name", media.client_name)
    if category == MediaCategory.CLIENT_PORTFOLIO and not client_name:
        raise ValidationError("Client name is required for client portfolio media")

    for field, value in changes.items():
        setattr(media, field, value)
    await db.commit()
    return media


async def delete_media(db: AsyncSession, media_id: str, user_id: str) -> None:
    media = await get_owned_media_or_404(db, media_id, user_id)
    url, thumbnail_url = media.url, media.thumbnail_url
    await db.delete(media)
    await db.commit()

    await remove_file_if_exists(relative_path_from_url(url))
    await remove_file_if_exists(relative_path_from_url(thumbnail_url))
    logger.info("Media %s deleted by %s", media_id, user_id)
