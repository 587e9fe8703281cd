from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from media_service.schemas.media import (
    MediaCreateRequest,
    MediaResponse,
    MediaStatsResponse,
    MediaUpdateRequest,
)
from media_service.services.media import (
    create_media,
    delete_media,
    fetch_media_stats,
    get_media_or_404,
    list_client_portfolio,
    list_media,
    list_media_by_category,
    list_user_media,
    parse_media_category,
    update_media,
    upload_media,
)
from shared.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from shared.core.api_response import api_response
from shared.db.models import MediaCategory
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentUser
from shared.utils.exception_handlers import exception_handler
from shared.utils.validators import split_csv

router = APIRouter()


def _serialize(items) -> list:
    return [MediaResponse.model_validate(m) for m in items]


@router.get("")
@exception_handler
async def get_media(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    category: Optional[MediaCategory] = Query(None),
    search: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(True),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    items, pagination = await list_media(
        db, page, limit, category=category, search=search, is_active=is_active
    )
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Media retrieved successfully",
        data={"media": _serialize(items), "pagination": pagination},
    )


@router.get("/stats")
@exception_handler
async def get_media_stats(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    stats = await fetch_media_stats(db)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Media statistics retrieved successfully",
        data=MediaStatsResponse(
            total=stats["total"],
            by_category=stats["by_category"],
            recent=_serialize(stats["recent"]),
        ),
    )


@router.get("/category/{category}")
@exception_handler
async def get_media_by_category(
    category: str, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    items = await list_media_by_category(db, parse_media_category(category))
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Media retrieved successfully",
        data=_serialize(items),
    )


@router.get("/client/{client_name}")
@exception_handler
async def get_client_portfolio(
    client_name: str, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    items = await list_client_portfolio(db, client_name)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Client portfolio retrieved successfully",
        data=_serialize(items),
    )


@router.get("/user")
@exception_handler
async def get_my_media(
    current_user: CurrentUser, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    items = await list_user_media(db, current_user.id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="User media retrieved successfully",
        data=_serialize(items),
    )


@router.get("/{media_id}")
@exception_handler
async def get_media_item(
    media_id: str, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    media = await get_media_or_404(db, media_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Media retrieved successfully",
        data=MediaResponse.model_validate(media),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
@exception_handler
async def register_media(
    payload: MediaCreateRequest,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    media = await create_media(db, payload, current_user.id)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Media created successfully",
        data=MediaResponse.model_validate(media),
    )


@router.post("/upload", status_code=status.HTTP_201_CREATED)
@exception_handler
async def upload_media_files(
    current_user: CurrentUser,
    files: List[UploadFile] = File(...),
    category: str = Form(...),
    client_name: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    tags: Optional[str] = Form(None, description="Comma separated tags"),
    price: Optional[Decimal] = Form(None),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    items = await upload_media(
        db,
        files,
        current_user.id,
        category,
        client_name=client_name,
        title=title,
        description=description,
        tags=split_csv(tags),
        price=price,
    )
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message=f"{len(items)} file(s) uploaded successfully",
        data=_serialize(items),
    )


@router.put("/{media_id}")
@exception_handler
async def edit_media(
    media_id: str,
    payload: MediaUpdateRequest,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    media = await update_media(db, media_id, current_user.id, payload)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Media updated successfully",
        data=MediaResponse.model_validate(media),
    )


@router.delete("/{media_id}")
@exception_handler
async def remove_media(
    media_id: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    await delete_media(db, media_id, current_user.id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Media deleted successfully",
        data={"id": media_id},
    )
