from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from media_service.schemas.media import (
    MediaLikeResponse,
    MediaResponse,
    MediaSaleResponse,
    WithdrawalRequest,
    WithdrawalResponse,
)
from media_service.services.analytics import (
    fetch_media_analytics,
    fetch_user_analytics,
    fetch_user_earnings,
    purchase_media,
    request_withdrawal,
    toggle_media_like,
)
from shared.core.api_response import api_response
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentUser
from shared.utils.exception_handlers import exception_handler

router = APIRouter()


@router.get("/user")
@exception_handler
async def get_user_analytics(
    current_user: CurrentUser, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    analytics = await fetch_user_analytics(db, current_user.id)
    analytics["media"] = [MediaResponse.model_validate(m) for m in analytics["media"]]
    analytics["withdrawals"] = [
        WithdrawalResponse.model_validate(w) for w in analytics["withdrawals"]
    ]
    return api_response(
        status_code=status.HTTP_200_OK,
        message="User analytics retrieved successfully",
        data=analytics,
    )


@router.get("/earnings")
@exception_handler
async def get_earnings(
    current_user: CurrentUser, db: AsyncSession = Depends(get_db)
) -> JSONResponse:
    earnings = await fetch_user_earnings(db, current_user.id)
    earnings["sales"] = [MediaSaleResponse.model_validate(s) for s in earnings["sales"]]
    earnings["withdrawals"] = [
        WithdrawalResponse.model_validate(w) for w in earnings["withdrawals"]
    ]
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Earnings retrieved successfully",
        data=earnings,
    )


@router.post("/withdrawal", status_code=status.HTTP_201_CREATED)
@exception_handler
async def create_withdrawal(
    payload: WithdrawalRequest,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    withdrawal = await request_withdrawal(db, current_user.id, payload)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Withdrawal request submitted successfully",
        data=WithdrawalResponse.model_validate(withdrawal),
    )


@router.get("/media/{media_id}")
@exception_handler
async def get_media_analytics(
    media_id: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    analytics = await fetch_media_analytics(db, media_id, current_user.id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Media analytics retrieved successfully",
        data={
            "media": MediaResponse.model_validate(analytics["media"]),
            "likes": [
                MediaLikeResponse.model_validate(like)
                for like in analytics["likes"]
            ],
            "sales": [
                MediaSaleResponse.model_validate(sale)
                for sale in analytics["sales"]
            ],
        },
    )


@router.post("/media/{media_id}/like")
@exception_handler
async def like_media(
    media_id: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    result = await toggle_media_like(db, media_id, current_user.id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Media liked" if result["liked"] else "Media unliked",
        data=result,
    )


@router.post("/media/{media_id}/purchase", status_code=status.HTTP_201_CREATED)
@exception_handler
async def buy_media(
    media_id: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    sale = await purchase_media(db, media_id, current_user.id)
    return api_response(
        status_code=status.HTTP_201_CREATED,
        message="Media purchased successfully",
        data=MediaSaleResponse.model_validate(sale),
    )
