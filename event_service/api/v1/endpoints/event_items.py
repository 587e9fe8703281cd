from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from event_service.schemas.event_items import (
    EventCateringResponse,
    EventCateringUpdateRequest,
    EventRentalResponse,
    EventRentalUpdateRequest,
)
from event_service.services.event_items import (
    remove_event_catering,
    remove_event_rental,
    update_event_catering,
    update_event_rental,
)
from shared.core.api_response import api_response
from shared.db.sessions.database import get_db
from shared.dependencies.auth import CurrentAdmin
from shared.utils.exception_handlers import exception_handler

catering_router = APIRouter()
rental_router = APIRouter()


@catering_router.put("/{booking_id}")
@exception_handler
async def edit_event_catering(
    booking_id: str,
    payload: EventCateringUpdateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    row = await update_event_catering(db, booking_id, payload)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Event catering service updated successfully",
        data=EventCateringResponse.model_validate(row),
    )


@catering_router.delete("/{booking_id}")
@exception_handler
async def delete_event_catering(
    booking_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    await remove_event_catering(db, booking_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Catering service removed from event successfully",
        data={"id": booking_id},
    )


@rental_router.put("/{rental_id}")
@exception_handler
async def edit_event_rental(
    rental_id: str,
    payload: EventRentalUpdateRequest,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    row = await update_event_rental(db, rental_id, payload)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Event equipment rental updated successfully",
        data=EventRentalResponse.model_validate(row),
    )


@rental_router.delete("/{rental_id}")
@exception_handler
async def delete_event_rental(
    rental_id: str,
    _: CurrentAdmin,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    await remove_event_rental(db, rental_id)
    return api_response(
        status_code=status.HTTP_200_OK,
        message="Equipment rental removed from event successfully",
        data={"id": rental_id},
    )
