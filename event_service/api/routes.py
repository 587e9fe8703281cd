from fastapi import APIRouter

from event_service.api.v1.endpoints import (
    bookings,
    catering,
    equipment,
    event_items,
    events,
)

event_router = APIRouter(prefix="/api/v1")

event_router.include_router(events.router, prefix="/events", tags=["Events"])
event_router.include_router(
    catering.router, prefix="/catering-services", tags=["Catering Services"]
)
event_router.include_router(equipment.router, prefix="/equipment", tags=["Equipment"])
event_router.include_router(
    event_items.catering_router,
    prefix="/event-catering-services",
    tags=["Event Catering"],
)
event_router.include_router(
    event_items.rental_router,
    prefix="/event-equipment-rentals",
    tags=["Event Equipment Rentals"],
)
event_router.include_router(
    bookings.router, prefix="/bookings", tags=["Package Bookings"]
)
