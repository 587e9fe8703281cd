"""
Event service schemas module.

This module exports all Pydantic schemas for the event service.
"""

from .bookings import (
    BookingCreateRequest,
    BookingResponse,
    BookingStatsResponse,
    BookingUpdateRequest,
)
from .catering import (
    CateringServiceCreateRequest,
    CateringServiceResponse,
    CateringServiceUpdateRequest,
)
from .equipment import (
    EquipmentCreateRequest,
    EquipmentResponse,
    EquipmentUpdateRequest,
)
from .event_items import (
    EventCateringCreateRequest,
    EventCateringResponse,
    EventCateringUpdateRequest,
    EventRentalCreateRequest,
    EventRentalResponse,
    EventRentalUpdateRequest,
)
from .events import (
    EventCreateRequest,
    EventDetailResponse,
    EventResponse,
    EventUpdateRequest,
)

__all__ = [
    # Event schemas
    "EventCreateRequest",
    "EventUpdateRequest",
    "EventResponse",
    "EventDetailResponse",
    # Catering and equipment
    "CateringServiceCreateRequest",
    "CateringServiceUpdateRequest",
    "CateringServiceResponse",
    "EquipmentCreateRequest",
    "EquipmentUpdateRequest",
    "EquipmentResponse",
    # Event attachments
    "EventCateringCreateRequest",
    "EventCateringUpdateRequest",
    "EventCateringResponse",
    "EventRentalCreateRequest",
    "EventRentalUpdateRequest",
    "EventRentalResponse",
    # Package bookings
    "BookingCreateRequest",
    "BookingUpdateRequest",
    "BookingResponse",
    "BookingStatsResponse",
]
