# response_builder.py

from fastapi import status
from starlette.responses import JSONResponse

from shared.core.api_response import api_response


def event_not_found_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_404_NOT_FOUND,
        message="Event not found",
        log_error=True,
    )


def catering_service_not_found_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_404_NOT_FOUND,
        message="Catering service not found",
        log_error=True,
    )


def equipment_not_found_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_404_NOT_FOUND,
        message="Equipment not found",
        log_error=True,
    )


def event_catering_not_found_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_404_NOT_FOUND,
        message="Event catering service not found",
        log_error=True,
    )


def event_rental_not_found_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_404_NOT_FOUND,
        message="Event equipment rental not found",
        log_error=True,
    )


def equipment_unavailable_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message="Equipment is not available for rental",
        log_error=True,
    )


def invalid_rental_window_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Rental end date must be after the start date",
        log_error=True,
    )


def booking_not_found_response() -> JSONResponse:
    return api_response(
        status_code=status.HTTP_404_NOT_FOUND,
        message="Booking not found",
        log_error=True,
    )
