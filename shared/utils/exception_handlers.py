# utils/exception_handlers.py

from functools import wraps
from typing import Any, Callable

from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.core.api_response import api_response, build_response_body
from shared.core.exceptions import BaseAPIException
from shared.core.logging_config import get_logger

# Scoped logger for this module
logger = get_logger(__name__)


def handle_general_exception(e: Exception) -> JSONResponse:
    """
    Handles unhandled server-side exceptions.
    Logs and returns a standard API response.
    """
    logger.exception("Unhandled error: %s", e)
    return api_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="Something went wrong. Please try again later.",
        log_error=True,
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Renders HTTPException as the flat envelope.

    ``api_response`` already puts the envelope into ``detail``; plain
    string details (framework 404/405, upload helpers) are wrapped here.
    """
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = build_response_body(
            exc.status_code,
            str(exc.detail) if exc.detail else "Request failed",
        )
        content["path"] = request.url.path
        content["method"] = request.method
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def handle_api_exception(
    request: Request, exc: BaseAPIException
) -> JSONResponse:
    """Renders domain exceptions raised from services."""
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    else:
        logger.warning(
            "%s on %s: %s", exc.error_code, request.url.path, exc.message
        )
    content = build_response_body(
        exc.status_code, exc.message, details=exc.details
    )
    content["path"] = request.url.path
    content["method"] = request.method
    return JSONResponse(status_code=exc.status_code, content=content)


async def handle_422_exception(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handles Pydantic validation errors raised at runtime.
    """
    logger.warning("Validation error on %s: %s", request.url, exc.errors())
    content = build_response_body(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error",
        details=jsonable_encoder(exc.errors()),
    )
    content["path"] = request.url.path
    content["method"] = request.method
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=content
    )


async def handle_rate_limit_exception(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    logger.warning("Rate limit exceeded for %s: %s", request.client, exc.detail)
    content = build_response_body(
        status.HTTP_429_TOO_MANY_REQUESTS,
        "Too many requests, please try again later.",
    )
    content["path"] = request.url.path
    content["method"] = request.method
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS, content=content
    )


def exception_handler(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator for endpoints to standardize exception handling.
    Automatically logs and returns API-formatted responses.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except (HTTPException, BaseAPIException):
            raise  # Rendered by the app-level handlers
        except Exception as e:
            return handle_general_exception(e)

    return wrapper
