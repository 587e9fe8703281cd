from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from shared.core.logging_config import get_logger
from shared.core.request_context import request_context

logger = get_logger("api_response")


def build_response_body(
    status_code: int,
    message: str,
    data: Optional[Any] = None,
    **extra: Any,
) -> dict[str, Any]:
    """Standard envelope shared by success and error responses."""
    request = request_context.get()
    body: dict[str, Any] = {
        "statusCode": status_code,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "method": request.method if request is not None else None,
        "path": request.url.path if request is not None else None,
    }
    if data is not None:
        body["data"] = jsonable_encoder(data)
    body.update({key: value for key, value in extra.items() if value})
    return body


def api_response(
    status_code: int,
    message: str,
    data: Optional[Any] = None,
    log_error: bool = False,
    suppress_raise: bool = False,
) -> JSONResponse:
    """
    Build the unified JSON envelope.

    Client errors (4xx) are raised as ``HTTPException`` carrying the envelope
    so that an early ``return api_response(...)`` deep inside a service also
    aborts the request, unless ``suppress_raise`` is set.
    """
    response_body = build_response_body(status_code, message, data)

    if log_error or status_code >= 400:
        logger.error(
            {
                "status_code": status_code,
                "message": message,
                "method": response_body["method"],
                "path": response_body["path"],
            }
        )
    else:
        logger.info({"message": message})

    if 400 <= status_code < 500 and not suppress_raise:
        raise HTTPException(status_code=status_code, detail=response_body)

    return JSONResponse(status_code=status_code, content=response_body)
