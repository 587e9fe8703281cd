import asyncio
import functools
import time
from typing import Any, Awaitable, Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from shared.core.api_response import build_response_body
from shared.core.logging_config import get_logger

logger = get_logger(__name__)


class ExecutionTimeMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        total_time = time.perf_counter() - start_time
        logger.info(
            "[API] %s %s completed in %.4f seconds",
            request.method,
            request.url.path,
            total_time,
        )
        response.headers["X-API-Execution-Time"] = f"{total_time:.4f} seconds"
        return response


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """Abort requests that run longer than ``timeout`` seconds with a 408."""

    def __init__(self, app: ASGIApp, timeout: float = 30.0) -> None:
        super().__init__(app)
        self.timeout = timeout

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), self.timeout)
        except asyncio.TimeoutError:
            logger.error(
                "[API] %s %s timed out after %.1f seconds",
                request.method,
                request.url.path,
                self.timeout,
            )
            content = build_response_body(
                status.HTTP_408_REQUEST_TIMEOUT, "Request timeout"
            )
            content["method"] = request.method
            content["path"] = request.url.path
            return JSONResponse(
                status_code=status.HTTP_408_REQUEST_TIMEOUT, content=content
            )


def measure_execution_time(label: str = "Function") -> Callable[..., Any]:
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                start = time.perf_counter()
                result = await func(*args, **kwargs)
                duration = time.perf_counter() - start
                logger.info(
                    "[%s] Async %s executed in %.4f seconds",
                    label,
                    func.__name__,
                    duration,
                )
                return result

            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            result = func(*args, **kwargs)
            duration = time.perf_counter() - start
            logger.info(
                "[%s] Sync %s executed in %.4f seconds",
                label,
                func.__name__,
                duration,
            )
            return result

        return sync_wrapper

    return decorator
