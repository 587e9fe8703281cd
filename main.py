import os
from typing import Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from lifespan import lifespan
from routes import api_router
from shared.core.config import Settings, settings
from shared.core.exceptions import BaseAPIException
from shared.core.logging_config import get_logger
from shared.core.rate_limiter import create_limiter
from shared.core.request_context import request_context
from shared.utils.exception_handlers import (
    handle_422_exception,
    handle_api_exception,
    handle_http_exception,
    handle_rate_limit_exception,
)
from shared.utils.execution_time import (
    ExecutionTimeMiddleware,
    RequestTimeoutMiddleware,
)
from shared.utils.file_uploads import upload_root

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        method: str = request.method
        path: str = request.url.path
        token = request_context.set(request)  # read by api_response
        try:
            response: Response = await call_next(request)
        finally:
            request_context.reset(token)

        response.headers["X-Method"] = method
        response.headers["X-Path"] = path
        return response


def create_app(app_settings: Settings = settings) -> FastAPI:

    fastapi_app: FastAPI = FastAPI(
        title=app_settings.APP_NAME,
        openapi_url="/openapi.json",
        version=app_settings.VERSION,
        description=app_settings.DESCRIPTION,
        lifespan=lifespan,
        debug=app_settings.ENVIRONMENT == "development",
        redirect_slashes=True,
        swagger_ui_parameters={
            "filter": True,  # Enable filter
            "persistAuthorization": True,  # Persist auth tokens
            "tryItOutEnabled": True,
            "docExpansion": "none",  # Collapse all tags by default
            "displayRequestDuration": True,
            "syntaxHighlight.theme": "github",
            "deepLinking": True,
        },
    )

    @fastapi_app.get(path="/", tags=["System"])
    async def root() -> dict[str, str]:
        return {
            "message": f"Welcome to {app_settings.APP_NAME}",
            "version": app_settings.VERSION,
            "docs_url": "/docs",
            "redoc_url": "/redoc",
        }

    @fastapi_app.get(path="/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "message": "API is running fine!"}

    fastapi_app.include_router(router=api_router)

    # Exception handlers render every error in the response envelope
    fastapi_app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    fastapi_app.add_exception_handler(BaseAPIException, handle_api_exception)
    fastapi_app.add_exception_handler(RequestValidationError, handle_422_exception)
    fastapi_app.add_exception_handler(RateLimitExceeded, handle_rate_limit_exception)

    # Uploaded files: served from the same root the upload helpers write to
    stored_files_root = upload_root()
    os.makedirs(name=stored_files_root, exist_ok=True)
    fastapi_app.mount(
        path=settings.UPLOAD_URL_PREFIX,
        app=StaticFiles(directory=stored_files_root),
        name="uploads",
    )

    # Middleware: the last one added runs first
    fastapi_app.state.limiter = create_limiter(app_settings)
    fastapi_app.add_middleware(SlowAPIMiddleware)
    fastapi_app.add_middleware(
        RequestTimeoutMiddleware, timeout=app_settings.REQUEST_TIMEOUT_SECONDS
    )
    fastapi_app.add_middleware(
        middleware_class=GZipMiddleware, minimum_size=1000
    )
    fastapi_app.add_middleware(ExecutionTimeMiddleware)
    fastapi_app.add_middleware(middleware_class=RequestContextMiddleware)

    origins = app_settings.cors_origins
    logger.info("CORS origins: %s", origins)
    fastapi_app.add_middleware(
        middleware_class=CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return fastapi_app


app: FastAPI = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app="main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.ENVIRONMENT == "development",
        use_colors=True,
    )
