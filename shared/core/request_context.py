from contextvars import ContextVar
from typing import Optional

from starlette.requests import Request

# Set by RequestContextMiddleware so api_response can stamp method/path
request_context: ContextVar[Optional[Request]] = ContextVar(
    "request_context", default=None
)
