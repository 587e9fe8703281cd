"""
Rate limiting using SlowAPI.

One fixed window per client IP, applied to every route by
``SlowAPIMiddleware``.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from shared.core.config import Settings, settings
from shared.core.logging_config import get_logger

logger = get_logger(__name__)


def create_limiter(app_settings: Settings = settings) -> Limiter:
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[app_settings.RATE_LIMIT_DEFAULT],
        storage_uri="memory://",
        strategy="fixed-window",
        enabled=app_settings.RATE_LIMIT_ENABLED,
    )
    logger.info(
        "Rate limiter %s (%s per client IP)",
        "enabled" if app_settings.RATE_LIMIT_ENABLED else "disabled",
        app_settings.RATE_LIMIT_DEFAULT,
    )
    return limiter
