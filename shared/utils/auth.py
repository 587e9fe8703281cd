import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from shared.core.config import settings
from shared.core.logging_config import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

ROLE_USER = "user"
ROLE_ADMIN = "admin"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_jwt_token(
    data: Dict[str, Any],
    expires_in: Optional[int] = None,
) -> str:
    """
    Create a signed JWT.

    The payload must contain ``uid`` and ``role``; registered claims
    (exp, iat, jti, iss, aud) are added here.

    Raises:
        ValueError: If the payload is missing the identity claims.
    """
    if not data or "uid" not in data or "role" not in data:
        raise ValueError("JWT payload must contain uid and role.")

    now = datetime.now(timezone.utc)
    lifetime = expires_in or settings.JWT_ACCESS_TOKEN_EXPIRE_SECONDS
    payload = {
        **data,
        "exp": now + timedelta(seconds=lifetime),
        "iat": now,
        "jti": secrets.token_hex(16),
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
    }
    return jwt.encode(
        payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
    )


def verify_jwt_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode a JWT.

    Returns:
        dict: Decoded payload.

    Raises:
        ValueError: For any invalid, expired or tampered token.
    """
    if not token:
        raise ValueError("JWT token is required.")

    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options={"require": ["exp", "iat", "iss", "aud", "uid", "role"]},
        )
    except jwt.ExpiredSignatureError as exc:
        logger.warning("JWT token has expired.")
        raise ValueError("JWT token has expired.") from exc
    except jwt.InvalidSignatureError as exc:
        logger.warning("JWT token has invalid signature.")
        raise ValueError("Invalid token signature.") from exc
    except jwt.MissingRequiredClaimError as exc:
        logger.warning("JWT token missing required claim: %s", exc)
        raise ValueError(f"Token missing required claim: {exc}") from exc
    except jwt.InvalidTokenError as exc:
        logger.warning("Invalid JWT token: %s", exc)
        raise ValueError(f"Invalid token: {exc}") from exc
