import hashlib
import hmac
import json
from typing import Any

from cryptography.fernet import Fernet, InvalidToken

from shared.core.config import settings
from shared.core.logging_config import get_logger

logger = get_logger(__name__)


def get_or_generate_key() -> bytes:
    """
    Get the Fernet key from settings or generate a new one.

    The key must stay the same across restarts, otherwise previously
    encrypted withdrawal account details can no longer be read.
    """
    if settings.FERNET_KEY and settings.FERNET_KEY != "fernet-key":
        try:
            key = settings.FERNET_KEY.encode()
            Fernet(key)
            return key
        except (ValueError, TypeError):
            logger.warning("Configured FERNET_KEY is invalid, generating one")

    key = Fernet.generate_key()
    logger.warning(
        "Generated a new Fernet key. Persist it as FERNET_KEY or encrypted "
        "columns written by this process will be unreadable after restart."
    )
    return key


fernet = Fernet(get_or_generate_key())


def encrypt_data(data: str) -> str:
    """Encrypt a string using Fernet symmetric encryption."""
    if not data:
        return ""
    return fernet.encrypt(data.encode()).decode()


def decrypt_data(encrypted_data: str) -> str:
    """
    Decrypt a Fernet-encrypted string.

    Raises:
        ValueError: If the data has been tampered with or the key changed
    """
    if not encrypted_data:
        return ""

    try:
        return fernet.decrypt(encrypted_data.encode()).decode()
    except InvalidToken as exc:
        raise ValueError(
            "Failed to decrypt data: token may be invalid or corrupted"
        ) from exc


def encrypt_json(value: Any) -> str:
    return encrypt_data(json.dumps(value, sort_keys=True))


def decrypt_json(encrypted_data: str) -> Any:
    plain = decrypt_data(encrypted_data)
    return json.loads(plain) if plain else None


def hash_secret(value: str, scope: str) -> str:
    """
    Keyed hash (HMAC-SHA256) for short-lived secrets such as OTP codes and
    password reset tokens. ``scope`` binds the hash to its owner so a code
    issued for one address is useless for another.
    """
    message = f"{scope.lower().strip()}:{value}".encode()
    return hmac.new(
        settings.OTP_SECRET_KEY.encode(), message, hashlib.sha256
    ).hexdigest()


def verify_secret(value: str, scope: str, expected_hash: str) -> bool:
    return hmac.compare_digest(hash_secret(value, scope), expected_hash)
