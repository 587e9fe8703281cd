"""
Custom SQLAlchemy types shared by the models.
"""

from typing import Any, Optional

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import Text, TypeDecorator

from shared.core.security import decrypt_json, encrypt_json

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class EncryptedJSON(TypeDecorator):
    """
    Stores any JSON-serialisable value Fernet-encrypted in a text column
    and decrypts it transparently on load.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> Optional[str]:
        if value is None:
            return None
        return encrypt_json(value)

    def process_result_value(
        self, value: Optional[str], dialect: Any
    ) -> Any:
        if value is None:
            return None
        return decrypt_json(value)
