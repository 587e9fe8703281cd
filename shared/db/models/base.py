"""
base.py

SQLAlchemy Declarative Base class with:
- Constraint naming conventions
- Shared timestamp columns
- Utility methods for serialization and debugging
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from shared.utils.timezone_utils import utc_now

# Naming convention for constraints (Alembic migration friendly)
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(table_name)s_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata_obj: MetaData = MetaData(naming_convention=NAMING_CONVENTION)


class PlatformBase(DeclarativeBase):
    """
    Base class for all ORM models.
    Provides shared metadata and serialization utilities.
    """

    metadata = metadata_obj

    def __repr__(self) -> str:
        """
        Example: <Course(id='aBcDeF', title='Wedding Photography 101', ...)>
        """
        values: str = ", ".join(
            f"{col.name}={getattr(self, col.name)!r}"
            for col in self.__table__.columns
        )
        return f"<{self.__class__.__name__}({values})>"

    def to_dict(self) -> dict[str, Any]:
        return {
            col.name: getattr(self, col.name) for col in self.__table__.columns
        }


class TimestampMixin:
    # Python-side defaults keep the values loaded after flush, which
    # avoids implicit refresh IO on async sessions.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )
