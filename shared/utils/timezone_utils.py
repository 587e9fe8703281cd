from datetime import datetime, timezone
from typing import List, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to naive datetimes.

    SQLite drops tzinfo on ``DateTime(timezone=True)`` columns, so values
    read back need normalising before they are compared with ``utc_now()``.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def month_key(value: datetime) -> str:
    return value.strftime("%Y-%m")


def last_month_keys(count: int = 12, now: Optional[datetime] = None) -> List[str]:
    """Return ``count`` YYYY-MM keys ending at the current month, oldest first."""
    now = now or utc_now()
    year, month = now.year, now.month
    keys: List[str] = []
    for _ in range(count):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            month = 12
            year -= 1
    return list(reversed(keys))
