from typing import Any, Dict, List, Sequence, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select


def build_pagination(page: int, limit: int, total: int) -> Dict[str, Any]:
    total_pages = (total + limit - 1) // limit if limit else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }


async def paginate(
    db: AsyncSession, query: Select, page: int, limit: int
) -> Tuple[List[Any], Dict[str, Any]]:
    """
    Run ``query`` for one page and count the full result set.

    ``query`` must already carry its filters and ordering.
    """
    count_query = select(func.count()).select_from(
        query.order_by(None).subquery()
    )
    total = (await db.execute(count_query)).scalar_one()

    result = await db.execute(query.offset((page - 1) * limit).limit(limit))
    items: Sequence[Any] = result.scalars().unique().all()
    return list(items), build_pagination(page, limit, total)


def like_pattern(term: str) -> str:
    """``%term%`` with LIKE wildcards in ``term`` escaped by backslash."""
    escaped = (
        term.strip()
        .replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
    return f"%{escaped}%"


def ordering(model: Any, sort_by: str, sort_order: str = "desc") -> Any:
    """Order clause for ``model.<sort_by>``; callers restrict ``sort_by``."""
    column = getattr(model, sort_by)
    return column.asc() if sort_order == "asc" else column.desc()
