"""Helpers shared by the SQLAlchemy repositories."""

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.pagination import page_offset


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell unique-constraint failures apart from FK/check failures.

    PostgreSQL reports ``duplicate key value violates unique constraint``;
    SQLite reports ``UNIQUE constraint failed``.
    """
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate" in message


def escape_like(query: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def fetch_page(
    session: AsyncSession, stmt: Select[Any], page: int, limit: int
) -> tuple[list[Any], int]:
    """Run ``stmt`` for one page and count all rows it would return.

    The count runs as a separate statement and is not guaranteed to agree
    with the page under concurrent writes.
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await session.execute(count_stmt)).scalar() or 0

    result = await session.execute(stmt.limit(limit).offset(page_offset(page, limit)))
    return list(result.scalars()), total
