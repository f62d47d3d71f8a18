"""SQL-backed durable cache.

Persists immutable per-version facts (file counts, descriptor documents)
so they survive restarts. Values must be JSON-serializable.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from artifact_catalog.models.cache_entry import CacheEntry

_UPSERT_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on round-trip
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


class DatabaseCache:
    """Cache gateway over the ``cache_entries`` table.

    Args:
        session_factory: Async session factory bound to the cache database.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> Any | None:
        """Look up a cached value.

        Args:
            key: Cache key.

        Returns:
            The stored value, or None on miss or expiry.
        """
        async with self._session_factory() as session:
            result = await session.execute(select(CacheEntry).where(CacheEntry.key == key))
            entry = result.scalar_one_or_none()
            if entry is None:
                return None
            if entry.expires_at is not None and _as_utc(entry.expires_at) <= datetime.now(UTC):
                await session.delete(entry)
                await session.commit()
                return None
            return entry.value

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Insert or replace a cached value.

        Concurrent writers of the same key are safe: on PostgreSQL and SQLite
        the write is a single ``INSERT ... ON CONFLICT DO UPDATE``; other
        dialects retry a lost insert race as an update.

        Args:
            key: Cache key.
            value: JSON-serializable value.
            ttl: Lifetime in seconds, or None to keep forever.
        """
        now = datetime.now(UTC)
        expires_at = None if ttl is None else now + timedelta(seconds=ttl)
        row = {"key": key, "value": value, "expires_at": expires_at, "cached_at": now}
        async with self._session_factory() as session:
            insert = _UPSERT_INSERTS.get(session.get_bind().dialect.name)
            if insert is not None:
                stmt = insert(CacheEntry).values(**row)
                stmt = stmt.on_conflict_do_update(
                    index_elements=[CacheEntry.key],
                    set_={col: stmt.excluded[col] for col in ("value", "expires_at", "cached_at")},
                )
                await session.execute(stmt)
                await session.commit()
                return

            try:
                await session.merge(CacheEntry(**row))
                await session.commit()
            except IntegrityError:
                await session.rollback()
                await session.merge(CacheEntry(**row))
                await session.commit()
