"""Cache gateway interface shared by the ephemeral and durable cache backends."""

from typing import Any, Protocol

# TTL value meaning "never expires"; used for immutable published-artifact facts.
FOREVER: None = None


class CacheGateway(Protocol):
    """Async key/value store with per-key TTL."""

    async def get(self, key: str) -> Any | None:
        """Return the cached value, or None on miss or expiry."""
        ...

    async def set(self, key: str, value: Any, ttl: float | None = FOREVER) -> None:
        """Store a value.

        Args:
            key: Cache key.
            value: Value to store.
            ttl: Lifetime in seconds, or ``FOREVER``.
        """
        ...
