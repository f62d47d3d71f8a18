"""TTL-based in-memory cache backend.

Holds the short-lived catalog snapshots and, when no cache database is
configured, the durable per-version facts as well.
"""

import threading
import time
from collections.abc import Callable
from typing import Any


class InMemoryCache:
    """Thread-safe key/value cache with per-key TTL expiration.

    Args:
        clock: Monotonic clock returning seconds; injectable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[Any, float | None]] = {}
        self._lock = threading.Lock()

    async def get(self, key: str) -> Any | None:
        """Return the cached value if present and within TTL, else None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value; ``ttl=None`` keeps it until invalidated."""
        expires_at = None if ttl is None else self._clock() + ttl
        with self._lock:
            self._entries[key] = (value, expires_at)

    def invalidate(self, key: str | None = None) -> None:
        """Drop one key, or every key when ``key`` is None."""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
