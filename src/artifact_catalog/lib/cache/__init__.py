"""Cache backends — ephemeral in-memory and durable SQL-backed key/value stores.

Public API:
    - CacheGateway: Protocol implemented by every backend
    - FOREVER: TTL meaning "never expires"
    - InMemoryCache: TTL-based in-process cache
    - DatabaseCache: SQLAlchemy-backed durable cache
"""

from artifact_catalog.lib.cache.base import FOREVER, CacheGateway
from artifact_catalog.lib.cache.database import DatabaseCache
from artifact_catalog.lib.cache.memory import InMemoryCache

__all__ = [
    "FOREVER",
    "CacheGateway",
    "DatabaseCache",
    "InMemoryCache",
]
