"""ORM model registry — import all models so metadata.create_all discovers them."""

from artifact_catalog.models.base import Base
from artifact_catalog.models.cache_entry import CacheEntry

__all__ = [
    "Base",
    "CacheEntry",
]
