"""Single-flight guard for catalog rebuilds.

At most one rebuild per package type runs at a time. Callers arriving while
a rebuild is running fail fast with ``AlreadyInProgressError`` instead of
waiting; the running build refreshes the shared cache they can re-read.
"""

import threading
from collections.abc import Awaitable, Callable
from typing import TypeVar

from loguru import logger

from artifact_catalog.lib.catalog.errors import AlreadyInProgressError

T = TypeVar("T")


class RequestCoordinator:
    """Registry of package types whose catalog is currently being rebuilt.

    One instance is shared per process (owned by the catalog service); tests
    construct their own.
    """

    def __init__(self) -> None:
        self._in_progress: set[str] = set()
        self._lock = threading.Lock()

    def in_progress(self, package_type: str) -> bool:
        """Whether a rebuild for ``package_type`` is currently running."""
        with self._lock:
            return package_type in self._in_progress

    def _acquire(self, package_type: str) -> bool:
        with self._lock:
            if package_type in self._in_progress:
                return False
            self._in_progress.add(package_type)
            return True

    def _release(self, package_type: str) -> None:
        with self._lock:
            self._in_progress.discard(package_type)

    async def run_exclusive(self, package_type: str, build_fn: Callable[[], Awaitable[T]]) -> T:
        """Run ``build_fn`` unless a build for the same type is already running.

        Args:
            package_type: Package type identifier used as the registry key.
            build_fn: Zero-argument coroutine function performing the build.

        Returns:
            Whatever ``build_fn`` returns.

        Raises:
            AlreadyInProgressError: If another build for ``package_type`` is running.
        """
        if not self._acquire(package_type):
            logger.info("Catalog build for {} already in progress", package_type)
            raise AlreadyInProgressError(package_type)

        try:
            return await build_fn()
        finally:
            self._release(package_type)
