"""Download statistics library.

Public API:
    - StatsClient: Authenticated statistics service client
    - DownloadCount: Per-artifact download count
    - StatsUnavailableError: Fetch/empty-stats error type
"""

from artifact_catalog.lib.stats.client import DownloadCount, StatsClient, StatsUnavailableError

__all__ = [
    "DownloadCount",
    "StatsClient",
    "StatsUnavailableError",
]
