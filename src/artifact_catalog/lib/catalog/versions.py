"""Version-aware ordering for published version strings."""

import re
from collections.abc import Iterable

from packaging.version import InvalidVersion, Version

from artifact_catalog.lib.catalog.types import VersionRecord

_RELEASE_PATTERN = re.compile(r"^\D*(\d+(?:\.\d+)*)")
_ZERO = Version("0")


def version_key(number: str) -> tuple[Version, int, str]:
    """Return a sort key ordering version strings oldest to newest.

    PEP 440 parseable strings compare by their parsed value. Anything else
    falls back to its leading numeric release and sorts just below the clean
    release with the same numbers (``3.0.0-foo-1`` < ``3.0.0``). The raw string
    breaks remaining ties so the order is total.

    Args:
        number: Raw version string.

    Returns:
        Comparable sort key.
    """
    try:
        return (Version(number), 1, number)
    except InvalidVersion:
        pass
    match = _RELEASE_PATTERN.match(number)
    release = Version(match.group(1)) if match else _ZERO
    return (release, 0, number)


def newest_first(records: Iterable[VersionRecord]) -> list[VersionRecord]:
    """Sort version records newest first."""
    return sorted(records, key=lambda record: version_key(record.number), reverse=True)
