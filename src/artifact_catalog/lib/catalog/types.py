"""Catalog data types.

Frozen dataclasses for artifact identity, per-version records and packages,
plus the enumeration of supported package types.
"""

from dataclasses import dataclass, field
from enum import StrEnum

# File count recorded when a version could not be enriched.
UNKNOWN_FILE_COUNT = 0


class PackageType(StrEnum):
    """Supported package ecosystems, each published under its own group id."""

    CLASSIC = "classic"
    BOWER = "bower"
    NPM = "npm"

    @property
    def display_name(self) -> str:
        """Human-readable name of the ecosystem."""
        return _DISPLAY_NAMES[self]

    @property
    def group_id_query(self) -> str:
        """Group id used to query the search service for this ecosystem."""
        return _GROUP_ID_QUERIES[self]


_DISPLAY_NAMES: dict[PackageType, str] = {
    PackageType.CLASSIC: "Classic",
    PackageType.BOWER: "Bower",
    PackageType.NPM: "NPM",
}

_GROUP_ID_QUERIES: dict[PackageType, str] = {
    PackageType.CLASSIC: "org.webjars",
    PackageType.BOWER: "org.webjars.bower",
    PackageType.NPM: "org.webjars.npm",
}


@dataclass(frozen=True)
class ArtifactKey:
    """Identity of a package within a package type."""

    group_id: str
    artifact_id: str

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass(frozen=True)
class VersionRecord:
    """One published version of an artifact and the number of files it contains."""

    number: str
    num_files: int = UNKNOWN_FILE_COUNT


@dataclass(frozen=True)
class Package:
    """A catalog entry: an artifact with its resolved metadata and versions, newest first."""

    package_type: PackageType
    group_id: str
    artifact_id: str
    name: str
    source_url: str
    versions: tuple[VersionRecord, ...] = field(default_factory=tuple)

    @property
    def key(self) -> ArtifactKey:
        return ArtifactKey(self.group_id, self.artifact_id)


@dataclass(frozen=True)
class SearchHit:
    """A single (group, artifact, version) row returned by the search service."""

    group_id: str
    artifact_id: str
    version: str


Catalog = list[Package]
