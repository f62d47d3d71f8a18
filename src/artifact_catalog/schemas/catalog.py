"""Pydantic v2 schemas for catalog responses."""

from pydantic import BaseModel, Field

from artifact_catalog.lib.catalog.types import Package


class VersionResponse(BaseModel):
    """A single published version of a package."""

    number: str = Field(description="Version string")
    num_files: int = Field(description="Number of files in this version (0 when unknown)")


class PackageResponse(BaseModel):
    """A catalog entry."""

    package_type: str = Field(description="Package type (classic, bower, npm)")
    group_id: str = Field(description="Artifact group id")
    artifact_id: str = Field(description="Artifact id")
    name: str = Field(description="Display name")
    source_url: str = Field(description="Source repository URL")
    versions: list[VersionResponse] = Field(default_factory=list, description="Versions, newest first")

    @classmethod
    def from_package(cls, package: Package) -> "PackageResponse":
        return cls(
            package_type=package.package_type.value,
            group_id=package.group_id,
            artifact_id=package.artifact_id,
            name=package.name,
            source_url=package.source_url,
            versions=[VersionResponse(number=v.number, num_files=v.num_files) for v in package.versions],
        )


class CatalogResponse(BaseModel):
    """Response schema for catalog endpoints."""

    total: int = Field(description="Number of packages")
    packages: list[PackageResponse] = Field(default_factory=list, description="Packages sorted by name")
