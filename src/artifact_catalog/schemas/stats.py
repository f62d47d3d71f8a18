"""Pydantic v2 schemas for download statistics."""

from pydantic import BaseModel, Field


class DownloadCountResponse(BaseModel):
    """Downloads of one artifact."""

    group_id: str = Field(description="Artifact group id")
    artifact_id: str = Field(description="Artifact id")
    count: int = Field(description="Downloads in the requested month")


class MostDownloadedResponse(BaseModel):
    """Response schema for the most-downloaded endpoint."""

    month: str = Field(description="Month the statistics cover (YYYY-MM)")
    items: list[DownloadCountResponse] = Field(default_factory=list, description="Most downloaded first")
