"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Upstream search
    search_url_template: str = Field(
        default="https://search.maven.org/solrsearch/select?q=g:%22{query}%22&core=gav&rows=10000&wt=json",
        description="Search URL template; '{query}' is replaced by the package type's group id query",
    )

    @field_validator("search_url_template")
    @classmethod
    def validate_search_url_template(cls, v: str) -> str:
        if "{query}" not in v:
            msg = "search_url_template must contain a '{query}' placeholder"
            raise ValueError(msg)
        return v

    repo_base_url: str = Field(
        default="https://repo1.maven.org/maven2",
        description="Base URL of the repository that serves build descriptors",
    )
    file_service_url: str = Field(
        default="https://webjars-file-service.herokuapp.com",
        description="Base URL of the per-version file count service",
    )
    http_timeout: float = Field(
        default=30.0,
        description="Upstream HTTP request timeout in seconds",
        gt=0,
    )

    # Catalog
    source_url_base: str = Field(
        default="http://github.com/webjars",
        description="Prefix for guessed source URLs ('<base>/<artifactId>')",
    )
    reserved_prefix: str = Field(
        default="webjars-",
        description="Artifact id prefix of internal packages excluded from the catalog",
    )
    catalog_batch_size: int = Field(
        default=100,
        description="Artifacts enriched concurrently per batch",
        gt=0,
    )
    catalog_cache_ttl: int = Field(
        default=3600,
        description="Catalog snapshot cache TTL in seconds",
        gt=0,
    )
    catalog_refresh_enabled: bool = Field(
        default=False,
        description="Enable background catalog refresh loop",
    )
    catalog_refresh_interval: int = Field(
        default=1800,
        description="Seconds between catalog refresh cycles",
        ge=60,
    )

    # Durable cache
    cache_database_url: str | None = Field(
        default=None,
        description="SQLAlchemy async URL for the durable cache (in-memory when unset)",
    )

    # Download statistics
    stats_url: str = Field(
        default="https://oss.sonatype.org/service/local/stats/slices",
        description="Download statistics endpoint",
    )
    oss_username: str | None = Field(default=None, description="Statistics service username")
    oss_password: str | None = Field(default=None, description="Statistics service password")
    oss_project: str | None = Field(default=None, description="Statistics service project id")

    @property
    def stats_configured(self) -> bool:
        """Whether credentials for the statistics service are present."""
        return bool(self.oss_username and self.oss_password and self.oss_project)

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )
    log_json: bool = Field(
        default=False,
        description="Emit console logs as JSON lines",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins (must be explicitly configured)",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # API
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version prefix",
    )


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
