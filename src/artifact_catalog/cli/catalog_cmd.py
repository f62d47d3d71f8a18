"""CLI commands for building package catalogs.

Runs the full build pipeline once, outside the API server, and reports or
exports the result.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

catalog_app = typer.Typer()


@catalog_app.command("build")
def build(
    package_type: Annotated[
        str | None,
        typer.Option("--type", help="Package type: classic, bower, npm (default: all)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the catalog as JSON to this file"),
    ] = None,
) -> None:
    """Build catalogs from the upstream search service."""
    asyncio.run(_build_impl(package_type, output))


async def _build_impl(package_type_str: str | None, output: Path | None) -> None:
    """Async implementation of the build command."""
    import httpx

    from artifact_catalog.core.config import get_settings
    from artifact_catalog.core.database import create_tables, dispose_engine, get_session_factory, init_engine
    from artifact_catalog.lib.cache.base import CacheGateway
    from artifact_catalog.lib.cache.database import DatabaseCache
    from artifact_catalog.lib.cache.memory import InMemoryCache
    from artifact_catalog.lib.catalog.errors import CatalogError
    from artifact_catalog.lib.catalog.types import PackageType
    from artifact_catalog.schemas.catalog import CatalogResponse, PackageResponse
    from artifact_catalog.services.catalog_service import create_catalog_service

    try:
        package_types = (PackageType(package_type_str),) if package_type_str else tuple(PackageType)
    except ValueError as e:
        typer.echo(f"Error: unknown package type '{package_type_str}'", err=True)
        raise typer.Exit(code=1) from e

    settings = get_settings()
    durable_cache: CacheGateway = InMemoryCache()
    if settings.cache_database_url:
        init_engine(settings.cache_database_url, echo=False)
        await create_tables()
        durable_cache = DatabaseCache(get_session_factory())

    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True) as client:
            service = create_catalog_service(settings, client, durable_cache)
            packages = []
            for package_type in package_types:
                logger.info("Building {} catalog", package_type)
                catalog = await service.refresh(package_type)
                typer.echo(f"{package_type.display_name}: {len(catalog)} package(s)")
                packages.extend(catalog)
    except CatalogError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        await dispose_engine()

    if output is not None:
        response = CatalogResponse(
            total=len(packages),
            packages=[PackageResponse.from_package(package) for package in packages],
        )
        output.write_text(json.dumps(response.model_dump(), indent=2))
        typer.echo(f"Wrote {len(packages)} package(s) to {output}")
