"""CLI commands for download statistics."""

import asyncio
from datetime import date
from typing import Annotated

import typer

stats_app = typer.Typer()


@stats_app.command("most-downloaded")
def most_downloaded(
    month: Annotated[str, typer.Option("--month", help="Month to report (YYYY-MM)")],
    package_type: Annotated[
        str | None,
        typer.Option("--type", help="Package type: classic, bower, npm (default: all)"),
    ] = None,
    num: Annotated[int, typer.Option("--num", "-n", help="Entries per package type")] = 20,
) -> None:
    """Print the most downloaded artifacts for a month."""
    asyncio.run(_most_downloaded_impl(month, package_type, num))


async def _most_downloaded_impl(month: str, package_type_str: str | None, num: int) -> None:
    """Async implementation of the most-downloaded command."""
    import httpx

    from artifact_catalog.core.config import get_settings
    from artifact_catalog.lib.catalog.types import PackageType
    from artifact_catalog.lib.stats.client import StatsClient, StatsUnavailableError

    settings = get_settings()
    if not settings.stats_configured:
        typer.echo("Error: OSS_USERNAME, OSS_PASSWORD and OSS_PROJECT must be set", err=True)
        raise typer.Exit(code=1)

    try:
        period = date.fromisoformat(f"{month}-01")
        package_type = PackageType(package_type_str) if package_type_str else None
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        stats = StatsClient(
            client,
            settings.stats_url,
            settings.oss_username,
            settings.oss_password,
            settings.oss_project,
        )
        try:
            counts = await stats.most_downloaded(period, num, package_type)
        except StatsUnavailableError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1) from e

    for count in counts:
        typer.echo(f"{count.count:>10}  {count.group_id}:{count.artifact_id}")
