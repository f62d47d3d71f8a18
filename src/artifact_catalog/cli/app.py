"""Typer CLI root application with serve command."""

import typer

from artifact_catalog.core.config import get_settings
from artifact_catalog.core.logging import setup_logging

app = typer.Typer(name="artifact-catalog", help="Package catalog builder and API server")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, log_json=settings.log_json)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "artifact_catalog.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from artifact_catalog.cli.catalog_cmd import catalog_app
    from artifact_catalog.cli.stats_cmd import stats_app

    app.add_typer(catalog_app, name="catalog", help="Catalog build commands")
    app.add_typer(stats_app, name="stats", help="Download statistics commands")


_register_subcommands()
