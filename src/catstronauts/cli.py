#!/usr/bin/env python3
"""
Main CLI entry point for the Catstronauts gateway.
"""

import os
import sys

import click
import uvicorn

from catstronauts import __version__
from catstronauts.config import settings
from catstronauts.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="catstronauts")
def cli() -> None:
    """Catstronauts CLI - run the GraphQL gateway."""
    pass


@cli.command()
@click.option(
    "--host",
    default="0.0.0.0",
    help="Host to bind to (default: 0.0.0.0)",
)
@click.option(
    "--port",
    default=4000,
    type=int,
    help="Port to bind to (default: 4000)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--track-api-url",
    default=None,
    help="Base URL of the upstream tracks REST API",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(
    host: str,
    port: int,
    reload: bool,
    track_api_url: str | None,
    log_level: str,
) -> None:
    """Start the Catstronauts GraphQL server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting Catstronauts API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # Settings were loaded when the package was imported: update the singleton
    # for this process, and the environment for reloader subprocesses
    if track_api_url:
        settings.track_api_url = track_api_url
        os.environ["CATSTRONAUTS_TRACK_API_URL"] = track_api_url
    settings.debug = log_level == "debug"
    settings.log_level = log_level.upper()
    os.environ["CATSTRONAUTS_DEBUG"] = "true" if settings.debug else "false"
    os.environ["CATSTRONAUTS_LOG_LEVEL"] = settings.log_level

    try:
        uvicorn.run(
            "catstronauts.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
