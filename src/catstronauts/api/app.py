"""
Main FastAPI application for the Catstronauts gateway
"""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug, log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Catstronauts API...", track_api_url=settings.track_api_url)

    owns_client = app.state.http_client is None
    if owns_client:
        app.state.http_client = httpx.AsyncClient()
        logger.info("Upstream HTTP client initialized")

    yield

    logger.info("Shutting down Catstronauts API...")
    if owns_client:
        await app.state.http_client.aclose()
        app.state.http_client = None


def create_app(http_client: httpx.AsyncClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        http_client: Optional HTTP client shared by every request's TrackAPI.
            When omitted, one is created for the lifetime of the application.
    """
    app = FastAPI(
        title="Catstronauts API",
        description="GraphQL gateway over the Catstronauts tracks REST API",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.http_client = http_client

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        graphql_router = create_graphql_router()
        app.include_router(graphql_router, prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catstronauts.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
