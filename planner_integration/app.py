"""
HTTP front for the Planner integration.

Starlette application exposing:
- GET /        service description
- GET /health  liveness with version
- GET /test    runs the Planner probe, initializing the Graph client on demand

The GraphContext is created per application and stored on app.state, so
handlers never reach for a module-level client.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from loguru import logger
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from planner_integration.config import Settings
from planner_integration.config import settings as default_settings
from planner_integration.context import GraphContext
from planner_integration.probe import run_probe
from planner_integration.version import read_version

DOCUMENTATION_URL = "https://learn.microsoft.com/en-us/graph/api/resources/planner-overview"


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def check_environment(settings: Settings) -> bool:
    """
    Log the state of the required environment variables.

    Returns:
        True if every required variable is set
    """
    missing = settings.missing_required_env()
    if missing:
        logger.warning("⚠️  Missing environment variables:")
        for name in missing:
            logger.warning(f"   - {name}")
        logger.warning("📝 Please create a .env file with your Microsoft 365 credentials")
        return False

    logger.info("✅ All required environment variables found")
    return True


async def root(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "message": "Microsoft Planner Integration API",
            "version": read_version(),
            "endpoints": {
                "health": "/health",
                "test": "/test",
            },
            "documentation": DOCUMENTATION_URL,
        }
    )


async def health(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "status": "healthy",
            "timestamp": utc_timestamp(),
            "version": read_version(),
        }
    )


async def run_test(request: Request) -> JSONResponse:
    """Run the Planner probe, building the Graph client first if needed."""
    context: GraphContext = request.app.state.graph_context

    try:
        client = await context.ensure_client()
        if client is None:
            return JSONResponse(
                {
                    "error": "Failed to initialize Microsoft Graph client",
                    "message": "Check your environment variables and Microsoft 365 credentials",
                },
                status_code=500,
            )

        results = await run_probe(client)

        return JSONResponse(
            {
                "status": "test_completed",
                "results": results,
                "timestamp": utc_timestamp(),
            }
        )
    except Exception as e:
        logger.error(f"❌ Planner API test failed: {e}")
        return JSONResponse(
            {
                "error": "Test failed",
                "message": str(e),
            },
            status_code=500,
        )


@asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    """Startup environment check and eager client initialization; cleanup on shutdown."""
    context: GraphContext = app.state.graph_context
    port = context.settings.port

    logger.info("🚀 Starting Microsoft Planner Integration Server...")
    logger.info(f"📊 Version: {read_version()}")

    # Missing credentials never stop the server; /test retries initialization on demand
    if check_environment(context.settings):
        await context.initialize()

    logger.info(f"🌐 Server running on http://localhost:{port}")
    logger.info("🔗 Test endpoints:")
    logger.info(f"   - Health: http://localhost:{port}/health")
    logger.info(f"   - Test: http://localhost:{port}/test")

    yield

    await context.aclose()
    logger.info("👋 Shutting down Microsoft Planner Integration Server...")


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[GraphContext] = None,
) -> Starlette:
    """
    Build the ASGI application.

    Args:
        settings: Settings to use (defaults to the global settings instance)
        context: Pre-built GraphContext (tests inject one with a mock transport)

    Returns:
        Configured Starlette application
    """
    if context is None:
        context = GraphContext(settings or default_settings)

    app = Starlette(
        routes=[
            Route("/", root, methods=["GET"]),
            Route("/health", health, methods=["GET"]),
            Route("/test", run_test, methods=["GET"]),
        ],
        lifespan=lifespan,
    )
    app.state.graph_context = context
    return app
