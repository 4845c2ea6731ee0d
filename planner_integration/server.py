"""
Microsoft Planner Integration server entry point.

Configures logging and runs the Starlette app under uvicorn with explicit
signal handling for graceful shutdown.

Run: planner-integration [--host HOST] [--port PORT]
     python -m planner_integration.server
"""

import argparse
import asyncio
import signal
import sys
from typing import Optional, Sequence

import uvicorn
from loguru import logger

from planner_integration.app import create_app
from planner_integration.config import Settings, settings
from planner_integration.version import read_version

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str) -> None:
    """Replace loguru's default handler with the service format."""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper(), colorize=True)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="planner-integration",
        description="Microsoft Planner integration demo server",
    )
    parser.add_argument("--host", help="Bind address (overrides HOST)")
    parser.add_argument("--port", type=int, help="Bind port (overrides PORT)")
    parser.add_argument("--version", action="version", version=read_version())
    return parser.parse_args(argv)


async def serve(app_settings: Settings) -> None:
    """Run uvicorn with explicit signal handling for graceful shutdown."""
    config = uvicorn.Config(
        create_app(app_settings),
        host=app_settings.host,
        port=app_settings.port,
        log_level=app_settings.log_level.lower(),
        timeout_graceful_shutdown=app_settings.shutdown_timeout_seconds,
    )
    server = uvicorn.Server(config)

    loop = asyncio.get_running_loop()

    def handle_exit(sig: int, *_: object) -> None:
        """Handle SIGTERM/SIGINT gracefully without noisy stack traces."""
        logger.info(f"Received signal {sig}, initiating graceful shutdown")
        server.should_exit = True

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, handle_exit, sig)
        except NotImplementedError:
            # Non-POSIX platforms
            pass

    await server.serve()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Console script entry point."""
    args = parse_args(argv)

    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    app_settings = settings.model_copy(update=overrides)

    configure_logging(app_settings.log_level)
    asyncio.run(serve(app_settings))


if __name__ == "__main__":
    main()
