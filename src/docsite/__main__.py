"""Entry point for the API server."""

import asyncio
import contextlib
import signal
import sys

import structlog
import uvicorn

from docsite.app import create_app
from docsite.config import Settings
from docsite.logging import configure_logging

logger = structlog.get_logger()


async def serve(settings: Settings) -> None:
    """Run uvicorn until SIGTERM or SIGINT.

    Args:
        settings: Server configuration.
    """
    app = create_app(settings)

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level="warning",
        access_log=False,
    )
    server = uvicorn.Server(config)

    loop = asyncio.get_running_loop()

    def request_exit() -> None:
        logger.info("shutdown_triggered")
        server.should_exit = True

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, request_exit)

    await server.serve()


def main() -> None:
    """Entry point for python -m docsite."""
    settings = Settings()
    configure_logging(debug=settings.debug)

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(serve(settings))

    sys.exit(0)


if __name__ == "__main__":
    main()
