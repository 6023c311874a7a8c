# =============================================================================
# app/server.py - HTTP Server Runner
# =============================================================================
# Binds the application to HOST:PORT (0.0.0.0:3000 by default) with uvicorn
# and blocks until the process is terminated.
#
# A failed bind (port in use, no permission for the port) is fatal: uvicorn
# logs the OSError and the process exits with status 1.
#
# Usage:
#   bus-booking-api
#   PORT=8080 bus-booking-api
# =============================================================================

import logging

import uvicorn
from fastapi import FastAPI

from app.config import Settings, get_settings
from app.main import create_app

logger = logging.getLogger(__name__)


class GatewayServer(uvicorn.Server):
    """uvicorn server that announces itself once the socket is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info(f"Server is running on http://localhost:{self.config.port}")


def build_server_config(settings: Settings, app: FastAPI | None = None) -> uvicorn.Config:
    """
    Build the uvicorn configuration for the gateway.

    Args:
        settings: Application settings (HOST and PORT)
        app: Application to serve; built from settings when omitted

    Returns:
        uvicorn.Config bound to settings.HOST and settings.PORT
    """
    if app is None:
        app = create_app(settings)

    return uvicorn.Config(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level="debug" if settings.DEBUG else "info",
    )


def serve(settings: Settings | None = None) -> None:
    """Build the application and serve it until terminated."""
    settings = settings or get_settings()
    server = GatewayServer(build_server_config(settings))
    server.run()


def main() -> None:
    """Console script entry point."""
    serve()


if __name__ == "__main__":
    main()
