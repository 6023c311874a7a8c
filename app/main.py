# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Bus Booking API.
# create_app() wires the application in a fixed order:
#   1. middleware chain: CORS -> JSON body -> URL-encoded body
#   2. exception handlers
#   3. route groups: /api/auth, /api/buses, /api/bookings
#   4. liveness endpoints: GET /, GET /health
#
# Usage:
#   bus-booking-api                      (binds 0.0.0.0:$PORT, default 3000)
#   uvicorn app.main:app --reload
# =============================================================================

import logging

from fastapi import FastAPI

from app import __version__
from app.config import Settings, get_settings
from app.exceptions import BusBookingException, bus_booking_exception_handler
from app.middleware import build_middleware_chain
from app.route_groups import RouteGroup, default_route_groups, mount_route_groups
from app.routers import health

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if get_settings().DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    route_groups: list[RouteGroup] | None = None,
) -> FastAPI:
    """
    Build the Bus Booking API application.

    Args:
        settings: Application settings; defaults to get_settings()
        route_groups: Route groups to mount; defaults to the auth, buses and
            bookings handlers named in settings

    Returns:
        FastAPI: Fully wired application, ready to be served

    Raises:
        GatewayConfigurationError: If a route group cannot be loaded or
            prefixes overlap
    """
    settings = settings or get_settings()
    chain = build_middleware_chain(settings)

    app = FastAPI(
        title="Bus Booking API",
        description="Gateway for authentication, bus listings and bookings.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        middleware=chain.as_middleware(),
        openapi_tags=[
            {
                "name": "auth",
                "description": "Authentication endpoints",
            },
            {
                "name": "buses",
                "description": "Bus listings",
            },
            {
                "name": "bookings",
                "description": "Seat bookings",
            },
            {
                "name": "Health",
                "description": "Liveness checks",
            },
        ],
    )
    app.state.settings = settings
    app.state.middleware_chain = chain

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(BusBookingException, bus_booking_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    if route_groups is None:
        route_groups = default_route_groups(settings)
    mount_route_groups(app, route_groups)

    # Liveness endpoints
    app.include_router(health.router, tags=["Health"])

    logger.info(
        f"Bus Booking API configured in {settings.ENVIRONMENT} mode "
        f"(middleware: {' -> '.join(chain.names)})"
    )
    return app


app = create_app(get_settings())
