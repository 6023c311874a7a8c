# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Clears gateway environment variables so defaults are predictable
# - Builds the application with stand-in route groups
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds its module-level app from the environment on import

for _name in ("PORT", "HOST", "AUTH_ROUTES", "BUS_ROUTES", "BOOKING_ROUTES"):
    os.environ.pop(_name, None)
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.route_groups import RouteGroup
from tests.stub_routes import auth_router, booking_router, bus_router

ORIGIN = "https://tickets.example.com"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Settings with defaults only (no .env file)."""
    return Settings(_env_file=None)


@pytest.fixture
def stub_route_groups():
    """Auth, buses and bookings groups backed by stub routers."""
    return [
        RouteGroup("auth", "/api/auth", auth_router),
        RouteGroup("buses", "/api/buses", bus_router),
        RouteGroup("bookings", "/api/bookings", booking_router),
    ]


@pytest.fixture
def app(settings, stub_route_groups):
    """Application wired with stub route groups."""
    return create_app(settings, route_groups=stub_route_groups)


@pytest.fixture
def client(app):
    """Test client for the stubbed application."""
    return TestClient(app)


@pytest.fixture
def cross_origin():
    """Headers of a browser request from another origin."""
    return {"Origin": ORIGIN}
