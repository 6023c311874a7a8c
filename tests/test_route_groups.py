# =============================================================================
# tests/test_route_groups.py - Route Group Tests
# =============================================================================
# This module contains tests for:
# - Loading handlers from "module:attribute" import paths
# - Prefix validation (malformed, duplicate and nested prefixes)
# - Mounting APIRouters and bare ASGI apps
# =============================================================================

import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient

from app.config import Settings
from app.exceptions import RouteGroupConflictError, RouteGroupLoadError
from app.main import create_app
from app.route_groups import (
    RouteGroup,
    default_route_groups,
    load_handler,
    validate_route_groups,
)
from app.routers import auth as auth_slot
from tests.stub_routes import auth_router, booking_router, bookings_asgi_app, bus_router


# =============================================================================
# load_handler Tests
# =============================================================================

class TestLoadHandler:
    """Test importing route group handlers."""

    def test_module_and_attribute(self):
        assert load_handler("tests.stub_routes:auth_router") is auth_router

    def test_attribute_defaults_to_router(self):
        assert load_handler("app.routers.auth") is auth_slot.router

    def test_asgi_callable_accepted(self):
        assert load_handler("tests.stub_routes:bookings_asgi_app") is bookings_asgi_app

    def test_missing_module(self):
        with pytest.raises(RouteGroupLoadError) as exc_info:
            load_handler("tests.no_such_module:router")

        assert exc_info.value.import_path == "tests.no_such_module:router"
        assert "ROUTE_GROUP_LOAD" in str(exc_info.value)

    def test_missing_attribute(self):
        with pytest.raises(RouteGroupLoadError, match="no attribute 'missing'"):
            load_handler("tests.stub_routes:missing")

    def test_not_a_handler(self):
        with pytest.raises(RouteGroupLoadError, match="not an APIRouter or ASGI app"):
            load_handler("tests.stub_routes:not_a_handler")


# =============================================================================
# RouteGroup / Validation Tests
# =============================================================================

class TestRouteGroup:
    """Test prefix ownership."""

    @pytest.mark.parametrize("path,expected", [
        ("/api/buses", True),
        ("/api/buses/", True),
        ("/api/buses/12/seats", True),
        ("/api/busesx", False),
        ("/api/bookings", False),
        ("/", False),
    ])
    def test_owns(self, path, expected):
        group = RouteGroup("buses", "/api/buses", bus_router)

        assert group.owns(path) is expected

    def test_is_router(self):
        assert RouteGroup("auth", "/api/auth", auth_router).is_router
        assert not RouteGroup("bookings", "/api/bookings", bookings_asgi_app).is_router


class TestValidateRouteGroups:
    """Test prefix validation."""

    def test_default_prefixes_are_disjoint(self, stub_route_groups):
        validate_route_groups(stub_route_groups)

    def test_similar_but_distinct_prefixes(self):
        validate_route_groups([
            RouteGroup("bus", "/api/bus", bus_router),
            RouteGroup("buses", "/api/buses", booking_router),
        ])

    @pytest.mark.parametrize("prefix", ["api/auth", "/", "/api/auth/", ""])
    def test_malformed_prefix(self, prefix):
        with pytest.raises(RouteGroupConflictError):
            validate_route_groups([RouteGroup("auth", prefix, auth_router)])

    def test_duplicate_prefix(self):
        with pytest.raises(RouteGroupConflictError, match="overlap"):
            validate_route_groups([
                RouteGroup("auth", "/api/auth", auth_router),
                RouteGroup("login", "/api/auth", bus_router),
            ])

    def test_nested_prefix(self):
        with pytest.raises(RouteGroupConflictError, match="overlap"):
            validate_route_groups([
                RouteGroup("api", "/api", auth_router),
                RouteGroup("buses", "/api/buses", bus_router),
            ])

    def test_duplicate_name(self):
        with pytest.raises(RouteGroupConflictError, match="Duplicate"):
            validate_route_groups([
                RouteGroup("auth", "/api/auth", auth_router),
                RouteGroup("auth", "/api/login", bus_router),
            ])

    def test_create_app_refuses_overlap(self, settings):
        with pytest.raises(RouteGroupConflictError):
            create_app(settings, route_groups=[
                RouteGroup("api", "/api", auth_router),
                RouteGroup("buses", "/api/buses", bus_router),
            ])


# =============================================================================
# Default Groups and Mounting
# =============================================================================

class TestDefaultRouteGroups:
    """Test the auth/buses/bookings groups built from settings."""

    def test_names_and_prefixes(self, settings):
        groups = default_route_groups(settings)

        assert [(g.name, g.prefix) for g in groups] == [
            ("auth", "/api/auth"),
            ("buses", "/api/buses"),
            ("bookings", "/api/bookings"),
        ]

    def test_shipped_slots_are_routers(self, settings):
        for group in default_route_groups(settings):
            assert isinstance(group.handler, APIRouter)

    def test_import_paths_from_settings(self):
        settings = Settings(
            _env_file=None,
            AUTH_ROUTES="tests.stub_routes:auth_router",
            BUS_ROUTES="tests.stub_routes:bus_router",
            BOOKING_ROUTES="tests.stub_routes:booking_router",
        )
        client = TestClient(create_app(settings))

        assert client.get("/api/auth/login").json()["group"] == "auth"
        assert client.get("/api/buses/1").json()["group"] == "buses"
        assert client.get("/api/bookings/1").json()["group"] == "bookings"

    def test_bad_import_path_aborts_startup(self):
        settings = Settings(_env_file=None, BUS_ROUTES="tests.no_such_module:router")

        with pytest.raises(RouteGroupLoadError):
            create_app(settings)


class TestMountASGIApp:
    """Route groups may be plain ASGI applications."""

    def test_asgi_group_receives_requests(self, settings):
        app = create_app(settings, route_groups=[
            RouteGroup("auth", "/api/auth", auth_router),
            RouteGroup("buses", "/api/buses", bus_router),
            RouteGroup("bookings", "/api/bookings", bookings_asgi_app),
        ])
        client = TestClient(app)

        response = client.get("/api/bookings/42", headers={"Origin": "https://x.example"})

        assert response.status_code == 200
        assert response.json()["group"] == "bookings-asgi"
        assert response.headers["access-control-allow-origin"] == "*"
        assert client.get("/api/buses/42").json()["group"] == "buses"
