# =============================================================================
# app/route_groups.py - Route Group Mounting
# =============================================================================
# A route group is a named path prefix plus an opaque handler. The gateway
# owns the prefix; everything below it belongs to the handler.
#
# A handler is either:
# - a FastAPI APIRouter, included under the prefix
# - any ASGI application, mounted at the prefix
#
# Usage:
#   groups = default_route_groups(settings)
#   mount_route_groups(app, groups)
# =============================================================================

import importlib
import logging
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, FastAPI

from app.config import Settings
from app.exceptions import RouteGroupConflictError, RouteGroupLoadError

logger = logging.getLogger(__name__)

AUTH_PREFIX = "/api/auth"
BUS_PREFIX = "/api/buses"
BOOKING_PREFIX = "/api/bookings"


@dataclass(frozen=True)
class RouteGroup:
    """A handler that owns every path under `prefix`."""
    name: str
    prefix: str
    handler: Any

    @property
    def is_router(self) -> bool:
        return isinstance(self.handler, APIRouter)

    def owns(self, path: str) -> bool:
        """True if the path falls under this group's prefix."""
        return path == self.prefix or path.startswith(self.prefix + "/")


def load_handler(import_path: str) -> Any:
    """
    Import a route group handler from "package.module:attribute".

    The attribute defaults to `router` when the path has no colon.

    Raises:
        RouteGroupLoadError: If the module or attribute is missing, or the
            object is neither an APIRouter nor callable
    """
    module_name, _, attribute = import_path.partition(":")
    attribute = attribute or "router"

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise RouteGroupLoadError(import_path, str(e))

    try:
        handler = getattr(module, attribute)
    except AttributeError:
        raise RouteGroupLoadError(import_path, f"module has no attribute '{attribute}'")

    if not isinstance(handler, APIRouter) and not callable(handler):
        raise RouteGroupLoadError(import_path, f"'{attribute}' is not an APIRouter or ASGI app")

    return handler


def default_route_groups(settings: Settings) -> list[RouteGroup]:
    """
    The three route groups of the bus booking API.

    Returns:
        Auth, buses and bookings groups loaded from the configured import paths
    """
    return [
        RouteGroup("auth", AUTH_PREFIX, load_handler(settings.AUTH_ROUTES)),
        RouteGroup("buses", BUS_PREFIX, load_handler(settings.BUS_ROUTES)),
        RouteGroup("bookings", BOOKING_PREFIX, load_handler(settings.BOOKING_ROUTES)),
    ]


def validate_route_groups(groups: list[RouteGroup]) -> None:
    """
    Check that every prefix is well formed and owned by exactly one group.

    Raises:
        RouteGroupConflictError: On a malformed, duplicate or nested prefix
    """
    for group in groups:
        if not group.prefix.startswith("/") or group.prefix == "/":
            raise RouteGroupConflictError(
                f"Route group '{group.name}' has invalid prefix '{group.prefix}'"
            )
        if group.prefix.endswith("/"):
            raise RouteGroupConflictError(
                f"Route group '{group.name}' prefix must not end with '/': '{group.prefix}'"
            )

    names = [group.name for group in groups]
    if len(set(names)) != len(names):
        raise RouteGroupConflictError(f"Duplicate route group names: {names}")

    for index, group in enumerate(groups):
        for other in groups[index + 1:]:
            if group.owns(other.prefix) or other.owns(group.prefix):
                raise RouteGroupConflictError(
                    f"Route groups '{group.name}' ({group.prefix}) and "
                    f"'{other.name}' ({other.prefix}) overlap"
                )


def mount_route_groups(app: FastAPI, groups: list[RouteGroup]) -> None:
    """Validate and attach each route group to the application."""
    validate_route_groups(groups)

    for group in groups:
        if group.is_router:
            app.include_router(group.handler, prefix=group.prefix, tags=[group.name])
        else:
            app.mount(group.prefix, group.handler, name=group.name)
        logger.info(f"Mounted route group '{group.name}' at {group.prefix}")
