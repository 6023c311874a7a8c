# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Usage:
#   @router.post("/")
#   async def create_booking(body: ParsedBody):
#       seat = body.get("seat")
# =============================================================================

from typing import Annotated, Any

from fastapi import Depends, Request

from app.config import Settings
from app.middleware.body import BODY_STATE_KEY


def get_app_settings(request: Request) -> Settings:
    """
    Get the Settings the running application was built with.

    create_app() stores them on app.state.
    """
    return request.app.state.settings


def get_parsed_body(request: Request) -> Any:
    """
    Get the request payload decoded by the body middleware.

    Returns {} when the request had no JSON or form body.
    """
    return getattr(request.state, BODY_STATE_KEY, {})


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
ParsedBody = Annotated[Any, Depends(get_parsed_body)]
