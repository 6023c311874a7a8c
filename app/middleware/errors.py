# =============================================================================
# app/middleware/errors.py - Unhandled Error Stage
# =============================================================================
# Sits directly inside the CORS stage. An exception no handler dealt with is
# logged and turned into the framework's plain 500 here, so the response
# still passes back through CORS.
# =============================================================================

import logging

from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class UnhandledErrorMiddleware:
    """Convert uncaught exceptions into `500 Internal Server Error`."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def track_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, track_send)
        except Exception as exc:
            logger.exception(f"Unhandled error on {scope['method']} {scope['path']}: {exc}")
            if response_started:
                raise
            response = PlainTextResponse("Internal Server Error", status_code=500)
            await response(scope, receive, send)
