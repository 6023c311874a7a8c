# =============================================================================
# app/middleware/cors.py - CORS Stage
# =============================================================================
# Starlette's CORSMiddleware only decorates requests that carry an Origin
# header. With a wildcard origin policy the gateway sends
# Access-Control-Allow-Origin: * on every response, Origin or not.
# =============================================================================

from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import Message, Receive, Scope, Send


class GatewayCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that also marks Origin-less responses under a '*' policy."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope["type"] != "http"
            or not self.allow_all_origins
            or "origin" in Headers(scope=scope)
        ):
            await super().__call__(scope, receive, send)
            return

        async def send_with_origin(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers["Access-Control-Allow-Origin"] = "*"
            await send(message)

        await self.app(scope, receive, send_with_origin)
