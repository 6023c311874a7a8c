# =============================================================================
# app/middleware/ - Request Pipeline
# =============================================================================
# - chain.py: ordered, validated middleware stages (CORS -> errors -> JSON -> form)
# - cors.py: CORS stage that also covers requests without an Origin header
# - errors.py: turns uncaught exceptions into a 500 inside the CORS stage
# - body.py: ASGI body decoders that fill request.state.body
# =============================================================================

from app.middleware.body import JSONBodyMiddleware, URLEncodedBodyMiddleware
from app.middleware.chain import MiddlewareChain, MiddlewareStage, build_middleware_chain
from app.middleware.cors import GatewayCORSMiddleware
from app.middleware.errors import UnhandledErrorMiddleware

__all__ = [
    "JSONBodyMiddleware",
    "URLEncodedBodyMiddleware",
    "MiddlewareChain",
    "MiddlewareStage",
    "build_middleware_chain",
    "GatewayCORSMiddleware",
    "UnhandledErrorMiddleware",
]
