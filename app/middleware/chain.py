# =============================================================================
# app/middleware/chain.py - Ordered Middleware Chain
# =============================================================================
# The middleware chain is an explicit, ordered list of named stages. Each
# stage declares which stages must run before it, and MiddlewareChain
# refuses to be built if that order is violated.
#
# Stage order for this gateway:
#   1. cors        - answers preflight, sets CORS headers on every response
#   2. errors      - turns uncaught exceptions into a 500 inside the CORS stage
#   3. json        - decodes application/json into request.state.body
#   4. urlencoded  - decodes form bodies into request.state.body
#
# Usage:
#   chain = build_middleware_chain(settings)
#   app = FastAPI(middleware=chain.as_middleware())
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import Any

from starlette.middleware import Middleware

from app.config import Settings
from app.exceptions import GatewayConfigurationError, MiddlewareOrderError
from app.middleware.body import JSONBodyMiddleware, URLEncodedBodyMiddleware
from app.middleware.cors import GatewayCORSMiddleware
from app.middleware.errors import UnhandledErrorMiddleware

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MiddlewareStage:
    """
    One named stage of the request pipeline.

    precondition and postcondition document what the stage expects from
    earlier stages and what it guarantees to later ones.
    """
    name: str
    middleware_class: type
    options: dict[str, Any] = field(default_factory=dict)
    requires: tuple[str, ...] = ()
    precondition: str = "none"
    postcondition: str = ""

    def as_middleware(self) -> Middleware:
        return Middleware(self.middleware_class, **self.options)


class MiddlewareChain:
    """Immutable, validated sequence of middleware stages."""

    def __init__(self, stages: list[MiddlewareStage]):
        seen: list[str] = []
        for stage in stages:
            if stage.name in seen:
                raise GatewayConfigurationError(
                    message=f"Middleware stage '{stage.name}' is registered twice",
                    code="MIDDLEWARE_DUPLICATE",
                )
            missing = [name for name in stage.requires if name not in seen]
            if missing:
                raise MiddlewareOrderError(stage.name, missing)
            seen.append(stage.name)
        self._stages = tuple(stages)

    @property
    def stages(self) -> tuple[MiddlewareStage, ...]:
        return self._stages

    @property
    def names(self) -> list[str]:
        return [stage.name for stage in self._stages]

    def __iter__(self):
        return iter(self._stages)

    def __len__(self) -> int:
        return len(self._stages)

    def as_middleware(self) -> list[Middleware]:
        """
        Starlette middleware list, outermost first.

        Starlette wraps user middleware so that the first entry sees the
        request first, which makes list order equal to execution order.
        """
        return [stage.as_middleware() for stage in self._stages]


def build_middleware_chain(settings: Settings) -> MiddlewareChain:
    """
    Build the gateway's fixed middleware chain from settings.

    Args:
        settings: Application settings (CORS policy and body limits)

    Returns:
        MiddlewareChain: cors -> errors -> json -> urlencoded
    """
    chain = MiddlewareChain([
        MiddlewareStage(
            name="cors",
            middleware_class=GatewayCORSMiddleware,
            options={
                "allow_origins": settings.cors_origins_list,
                "allow_methods": settings.cors_methods_list,
                "allow_headers": settings.cors_headers_list,
                "allow_credentials": settings.CORS_ALLOW_CREDENTIALS,
            },
            postcondition="CORS headers set; preflight answered",
        ),
        MiddlewareStage(
            name="errors",
            middleware_class=UnhandledErrorMiddleware,
            requires=("cors",),
            precondition="CORS headers applied",
            postcondition="uncaught exceptions become a plain 500",
        ),
        MiddlewareStage(
            name="json",
            middleware_class=JSONBodyMiddleware,
            options={"limit": settings.BODY_LIMIT_BYTES},
            requires=("cors",),
            precondition="CORS headers applied",
            postcondition="request.state.body holds decoded JSON",
        ),
        MiddlewareStage(
            name="urlencoded",
            middleware_class=URLEncodedBodyMiddleware,
            options={
                "limit": settings.BODY_LIMIT_BYTES,
                "parameter_limit": settings.URLENCODED_PARAMETER_LIMIT,
                "depth": settings.URLENCODED_DEPTH,
            },
            requires=("cors", "json"),
            precondition="JSON decoding already attempted",
            postcondition="request.state.body holds decoded form fields",
        ),
    ])
    logger.debug(f"Middleware chain: {' -> '.join(chain.names)}")
    return chain
