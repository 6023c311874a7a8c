# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Two families of errors live here:
# - BusBookingException: request-time errors rendered as JSON responses
# - GatewayConfigurationError: startup-time errors that abort the process
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class BusBookingException(Exception):
    """
    Base exception for request-time errors.

    Route groups may raise subclasses of this to get the same structured
    error body the gateway itself produces.
    """

    def __init__(
        self,
        message: str,
        code: str = "BUS_BOOKING_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Body Decoding Exceptions
# =============================================================================

class MalformedBodyError(BusBookingException):
    """Raised when a JSON or form body cannot be decoded."""

    def __init__(self, media_type: str, error: str):
        super().__init__(
            message=f"Malformed request body: {error}",
            code="MALFORMED_BODY",
            status_code=400,
            suggestion=f"Send a valid {media_type} payload",
            details={"media_type": media_type},
        )


class PayloadTooLargeError(BusBookingException):
    """Raised when a request body exceeds the configured limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            message=f"Request body too large: {size} bytes (max: {limit} bytes)",
            code="PAYLOAD_TOO_LARGE",
            status_code=413,
            suggestion=f"Send a body smaller than {limit} bytes",
            details={"size": size, "limit": limit},
        )


class TooManyParametersError(BusBookingException):
    """Raised when a form body carries more fields than allowed."""

    def __init__(self, count: int, limit: int):
        super().__init__(
            message=f"Too many parameters: {count} (max: {limit})",
            code="TOO_MANY_PARAMETERS",
            status_code=413,
            suggestion=f"Send at most {limit} form fields per request",
            details={"count": count, "limit": limit},
        )


class UnsupportedCharsetError(BusBookingException):
    """Raised when the Content-Type charset cannot be decoded."""

    def __init__(self, charset: str, allowed: list[str]):
        super().__init__(
            message=f"Unsupported charset: {charset.upper()}",
            code="UNSUPPORTED_CHARSET",
            status_code=415,
            suggestion=f"Encode the body as one of: {', '.join(allowed)}",
            details={"charset": charset, "allowed": allowed},
        )


# =============================================================================
# Startup Configuration Exceptions
# =============================================================================

class GatewayConfigurationError(Exception):
    """
    Base error for invalid gateway wiring detected at startup.

    These are never turned into HTTP responses; the process refuses to start.
    """

    def __init__(
        self,
        message: str,
        code: str = "GATEWAY_CONFIGURATION_ERROR",
        suggestion: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.suggestion = suggestion

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result


class MiddlewareOrderError(GatewayConfigurationError):
    """Raised when a middleware stage is placed before a stage it requires."""

    def __init__(self, stage: str, missing: list[str]):
        super().__init__(
            message=f"Middleware stage '{stage}' must come after: {', '.join(missing)}",
            code="MIDDLEWARE_ORDER",
            suggestion="Register stages in dependency order (CORS first)",
        )
        self.stage = stage
        self.missing = missing


class RouteGroupLoadError(GatewayConfigurationError):
    """Raised when a route group handler cannot be imported."""

    def __init__(self, import_path: str, error: str):
        super().__init__(
            message=f"Could not load route group handler '{import_path}': {error}",
            code="ROUTE_GROUP_LOAD",
            suggestion="Use the form 'package.module:attribute' pointing at an APIRouter or ASGI app",
        )
        self.import_path = import_path


class RouteGroupConflictError(GatewayConfigurationError):
    """Raised when route group prefixes are invalid or overlap."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="ROUTE_GROUP_CONFLICT",
            suggestion="Give every route group a distinct prefix like '/api/<name>'",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def bus_booking_exception_handler(
    request: Request,
    exc: BusBookingException
) -> JSONResponse:
    """
    Convert BusBookingException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
