# =============================================================================
# app/middleware/body.py - Request Body Decoding Middleware
# =============================================================================
# Pure ASGI middleware that decodes JSON and URL-encoded bodies before any
# route handler runs. The decoded payload is stored on request.state.body
# and the raw bytes are replayed downstream unchanged.
#
# request.state.body is always set: {} when there is no body or no decoder
# matched the Content-Type.
# =============================================================================

import json
import logging
import re
from typing import Any

from starlette.datastructures import Headers
from starlette.requests import ClientDisconnect
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.exceptions import (
    BusBookingException,
    MalformedBodyError,
    PayloadTooLargeError,
    TooManyParametersError,
    UnsupportedCharsetError,
)
from lib.querystring import DEFAULT_DEPTH, count_parameters, parse_form

logger = logging.getLogger(__name__)

BODY_STATE_KEY = "body"
DECODED_FLAG_KEY = "body_decoded"

DEFAULT_LIMIT = 100 * 1024

# First non-whitespace character of a JSON document
_FIRST_CHAR = re.compile(r"^[\x20\x09\x0a\x0d]*(.)", re.DOTALL)

# Form fields may use list indices up to this, or up to the field count if higher
FORM_ARRAY_LIMIT = 100


def _reject_constant(name: str) -> Any:
    """NaN and Infinity are not JSON."""
    raise ValueError(f"Unexpected token {name}")


def parse_content_type(value: str) -> tuple[str, dict[str, str]]:
    """
    Split a Content-Type header into media type and parameters.

    Example:
        parse_content_type("application/json; charset=UTF-8")
        # ("application/json", {"charset": "utf-8"})
    """
    media_type, _, raw_params = value.partition(";")
    params = {}
    for item in raw_params.split(";"):
        name, sep, param_value = item.partition("=")
        if not sep:
            continue
        params[name.strip().lower()] = param_value.strip().strip('"').lower()
    return media_type.strip().lower(), params


def has_body(headers: Headers) -> bool:
    """True when the request declares a body (Content-Length or chunked)."""
    return "transfer-encoding" in headers or "content-length" in headers


async def read_body(receive: Receive, limit: int) -> bytes:
    """Buffer the request body, refusing to hold more than limit bytes."""
    chunks = []
    size = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            raise ClientDisconnect()
        chunk = message.get("body", b"")
        size += len(chunk)
        if size > limit:
            raise PayloadTooLargeError(size, limit)
        chunks.append(chunk)
        if not message.get("more_body", False):
            return b"".join(chunks)


def replay_body(body: bytes, receive: Receive) -> Receive:
    """Build a receive callable that yields the buffered body once."""
    sent = False

    async def replay() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        # later calls only ever wait for the disconnect
        return await receive()

    return replay


class BodyDecoderMiddleware:
    """
    Base class for body decoders.

    Subclasses set `media_type` and implement `decode()`. A decoder only
    runs when the request has a body, the media type matches and no earlier
    decoder has already parsed it.
    """

    media_type: str = ""
    charsets: tuple[str, ...] = ("utf-8",)

    def __init__(self, app: ASGIApp, limit: int = DEFAULT_LIMIT):
        self.app = app
        self.limit = limit

    def decode(self, raw: bytes, charset: str) -> Any:
        raise NotImplementedError

    def _check_charset(self, params: dict[str, str]) -> str:
        charset = params.get("charset", self.charsets[0])
        if charset not in self.charsets:
            raise UnsupportedCharsetError(charset, list(self.charsets))
        return charset

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        state = scope.setdefault("state", {})
        state.setdefault(BODY_STATE_KEY, {})

        headers = Headers(scope=scope)
        media_type, params = parse_content_type(headers.get("content-type", ""))

        if state.get(DECODED_FLAG_KEY) or media_type != self.media_type or not has_body(headers):
            await self.app(scope, receive, send)
            return

        try:
            charset = self._check_charset(params)

            declared = headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > self.limit:
                raise PayloadTooLargeError(int(declared), self.limit)

            raw = await read_body(receive, self.limit)
            state[BODY_STATE_KEY] = self.decode(raw, charset)
            state[DECODED_FLAG_KEY] = True

        except ClientDisconnect:
            logger.debug("Client disconnected before the body was read")
            return

        except BusBookingException as exc:
            logger.warning(f"Rejected {self.media_type} body on {scope['path']}: {exc.message}")
            response = JSONResponse(status_code=exc.status_code, content=exc.to_dict())
            await response(scope, receive, send)
            return

        await self.app(scope, replay_body(raw, receive), send)


class JSONBodyMiddleware(BodyDecoderMiddleware):
    """
    Decode application/json bodies.

    Strict: only objects and arrays are accepted at the top level.
    An empty body decodes to {}.
    """

    media_type = "application/json"
    charsets = ("utf-8", "utf-16", "utf-32")

    def decode(self, raw: bytes, charset: str) -> Any:
        if not raw:
            return {}

        try:
            text = raw.decode(charset)
        except UnicodeDecodeError as e:
            raise MalformedBodyError(self.media_type, str(e))

        match = _FIRST_CHAR.match(text)
        if match is None or match.group(1) not in ("{", "["):
            raise MalformedBodyError(
                self.media_type,
                "top-level value must be an object or an array",
            )

        try:
            return json.loads(text, parse_constant=_reject_constant)
        except RecursionError:
            raise MalformedBodyError(self.media_type, "nesting too deep")
        except ValueError as e:
            raise MalformedBodyError(self.media_type, str(e))


class URLEncodedBodyMiddleware(BodyDecoderMiddleware):
    """Decode application/x-www-form-urlencoded bodies with nested keys."""

    media_type = "application/x-www-form-urlencoded"

    def __init__(
        self,
        app: ASGIApp,
        limit: int = DEFAULT_LIMIT,
        parameter_limit: int = 1000,
        depth: int = DEFAULT_DEPTH,
    ):
        super().__init__(app, limit=limit)
        self.parameter_limit = parameter_limit
        self.depth = depth

    def decode(self, raw: bytes, charset: str) -> Any:
        try:
            text = raw.decode(charset)
        except UnicodeDecodeError as e:
            raise MalformedBodyError(self.media_type, str(e))

        count = count_parameters(text)
        if count > self.parameter_limit:
            raise TooManyParametersError(count, self.parameter_limit)

        return parse_form(
            text,
            depth=self.depth,
            array_limit=max(FORM_ARRAY_LIMIT, count),
        )
