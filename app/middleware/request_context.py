"""Request and correlation ID middleware.

Forwards or generates X-Request-ID and X-Correlation-ID, stores both on
scope state for handlers and logs, and echoes them on the response.
Client-provided values are sanitized (length + character set) to prevent
log injection. Uses raw ASGI (no BaseHTTPMiddleware).
"""

import logging
import re
import time
import uuid
from typing import Callable

from app.middleware._asgi import get_header, with_response_headers

logger = logging.getLogger(__name__)

# Safe for logging: alphanumeric, hyphen, underscore; max length to avoid abuse.
ID_MAX_LENGTH = 64
ID_ALLOWED_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1," + str(ID_MAX_LENGTH) + r"}$")


def sanitize_id(raw: str | None) -> str | None:
    """Return raw stripped if safe, else None."""
    if not raw:
        return None
    value = raw.strip()
    if not ID_ALLOWED_PATTERN.match(value):
        return None
    return value


def RequestContextMiddleware(
    app: Callable,
    request_id_header: str = "X-Request-ID",
    correlation_id_header: str = "X-Correlation-ID",
) -> Callable:
    """Attach request_id and correlation_id to each HTTP request. Raw ASGI.

    The correlation ID falls back to the request ID when the client sends none.
    """

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_id(get_header(scope, request_id_header)) or str(uuid.uuid4())
        correlation_id = (
            sanitize_id(get_header(scope, correlation_id_header)) or request_id
        )
        state = scope.setdefault("state", {})
        state["request_id"] = request_id
        state["correlation_id"] = correlation_id

        status: dict[str, int] = {}
        wrapped = with_response_headers(
            send,
            [
                (request_id_header.encode(), request_id.encode()),
                (correlation_id_header.encode(), correlation_id.encode()),
            ],
        )

        async def send_and_capture(message: dict) -> None:
            if message["type"] == "http.response.start":
                status["code"] = message["status"]
            await wrapped(message)

        started = time.perf_counter()
        try:
            await app(scope, receive, send_and_capture)
        finally:
            logger.debug(
                "%s %s -> %s in %.1fms [request_id=%s]",
                scope.get("method", ""),
                scope.get("path", ""),
                status.get("code", "-"),
                (time.perf_counter() - started) * 1000,
                request_id,
            )

    return asgi_app
