"""Security headers middleware.

Adds security-related response headers to API responses. Headers the
route already set win. Uses raw ASGI (no BaseHTTPMiddleware).
"""

from typing import Callable

from app.middleware._asgi import with_response_headers

# JSON API only: nothing may be framed, sniffed or loaded from responses.
DEFAULT_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Set security headers on all HTTP responses. Raw ASGI."""
    resolved = headers if headers is not None else DEFAULT_HEADERS
    header_list = [(k.encode(), v.encode()) for k, v in resolved.items()]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        await app(scope, receive, with_response_headers(send, header_list, overwrite=False))

    return asgi_app
