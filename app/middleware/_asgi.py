"""Raw ASGI helpers shared by the middleware in this package."""

from typing import Awaitable, Callable

Send = Callable[[dict], Awaitable[None]]


def get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def with_response_headers(
    send: Send, extra: list[tuple[bytes, bytes]], *, overwrite: bool = True
) -> Send:
    """Wrap send so http.response.start carries extra headers.

    With overwrite=False a header the app already set is left alone.
    """

    async def send_wrapper(message: dict) -> None:
        if message["type"] == "http.response.start":
            headers = list(message.get("headers", []))
            seen = {h[0].lower() for h in headers}
            for name_b, value_b in extra:
                if overwrite or name_b.lower() not in seen:
                    headers.append((name_b, value_b))
                    seen.add(name_b.lower())
            message["headers"] = headers
        await send(message)

    return send_wrapper
