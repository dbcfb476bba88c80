"""HTTP API tests (ASGI client, repositories faked)."""
