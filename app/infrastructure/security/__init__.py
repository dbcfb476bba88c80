"""Security: session token verification."""

from app.infrastructure.security.jwt import verify_session_token

__all__ = ["verify_session_token"]
