"""Session token verification.

Session tokens are issued by the identity provider and verified locally
with the configured key (PEM public key for RS256, shared secret for HS256).
"""

from typing import Any

from jose import JWTError, jwt

from app.core.config import Settings, get_settings


def verify_session_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    """Verify and decode a session JWT. Returns the payload.

    Enforces presence of exp and sub. The audience is checked only when
    identity_jwt_audience is configured.

    Args:
        token: JWT string (e.g. from Authorization header).
        settings: Optional settings; defaults to get_settings().

    Returns:
        Decoded payload dict.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = settings or get_settings()
    audience = settings.identity_jwt_audience
    try:
        payload = jwt.decode(
            token,
            settings.identity_jwt_key.get_secret_value(),
            algorithms=[settings.identity_jwt_algorithm],
            audience=audience,
            options={
                "require_exp": True,
                "require_sub": True,
                "verify_aud": audience is not None,
            },
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload
