"""Clerk identity provider: session verification, profile lookup, metadata writes.

The session token gives the principal ID (sub). Email and public metadata
are fetched from the backend API because session tokens do not carry them
by default.
"""

from __future__ import annotations

from typing import Any

import httpx

from app.application.dtos.session import PublicMetadata, SessionPrincipal
from app.core.config import Settings, get_settings
from app.domain.exceptions import AuthenticationException, IdentityProviderException
from app.infrastructure.security.jwt import verify_session_token
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced

logger = get_logger(__name__)


def primary_email(profile: dict[str, Any]) -> str | None:
    """Return the primary email address of a Clerk user object.

    Falls back to the first address when no primary is marked.
    """
    addresses = profile.get("email_addresses") or []
    primary_id = profile.get("primary_email_address_id")
    for address in addresses:
        if address.get("id") == primary_id:
            return address.get("email_address")
    if addresses:
        return addresses[0].get("email_address")
    return None


class ClerkIdentityProvider:
    """IIdentityProvider backed by Clerk's backend API over a shared httpx client."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: Settings | None = None,
    ) -> None:
        self.http_client = http_client
        self.settings = settings or get_settings()

    def _headers(self) -> dict[str, str]:
        secret = self.settings.identity_api_secret
        if secret is None or not secret.get_secret_value():
            raise IdentityProviderException("Identity API secret is not configured")
        return {"Authorization": f"Bearer {secret.get_secret_value()}"}

    def _url(self, path: str) -> str:
        return f"{self.settings.identity_api_url.rstrip('/')}{path}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self.http_client.request(
                method,
                self._url(path),
                headers=self._headers(),
                timeout=self.settings.identity_api_timeout_seconds,
                **kwargs,
            )
        except httpx.HTTPError as e:
            logger.error("Identity API %s %s failed: %s", method, path, e)
            raise IdentityProviderException(f"Identity API unreachable: {e!s}") from e
        if response.status_code >= 400:
            logger.error(
                "Identity API %s %s returned status=%d",
                method,
                path,
                response.status_code,
            )
            raise IdentityProviderException(
                f"Identity API returned status {response.status_code}",
                status_code=response.status_code,
            )
        data: dict[str, Any] = response.json()
        return data

    @traced("identity.get_principal")
    async def get_principal(self, token: str | None) -> SessionPrincipal:
        """Verify token and load the principal's email and public metadata.

        Raises:
            AuthenticationException: If the token is invalid or expired.
            IdentityProviderException: If the profile lookup fails.
        """
        if not token:
            return SessionPrincipal(principal_id=None)
        try:
            claims = verify_session_token(token, self.settings)
        except ValueError as e:
            raise AuthenticationException(str(e)) from e
        principal_id = str(claims["sub"])
        profile = await self._request("GET", f"/users/{principal_id}")
        return SessionPrincipal(
            principal_id=principal_id,
            email=primary_email(profile),
            public_metadata=PublicMetadata.from_dict(profile.get("public_metadata")),
        )

    @traced("identity.update_public_metadata")
    async def update_public_metadata(
        self, principal_id: str, metadata: PublicMetadata
    ) -> None:
        """Merge metadata into the principal's public_metadata."""
        await self._request(
            "PATCH",
            f"/users/{principal_id}/metadata",
            json={"public_metadata": metadata.to_dict()},
        )
        logger.info("Updated identity metadata for principal %s", principal_id)
