"""User application service: invite people into a tenant."""

from __future__ import annotations

import logging

from app.application.dtos.user import UserInvite, UserResult
from app.application.interfaces.repositories import IUserRepository
from app.domain.enums import UserRole
from app.domain.exceptions import (
    AuthorizationException,
    UserAlreadyExistsException,
    ValidationException,
)

logger = logging.getLogger(__name__)

# Roles an owner may hand out; ADMIN_SAAS is platform-only.
INVITABLE_ROLES = frozenset({UserRole.OWNER, UserRole.MANAGER, UserRole.MEMBER})


class UserService:
    """Invite users (created in status INVITED until they sign in)."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self._user_repo = user_repo

    async def invite(self, inviter: UserResult, invite: UserInvite) -> UserResult:
        """Create an INVITED user in the inviter's tenant.

        Raises:
            AuthorizationException: If inviter is not OWNER/ADMIN_SAAS.
            ValidationException: If inviter has no tenant or role is not invitable.
            UserAlreadyExistsException: If email is already registered in the tenant.
        """
        if not inviter.role.is_elevated:
            raise AuthorizationException(resource="user", action="invite")
        if inviter.tenant_id is None:
            raise ValidationException("Inviter has no tenant", field="tenant_id")
        if invite.role not in INVITABLE_ROLES:
            raise ValidationException(f"Role cannot be invited: {invite.role.value}", field="role")
        email = invite.email.strip().lower()
        existing = await self._user_repo.get_by_email_and_tenant(email, inviter.tenant_id)
        if existing is not None:
            raise UserAlreadyExistsException(email)
        created = await self._user_repo.create_invited(
            inviter.tenant_id,
            UserInvite(email=email, name=invite.name, role=invite.role),
        )
        logger.info("User %s invited to tenant %s by %s", created.id, inviter.tenant_id, inviter.id)
        return created
