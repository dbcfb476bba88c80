"""User repository. Interface methods return application DTOs."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserInvite, UserResult
from app.application.interfaces.services import IUserCache
from app.domain.enums import UserRole, UserStatus
from app.domain.exceptions import UserAlreadyExistsException
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult."""
    return UserResult(
        id=u.id,
        principal_id=u.principal_id,
        email=u.email,
        name=u.name,
        tenant_id=u.tenant_id,
        role=UserRole(u.role),
        job_title=u.job_title,
        status=UserStatus(u.status),
    )


class UserRepository(BaseRepository[User]):
    """User repository. Lookups by principal/email, link, invite and onboarding writes.

    When a user cache is given, every update invalidates the entry of the
    user's principal.
    """

    def __init__(self, db: AsyncSession, cache: IUserCache | None = None) -> None:
        super().__init__(db, User)
        self.cache = cache

    def _get_entity_type(self) -> str:
        return "user"

    async def _on_after_update(self, obj: User) -> None:
        if self.cache is not None and obj.principal_id:
            self.cache.invalidate(obj.principal_id)

    async def get_by_id(self, user_id: str) -> UserResult | None:
        user = await self.get_entity(user_id)
        return _user_to_result(user) if user else None

    async def get_by_principal_id(self, principal_id: str) -> UserResult | None:
        result = await self.db.execute(
            select(User).where(User.principal_id == principal_id)
        )
        user = result.scalar_one_or_none()
        return _user_to_result(user) if user else None

    async def get_by_email(self, email: str) -> UserResult | None:
        """Return the oldest user with this email that no principal has claimed yet.

        Case-insensitive. Emails are unique per tenant, not globally.
        """
        result = await self.db.execute(
            select(User)
            .where(
                func.lower(User.email) == email.strip().lower(),
                User.principal_id.is_(None),
            )
            .order_by(User.created_at)
            .limit(1)
        )
        user = result.scalar_one_or_none()
        return _user_to_result(user) if user else None

    async def get_by_email_and_tenant(
        self, email: str, tenant_id: str
    ) -> UserResult | None:
        result = await self.db.execute(
            select(User).where(User.email == email, User.tenant_id == tenant_id)
        )
        user = result.scalar_one_or_none()
        return _user_to_result(user) if user else None

    async def link_principal(self, user_id: str, principal_id: str) -> UserResult:
        """Set principal_id and status ACTIVE. Raises ResourceNotFoundException if missing."""
        user = await self.require_entity(user_id)
        user.principal_id = principal_id
        user.status = UserStatus.ACTIVE.value
        updated = await self.update(user)
        return _user_to_result(updated)

    async def create_invited(self, tenant_id: str, invite: UserInvite) -> UserResult:
        """Create INVITED user; raise UserAlreadyExistsException on unique constraint violation."""
        user = User(
            tenant_id=tenant_id,
            email=invite.email,
            name=invite.name,
            role=invite.role.value,
            status=UserStatus.INVITED.value,
        )
        try:
            created = await self.create(user)
        except IntegrityError as e:
            raise UserAlreadyExistsException(invite.email) from e
        return _user_to_result(created)

    async def assign_tenant(
        self, user_id: str, tenant_id: str, role: UserRole
    ) -> UserResult:
        user = await self.require_entity(user_id)
        user.tenant_id = tenant_id
        user.role = role.value
        user.status = UserStatus.ACTIVE.value
        updated = await self.update(user)
        return _user_to_result(updated)

    async def set_job_title(self, user_id: str, job_title: str) -> UserResult:
        user = await self.require_entity(user_id)
        user.job_title = job_title
        updated = await self.update(user)
        return _user_to_result(updated)
