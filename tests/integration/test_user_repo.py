"""User repository integration tests. Require Postgres; session is rolled back after each test."""

from datetime import UTC, datetime, timedelta

import pytest

from app.application.dtos.user import UserInvite
from app.domain.enums import UserRole, UserStatus
from app.domain.exceptions import ResourceNotFoundException, UserAlreadyExistsException
from app.infrastructure.cache import UserCache
from app.infrastructure.persistence.models import User
from app.infrastructure.persistence.repositories import TenantRepository, UserRepository
from tests.factories import make_user

pytestmark = pytest.mark.requires_db


async def _tenant_id(db_session, slug: str = "repo-test-tenant") -> str:
    tenant = await TenantRepository(db_session).create_tenant(name="Repo Test", slug=slug)
    return tenant.id


async def _add_user(db_session, **fields) -> User:
    user = User(**fields)
    db_session.add(user)
    await db_session.flush()
    return user


async def test_create_invited_and_get_by_email_and_tenant(db_session) -> None:
    """Invited user is stored INVITED without a principal."""
    tenant_id = await _tenant_id(db_session)
    repo = UserRepository(db_session)
    created = await repo.create_invited(
        tenant_id, UserInvite(email="joao@brilho.com.br", name="João", role=UserRole.MANAGER)
    )
    assert created.id
    assert created.status == UserStatus.INVITED
    assert created.principal_id is None
    assert created.role == UserRole.MANAGER

    found = await repo.get_by_email_and_tenant("joao@brilho.com.br", tenant_id)
    assert found is not None
    assert found.id == created.id


async def test_create_invited_duplicate_raises_already_exists(db_session) -> None:
    """Unique (tenant_id, email) maps to UserAlreadyExistsException."""
    tenant_id = await _tenant_id(db_session)
    repo = UserRepository(db_session)
    invite = UserInvite(email="dup@brilho.com.br", name="Dup", role=UserRole.MEMBER)
    await repo.create_invited(tenant_id, invite)
    with pytest.raises(UserAlreadyExistsException):
        await repo.create_invited(tenant_id, invite)


async def test_count(db_session) -> None:
    repo = UserRepository(db_session)
    before = await repo.count()
    await _add_user(db_session, email="a@brilho.com.br", name="A")
    await _add_user(db_session, email="b@brilho.com.br", name="B")
    assert await repo.count() == before + 2


async def test_get_by_email_returns_oldest_unlinked_row(db_session) -> None:
    """Oldest match wins; the lookup ignores case and rows already claimed by a principal."""
    now = datetime.now(UTC)
    first = await _tenant_id(db_session, "repo-test-a")
    second = await _tenant_id(db_session, "repo-test-b")
    third = await _tenant_id(db_session, "repo-test-c")
    await _add_user(
        db_session,
        email="maria@brilho.com.br",
        name="Claimed",
        tenant_id=first,
        principal_id="user_claimed",
        created_at=now - timedelta(days=3),
    )
    older = await _add_user(
        db_session,
        email="maria@brilho.com.br",
        name="Older",
        tenant_id=second,
        status=UserStatus.INVITED.value,
        created_at=now - timedelta(days=2),
    )
    await _add_user(
        db_session,
        email="maria@brilho.com.br",
        name="Newer",
        tenant_id=third,
        status=UserStatus.INVITED.value,
        created_at=now - timedelta(days=1),
    )
    repo = UserRepository(db_session)

    found = await repo.get_by_email("Maria@Brilho.com.br")

    assert found is not None
    assert found.id == older.id


async def test_get_by_email_not_found_returns_none(db_session) -> None:
    repo = UserRepository(db_session)
    assert await repo.get_by_email("nobody@brilho.com.br") is None


async def test_link_principal_activates_and_invalidates_cache(db_session) -> None:
    """Linking sets principal and ACTIVE, and drops the principal's cache entry."""
    tenant_id = await _tenant_id(db_session)
    cache = UserCache(ttl_ms=5000)
    repo = UserRepository(db_session, cache=cache)
    invited = await repo.create_invited(
        tenant_id, UserInvite(email="ana@brilho.com.br", name="Ana", role=UserRole.MEMBER)
    )
    cache.set("user_ana", make_user(principal_id="user_ana", status=UserStatus.INVITED))

    linked = await repo.link_principal(invited.id, "user_ana")

    assert linked.principal_id == "user_ana"
    assert linked.status == UserStatus.ACTIVE
    assert cache.get("user_ana") is None
    by_principal = await repo.get_by_principal_id("user_ana")
    assert by_principal is not None
    assert by_principal.id == invited.id
    assert await repo.get_by_email("ana@brilho.com.br") is None


async def test_link_principal_unknown_user_raises(db_session) -> None:
    repo = UserRepository(db_session)
    with pytest.raises(ResourceNotFoundException):
        await repo.link_principal("nonexistent-id-xyz", "user_x")
