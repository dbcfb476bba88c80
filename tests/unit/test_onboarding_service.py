"""Unit tests for OnboardingService (tenant creation, setup wizard, metadata sync)."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.session import PublicMetadata
from app.application.dtos.tenant import TenantProfileUpdate
from app.application.services.onboarding_service import (
    OnboardingService,
    build_tenant_slug,
)
from app.domain.enums import UserRole
from app.domain.exceptions import AuthorizationException, ValidationException
from app.infrastructure.cache import UserCache
from tests.conftest import FakeIdentityProvider
from tests.factories import PRINCIPAL_ID, make_tenant, make_user


@pytest.fixture
def service(
    user_repo: AsyncMock,
    tenant_repo: AsyncMock,
    user_cache: UserCache,
    identity: FakeIdentityProvider,
) -> OnboardingService:
    return OnboardingService(user_repo, tenant_repo, user_cache, identity)


def test_build_tenant_slug_sanitizes_local_part() -> None:
    assert build_tenant_slug("Joao.Silva+car@x.com", now_ms=1700000000123) == (
        "joao-silva-car-1700000000123"
    )


def test_build_tenant_slug_uses_current_time() -> None:
    slug = build_tenant_slug("ana@x.com")
    prefix, stamp = slug.split("-", 1)
    assert prefix == "ana"
    assert stamp.isdigit()


async def test_create_tenant_for_member(
    service: OnboardingService,
    user_repo: AsyncMock,
    tenant_repo: AsyncMock,
    user_cache: UserCache,
    identity: FakeIdentityProvider,
) -> None:
    member = make_user(tenant_id=None, job_title=None)
    tenant = make_tenant(id="ten_new")
    owner = make_user(tenant_id="ten_new", role=UserRole.OWNER, job_title=None)
    tenant_repo.create_tenant.return_value = tenant
    user_repo.assign_tenant.return_value = owner
    user_cache.set(PRINCIPAL_ID, member)

    created, updated = await service.create_tenant_for_user(member)

    assert created == tenant
    assert updated == owner
    kwargs = tenant_repo.create_tenant.await_args.kwargs
    assert kwargs["name"] == "Minha Empresa"
    assert kwargs["slug"].startswith("maria-")
    user_repo.assign_tenant.assert_awaited_once_with(member.id, "ten_new", UserRole.OWNER)
    assert identity.updates == [
        (
            PRINCIPAL_ID,
            PublicMetadata(
                needs_onboarding=False,
                tenant_id="ten_new",
                role="OWNER",
                db_user_id=member.id,
            ),
        )
    ]
    assert user_cache.get(PRINCIPAL_ID) is None


@pytest.mark.parametrize("role", [UserRole.OWNER, UserRole.MANAGER, UserRole.ADMIN_SAAS])
async def test_create_tenant_rejects_non_members(
    service: OnboardingService, tenant_repo: AsyncMock, role: UserRole
) -> None:
    with pytest.raises(AuthorizationException) as exc_info:
        await service.create_tenant_for_user(make_user(role=role))
    assert exc_info.value.message == "User already has company access"
    tenant_repo.create_tenant.assert_not_awaited()


async def test_identity_sync_failure_does_not_fail_request(
    user_repo: AsyncMock, tenant_repo: AsyncMock, user_cache: UserCache
) -> None:
    failing = AsyncMock()
    failing.update_public_metadata.side_effect = RuntimeError("provider down")
    tenant_repo.create_tenant.return_value = make_tenant()
    user_repo.assign_tenant.return_value = make_user(role=UserRole.OWNER)
    user_cache.set(PRINCIPAL_ID, make_user())
    service = OnboardingService(user_repo, tenant_repo, user_cache, failing)

    tenant, _ = await service.create_tenant_for_user(make_user(tenant_id=None))

    assert tenant.id == "ten_1"
    failing.update_public_metadata.assert_awaited_once()
    assert user_cache.get(PRINCIPAL_ID) is None


async def test_create_tenant_without_identity_provider(
    user_repo: AsyncMock, tenant_repo: AsyncMock, user_cache: UserCache
) -> None:
    tenant_repo.create_tenant.return_value = make_tenant()
    user_repo.assign_tenant.return_value = make_user(role=UserRole.OWNER)
    service = OnboardingService(user_repo, tenant_repo, user_cache)
    tenant, _ = await service.create_tenant_for_user(make_user(tenant_id=None))
    assert tenant == make_tenant()


async def test_complete_setup_writes_job_title_and_profile(
    service: OnboardingService,
    user_repo: AsyncMock,
    tenant_repo: AsyncMock,
    user_cache: UserCache,
) -> None:
    owner = make_user(role=UserRole.OWNER, job_title=None)
    profile = TenantProfileUpdate(name="Brilho Car", primary_color="#112233")
    user_repo.set_job_title.return_value = make_user(role=UserRole.OWNER, job_title="Dono")
    tenant_repo.update_profile.return_value = make_tenant(name="Brilho Car")
    user_cache.set(PRINCIPAL_ID, owner)

    tenant, updated = await service.complete_setup(owner, "Dono", profile)

    user_repo.set_job_title.assert_awaited_once_with(owner.id, "Dono")
    tenant_repo.update_profile.assert_awaited_once_with("ten_1", profile)
    assert tenant.name == "Brilho Car"
    assert updated.job_title == "Dono"
    assert user_cache.get(PRINCIPAL_ID) is None


async def test_complete_setup_allows_initial_setup_for_non_elevated(
    service: OnboardingService, user_repo: AsyncMock
) -> None:
    member = make_user(job_title=None)
    await service.complete_setup(member, "Polidor", TenantProfileUpdate(name="X Car"))
    user_repo.set_job_title.assert_awaited_once()


async def test_complete_setup_rejects_configured_non_elevated(
    service: OnboardingService, user_repo: AsyncMock
) -> None:
    with pytest.raises(AuthorizationException):
        await service.complete_setup(
            make_user(role=UserRole.MANAGER), "Gerente", TenantProfileUpdate(name="X")
        )
    user_repo.set_job_title.assert_not_awaited()


async def test_complete_setup_requires_tenant(service: OnboardingService) -> None:
    with pytest.raises(ValidationException):
        await service.complete_setup(
            make_user(role=UserRole.OWNER, tenant_id=None),
            "Dono",
            TenantProfileUpdate(name="X"),
        )
