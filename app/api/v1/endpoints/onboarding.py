"""Onboarding API: start an own tenant, finish the setup wizard."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import CurrentUserDep, get_onboarding_service
from app.application.services.onboarding_service import OnboardingService
from app.core.limiter import limit_onboarding, limit_writes
from app.schemas.tenant import OnboardingResponse, SetupRequest, TenantResponse
from app.schemas.user import UserResponse

router = APIRouter()

OnboardingDep = Annotated[OnboardingService, Depends(get_onboarding_service)]


@router.post("/tenant", response_model=OnboardingResponse, status_code=201)
@limit_onboarding
async def create_tenant(
    request: Request,
    user: CurrentUserDep,
    onboarding: OnboardingDep,
) -> OnboardingResponse:
    """Create a tenant for the current member and make them its owner."""
    tenant, updated = await onboarding.create_tenant_for_user(user)
    return OnboardingResponse(
        tenant=TenantResponse.from_result(tenant),
        user=UserResponse.from_result(updated),
    )


@router.post("/setup", response_model=OnboardingResponse)
@limit_writes
async def complete_setup(
    request: Request,
    body: SetupRequest,
    user: CurrentUserDep,
    onboarding: OnboardingDep,
) -> OnboardingResponse:
    """Save the caller's job title and the tenant profile."""
    tenant, updated = await onboarding.complete_setup(
        user, body.job_title, body.to_profile()
    )
    return OnboardingResponse(
        tenant=TenantResponse.from_result(tenant),
        user=UserResponse.from_result(updated),
    )
