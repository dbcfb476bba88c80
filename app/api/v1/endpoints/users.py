"""User API: invitations into the caller's tenant."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import CurrentUserDep, TenantUserDep, get_user_service
from app.application.dtos.user import UserInvite
from app.application.services.user_service import UserService
from app.core.limiter import limit_writes
from app.schemas.user import UserInviteRequest, UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_me(user: CurrentUserDep) -> UserResponse:
    """The active user behind the session."""
    return UserResponse.from_result(user)


@router.post("/invite", response_model=UserResponse, status_code=201)
@limit_writes
async def invite_user(
    request: Request,
    body: UserInviteRequest,
    inviter: TenantUserDep,
    users: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Invite a person into the caller's tenant (owner/admin only)."""
    created = await users.invite(
        inviter, UserInvite(email=str(body.email), name=body.name, role=body.role)
    )
    return UserResponse.from_result(created)
