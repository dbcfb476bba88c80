"""Session API: where may the current principal go."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import PrincipalDep, get_session_resolver
from app.application.services.session_resolver import SessionResolver
from app.core.limiter import limit_session
from app.domain.enums import GuardedPage
from app.schemas.session import SessionResolutionResponse

router = APIRouter()


@router.get("/resolve", response_model=SessionResolutionResponse)
@limit_session
async def resolve_session(
    request: Request,
    principal: PrincipalDep,
    resolver: Annotated[SessionResolver, Depends(get_session_resolver)],
    page: GuardedPage = GuardedPage.DASHBOARD,
) -> SessionResolutionResponse:
    """Evaluate the redirect rules of page for the bearer's session.

    Requests without a session token resolve to sign-in.
    """
    resolution = await resolver.resolve(principal, page=page)
    return SessionResolutionResponse.from_resolution(resolution)
