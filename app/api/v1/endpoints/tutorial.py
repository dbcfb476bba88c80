"""Tutorial API: read and advance the current principal's tutorial progress."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import PrincipalIdDep, get_tutorial_service
from app.application.services.tutorial_service import TutorialService
from app.core.limiter import limit_writes
from app.schemas.tutorial import TutorialActionRequest, TutorialStateResponse

router = APIRouter()

TutorialDep = Annotated[TutorialService, Depends(get_tutorial_service)]


@router.get("", response_model=TutorialStateResponse)
async def get_tutorial(
    principal_id: PrincipalIdDep,
    tutorial: TutorialDep,
) -> TutorialStateResponse:
    """Stored progress, or the initial state."""
    state = await tutorial.get_state(principal_id)
    return TutorialStateResponse.from_state(state)


@router.post("/actions", response_model=TutorialStateResponse)
@limit_writes
async def apply_tutorial_action(
    request: Request,
    body: TutorialActionRequest,
    principal_id: PrincipalIdDep,
    tutorial: TutorialDep,
) -> TutorialStateResponse:
    """Apply one transition and return the new state."""
    state = await tutorial.apply(principal_id, body.to_action())
    return TutorialStateResponse.from_state(state)


@router.delete("", status_code=204)
async def reset_tutorial(
    principal_id: PrincipalIdDep,
    tutorial: TutorialDep,
) -> None:
    """Forget stored progress."""
    await tutorial.reset(principal_id)
