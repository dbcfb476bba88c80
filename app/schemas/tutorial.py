"""Tutorial API schemas."""

from pydantic import BaseModel, Field, model_validator

from app.domain.entities.tutorial import (
    TUTORIAL_STEPS,
    TutorialAction,
    TutorialActionType,
    TutorialState,
)


class TutorialStateResponse(BaseModel):
    """Tutorial progress for the current principal."""

    current_step: str
    step_index: int
    total_steps: int = len(TUTORIAL_STEPS)
    is_active: bool
    has_completed_tutorial: bool

    @classmethod
    def from_state(cls, state: TutorialState) -> "TutorialStateResponse":
        return cls(
            current_step=state.current_step,
            step_index=state.step_index,
            is_active=state.is_active,
            has_completed_tutorial=state.has_completed_tutorial,
        )


class TutorialActionRequest(BaseModel):
    """One transition. step is required for set_step and ignored otherwise."""

    type: TutorialActionType
    step: str | None = Field(default=None, description="Target step for set_step")

    @model_validator(mode="after")
    def require_step_for_set_step(self) -> "TutorialActionRequest":
        if self.type is TutorialActionType.SET_STEP and not self.step:
            raise ValueError("step is required for set_step")
        return self

    def to_action(self) -> TutorialAction:
        step = self.step if self.type is TutorialActionType.SET_STEP else None
        return TutorialAction(type=self.type, step=step)
