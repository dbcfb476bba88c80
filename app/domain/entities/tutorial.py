"""Onboarding tutorial: state value type, actions and reducer.

The tutorial is a linear walk over a fixed sequence of steps. State is an
immutable value; every transition goes through reduce(state, action).
Persistence is a separate serialize/deserialize boundary with no transition
logic in it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from app.domain.exceptions import ValidationException

TUTORIAL_STEPS: tuple[str, ...] = (
    "welcome",
    "dashboard-overview",
    "navigate-services",
    "services-page",
    "new-service-form",
    "service-name",
    "service-price",
    "service-time",
    "service-save",
    "complete",
)
FIRST_STEP = TUTORIAL_STEPS[0]
LAST_STEP = TUTORIAL_STEPS[-1]

# Version of the persisted payload shape
STORAGE_VERSION = 0


class TutorialActionType(str, Enum):
    """Transitions accepted by reduce()."""

    START = "start"
    NEXT = "next"
    PREV = "prev"
    SET_STEP = "set_step"
    SKIP = "skip"
    COMPLETE = "complete"


@dataclass(frozen=True)
class TutorialAction:
    """A transition request. step is only used by SET_STEP."""

    type: TutorialActionType
    step: str | None = None


@dataclass(frozen=True)
class TutorialState:
    """Tutorial progress: current step, active flag and completed flag."""

    current_step: str = FIRST_STEP
    is_active: bool = False
    has_completed_tutorial: bool = False

    def __post_init__(self) -> None:
        if self.current_step not in TUTORIAL_STEPS:
            raise ValidationException(
                f"Unknown tutorial step: {self.current_step}", field="current_step"
            )

    @property
    def step_index(self) -> int:
        return TUTORIAL_STEPS.index(self.current_step)


INITIAL_STATE = TutorialState()


def reduce(state: TutorialState, action: TutorialAction) -> TutorialState:
    """Apply one action and return the next state.

    next/prev are no-ops at the sequence boundaries. skip keeps the position;
    complete forces the last step. start always resets to the first step.

    Raises:
        ValidationException: If SET_STEP names an unknown step.
    """
    kind = action.type
    if kind is TutorialActionType.START:
        return TutorialState(
            current_step=FIRST_STEP, is_active=True, has_completed_tutorial=False
        )
    if kind is TutorialActionType.NEXT:
        index = state.step_index
        if index < len(TUTORIAL_STEPS) - 1:
            return replace(state, current_step=TUTORIAL_STEPS[index + 1])
        return state
    if kind is TutorialActionType.PREV:
        index = state.step_index
        if index > 0:
            return replace(state, current_step=TUTORIAL_STEPS[index - 1])
        return state
    if kind is TutorialActionType.SET_STEP:
        if action.step not in TUTORIAL_STEPS:
            raise ValidationException(
                f"Unknown tutorial step: {action.step}", field="step"
            )
        return replace(state, current_step=action.step)
    if kind is TutorialActionType.SKIP:
        return replace(state, is_active=False, has_completed_tutorial=True)
    if kind is TutorialActionType.COMPLETE:
        return TutorialState(
            current_step=LAST_STEP, is_active=False, has_completed_tutorial=True
        )
    raise ValidationException(f"Unknown tutorial action: {kind}", field="type")


def serialize(state: TutorialState) -> dict[str, Any]:
    """Return the persisted payload for state."""
    return {
        "state": {
            "isActive": state.is_active,
            "currentStep": state.current_step,
            "hasCompletedTutorial": state.has_completed_tutorial,
        },
        "version": STORAGE_VERSION,
    }


def deserialize(payload: Any) -> TutorialState:
    """Rebuild state from a persisted payload.

    Missing, malformed, wrong-version or unknown-step payloads yield the
    initial state; missing fields take their initial values.
    """
    if not isinstance(payload, dict) or payload.get("version", STORAGE_VERSION) != STORAGE_VERSION:
        return INITIAL_STATE
    raw = payload.get("state")
    if not isinstance(raw, dict):
        return INITIAL_STATE
    step = raw.get("currentStep", FIRST_STEP)
    is_active = raw.get("isActive", False)
    completed = raw.get("hasCompletedTutorial", False)
    if step not in TUTORIAL_STEPS or not isinstance(is_active, bool) or not isinstance(completed, bool):
        return INITIAL_STATE
    return TutorialState(
        current_step=step, is_active=is_active, has_completed_tutorial=completed
    )
