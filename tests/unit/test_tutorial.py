"""Unit tests for the tutorial reducer and its persisted payload shape."""

import pytest

from app.domain.entities.tutorial import (
    INITIAL_STATE,
    LAST_STEP,
    TUTORIAL_STEPS,
    TutorialAction,
    TutorialActionType,
    TutorialState,
    deserialize,
    reduce,
    serialize,
)
from app.domain.exceptions import ValidationException

START = TutorialAction(TutorialActionType.START)
NEXT = TutorialAction(TutorialActionType.NEXT)
PREV = TutorialAction(TutorialActionType.PREV)
SKIP = TutorialAction(TutorialActionType.SKIP)
COMPLETE = TutorialAction(TutorialActionType.COMPLETE)


def set_step(step: str) -> TutorialAction:
    return TutorialAction(TutorialActionType.SET_STEP, step=step)


def test_steps_sequence() -> None:
    assert len(TUTORIAL_STEPS) == 10
    assert TUTORIAL_STEPS[0] == "welcome"
    assert TUTORIAL_STEPS[-1] == "complete"


def test_initial_state() -> None:
    assert INITIAL_STATE == TutorialState("welcome", False, False)


def test_start_activates_at_first_step_and_clears_completion() -> None:
    done = TutorialState("service-price", is_active=False, has_completed_tutorial=True)
    assert reduce(done, START) == TutorialState("welcome", True, False)


def test_next_walks_the_whole_sequence_and_stops_at_end() -> None:
    state = reduce(INITIAL_STATE, START)
    seen = [state.current_step]
    for _ in range(len(TUTORIAL_STEPS) + 3):
        state = reduce(state, NEXT)
        seen.append(state.current_step)
    assert seen[: len(TUTORIAL_STEPS)] == list(TUTORIAL_STEPS)
    assert state.current_step == LAST_STEP
    assert state.is_active is True


def test_prev_is_noop_at_first_step() -> None:
    state = reduce(INITIAL_STATE, START)
    assert reduce(state, PREV) == state


def test_prev_retreats_one_step() -> None:
    state = TutorialState("services-page", is_active=True)
    assert reduce(state, PREV).current_step == "navigate-services"


def test_set_step_jumps_and_keeps_flags() -> None:
    state = TutorialState("welcome", is_active=True)
    assert reduce(state, set_step("service-time")) == TutorialState("service-time", True, False)


def test_set_step_rejects_unknown_step() -> None:
    with pytest.raises(ValidationException) as exc_info:
        reduce(INITIAL_STATE, set_step("billing"))
    assert exc_info.value.details == {"field": "step"}


def test_skip_keeps_position() -> None:
    state = TutorialState("service-name", is_active=True)
    assert reduce(state, SKIP) == TutorialState("service-name", False, True)


def test_complete_forces_last_step() -> None:
    state = TutorialState("dashboard-overview", is_active=True)
    assert reduce(state, COMPLETE) == TutorialState(LAST_STEP, False, True)


def test_state_rejects_unknown_step() -> None:
    with pytest.raises(ValidationException):
        TutorialState("nowhere")


def test_serialize_shape() -> None:
    state = TutorialState("services-page", is_active=True, has_completed_tutorial=False)
    assert serialize(state) == {
        "state": {
            "isActive": True,
            "currentStep": "services-page",
            "hasCompletedTutorial": False,
        },
        "version": 0,
    }


def test_deserialize_restores_serialized_state() -> None:
    state = TutorialState("service-save", is_active=False, has_completed_tutorial=True)
    assert deserialize(serialize(state)) == state


def test_deserialize_fills_missing_fields_with_initial_values() -> None:
    assert deserialize({"state": {"currentStep": "complete"}}) == TutorialState("complete")


@pytest.mark.parametrize(
    "payload",
    [
        None,
        "not a dict",
        [],
        {},
        {"state": "x", "version": 0},
        {"state": {"currentStep": "gone"}, "version": 0},
        {"state": {"currentStep": "welcome", "isActive": "yes"}, "version": 0},
        {"state": {"currentStep": "complete"}, "version": 7},
    ],
)
def test_deserialize_malformed_payload_yields_initial_state(payload: object) -> None:
    assert deserialize(payload) == INITIAL_STATE
