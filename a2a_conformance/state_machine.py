"""
Pure functional task state machine for A2A tasks

The machine owns the authoritative transition table. It keeps no state
between calls: callers persist the returned TaskState themselves.
"""

import logging
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple, Union

from .errors import Failure, IllegalTransition, Result, Success
from .types import TaskState

logger = logging.getLogger(__name__)


class TaskEvent(str, Enum):
    """Events that drive task state changes"""
    START_WORKING = "start-working"
    REQUIRE_INPUT = "require-input"
    COMPLETE = "complete"
    CANCEL = "cancel"
    FAIL = "fail"
    REJECT = "reject"
    REQUIRE_AUTH = "require-auth"
    RESUME = "resume"


TERMINAL_STATES: FrozenSet[TaskState] = frozenset({
    TaskState.COMPLETED,
    TaskState.CANCELED,
    TaskState.FAILED,
    TaskState.REJECTED,
})

# States in which a task waits on the client; a stream may end here
INTERRUPTED_STATES: FrozenSet[TaskState] = frozenset({
    TaskState.INPUT_REQUIRED,
    TaskState.AUTH_REQUIRED,
})

_EXPLICIT_TRANSITIONS: Dict[Tuple[TaskState, TaskEvent], TaskState] = {
    (TaskState.SUBMITTED, TaskEvent.START_WORKING): TaskState.WORKING,
    (TaskState.SUBMITTED, TaskEvent.REJECT): TaskState.REJECTED,
    (TaskState.WORKING, TaskEvent.REQUIRE_INPUT): TaskState.INPUT_REQUIRED,
    (TaskState.WORKING, TaskEvent.REQUIRE_AUTH): TaskState.AUTH_REQUIRED,
    (TaskState.WORKING, TaskEvent.COMPLETE): TaskState.COMPLETED,
    (TaskState.WORKING, TaskEvent.FAIL): TaskState.FAILED,
    (TaskState.INPUT_REQUIRED, TaskEvent.RESUME): TaskState.WORKING,
    (TaskState.AUTH_REQUIRED, TaskEvent.RESUME): TaskState.WORKING,
}


def _build_transition_table() -> Dict[Tuple[TaskState, TaskEvent], TaskState]:
    """Add the cancel transition for every non-terminal state"""
    cancel_transitions = {
        (state, TaskEvent.CANCEL): TaskState.CANCELED
        for state in TaskState
        if state not in TERMINAL_STATES
    }
    return {**_EXPLICIT_TRANSITIONS, **cancel_transitions}


TRANSITIONS: Dict[Tuple[TaskState, TaskEvent], TaskState] = _build_transition_table()


def _name(value: Union[Enum, str]) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def is_terminal_state(state: Union[TaskState, str]) -> bool:
    """Check whether no event can leave the state"""
    return TaskState(state) in TERMINAL_STATES


def is_interrupted_state(state: Union[TaskState, str]) -> bool:
    """Check whether the task is waiting on client input or authentication"""
    return TaskState(state) in INTERRUPTED_STATES


def allowed_events(state: Union[TaskState, str]) -> FrozenSet[TaskEvent]:
    """Events that are legal from the given state"""
    current = TaskState(state)
    return frozenset(event for (from_state, event) in TRANSITIONS if from_state == current)


def apply_transition(
    state: Union[TaskState, str],
    event: Union[TaskEvent, str]
) -> Result[TaskState, IllegalTransition]:
    """
    Pure function returning the state reached by applying an event.

    Args:
        state: The task's current state
        event: The requested event

    Returns:
        Success with the next TaskState, or Failure with IllegalTransition
        naming the offending (state, event) pair
    """
    try:
        current = TaskState(state)
        requested = TaskEvent(event)
    except ValueError:
        logger.debug("Rejected unknown state/event pair (%s, %s)", state, event)
        return Failure(error=IllegalTransition(state=_name(state), event=_name(event)))

    next_state = TRANSITIONS.get((current, requested))
    if next_state is None:
        logger.debug("Illegal transition: %s --%s-->", current.value, requested.value)
        return Failure(error=IllegalTransition(state=current.value, event=requested.value))

    return Success(next_state)


def event_for_transition(
    from_state: Union[TaskState, str],
    to_state: Union[TaskState, str]
) -> Optional[TaskEvent]:
    """Find the event that moves a task between two states, if one exists"""
    source = TaskState(from_state)
    target = TaskState(to_state)
    for (state, event), next_state in TRANSITIONS.items():
        if state == source and next_state == target:
            return event
    return None


def validate_state_transition(
    from_state: Union[TaskState, str],
    to_state: Union[TaskState, str]
) -> Result[TaskState, IllegalTransition]:
    """
    Validate a transition expressed as a pair of states.

    The check is derived from the event table, so it accepts exactly the
    state pairs reachable by a single event.
    """
    event = event_for_transition(from_state, to_state)
    if event is None:
        source = TaskState(from_state)
        target = TaskState(to_state)
        logger.debug("Illegal transition: %s -> %s", source.value, target.value)
        return Failure(error=IllegalTransition(state=source.value, event=f"transition-to-{target.value}"))
    return apply_transition(from_state, event)
