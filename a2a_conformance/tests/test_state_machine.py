"""
Tests for the A2A task state machine

Covers the transition table, terminal-state rejection and the state-pair view
derived from the same table.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from a2a_conformance.errors import Failure, IllegalTransition, Success
from a2a_conformance.state_machine import (
    INTERRUPTED_STATES,
    TERMINAL_STATES,
    TRANSITIONS,
    TaskEvent,
    allowed_events,
    apply_transition,
    event_for_transition,
    is_interrupted_state,
    is_terminal_state,
    validate_state_transition,
)
from a2a_conformance.types import TaskState

states = st.sampled_from(list(TaskState))
events = st.sampled_from(list(TaskEvent))
terminal_states = st.sampled_from(sorted(TERMINAL_STATES, key=lambda state: state.value))


class TestTransitionTable:
    """Test the documented transitions"""

    @pytest.mark.parametrize("state,event,expected", [
        (TaskState.SUBMITTED, TaskEvent.START_WORKING, TaskState.WORKING),
        (TaskState.SUBMITTED, TaskEvent.REJECT, TaskState.REJECTED),
        (TaskState.WORKING, TaskEvent.REQUIRE_INPUT, TaskState.INPUT_REQUIRED),
        (TaskState.WORKING, TaskEvent.REQUIRE_AUTH, TaskState.AUTH_REQUIRED),
        (TaskState.WORKING, TaskEvent.COMPLETE, TaskState.COMPLETED),
        (TaskState.WORKING, TaskEvent.FAIL, TaskState.FAILED),
        (TaskState.WORKING, TaskEvent.CANCEL, TaskState.CANCELED),
        (TaskState.INPUT_REQUIRED, TaskEvent.RESUME, TaskState.WORKING),
        (TaskState.AUTH_REQUIRED, TaskEvent.RESUME, TaskState.WORKING),
        (TaskState.SUBMITTED, TaskEvent.CANCEL, TaskState.CANCELED),
        (TaskState.INPUT_REQUIRED, TaskEvent.CANCEL, TaskState.CANCELED),
        (TaskState.AUTH_REQUIRED, TaskEvent.CANCEL, TaskState.CANCELED),
        (TaskState.UNKNOWN, TaskEvent.CANCEL, TaskState.CANCELED),
    ])
    def test_legal_transitions(self, state, event, expected):
        """Test each legal transition reaches its target state"""
        result = apply_transition(state, event)

        assert isinstance(result, Success)
        assert result.data == expected

    def test_accepts_wire_strings(self):
        """Test states and events may be given as their wire names"""
        result = apply_transition("input-required", "resume")

        assert isinstance(result, Success)
        assert result.data == TaskState.WORKING

    def test_illegal_transition_names_state_and_event(self):
        """Test a rejected transition reports the offending pair"""
        result = apply_transition(TaskState.SUBMITTED, TaskEvent.COMPLETE)

        assert isinstance(result, Failure)
        assert result.error == IllegalTransition(state="submitted", event="complete")

    def test_unknown_event_is_rejected(self):
        """Test an unrecognized event name is an illegal transition"""
        result = apply_transition(TaskState.WORKING, "explode")

        assert isinstance(result, Failure)
        assert result.error == IllegalTransition(state="working", event="explode")

    def test_unknown_state_only_accepts_cancel(self):
        """Test the unknown state has no way forward except cancellation"""
        assert allowed_events(TaskState.UNKNOWN) == frozenset({TaskEvent.CANCEL})


class TestTransitionProperties:
    """Property-based tests over every state and event"""

    @given(state=states, event=events)
    def test_non_table_pairs_are_rejected(self, state, event):
        """Test every pair outside the table fails with IllegalTransition"""
        result = apply_transition(state, event)

        if (state, event) in TRANSITIONS:
            assert isinstance(result, Success)
            assert result.data == TRANSITIONS[(state, event)]
        else:
            assert isinstance(result, Failure)
            assert isinstance(result.error, IllegalTransition)
            assert result.error.state == state.value
            assert result.error.event == event.value

    @given(state=terminal_states, event=events)
    def test_terminal_states_reject_every_event(self, state, event):
        """Test no event leaves a terminal state"""
        result = apply_transition(state, event)

        assert isinstance(result, Failure)
        assert isinstance(result.error, IllegalTransition)

    @given(state=states)
    def test_cancel_is_legal_from_every_non_terminal_state(self, state):
        """Test cancellation is always available until the task finishes"""
        result = apply_transition(state, TaskEvent.CANCEL)

        assert isinstance(result, Success) == (state not in TERMINAL_STATES)

    @given(state=states, event=events)
    def test_transition_is_deterministic(self, state, event):
        """Test repeated application yields the same verdict"""
        assert apply_transition(state, event) == apply_transition(state, event)

    @given(source=states, target=states)
    def test_state_pair_view_agrees_with_event_table(self, source, target):
        """Test validate_state_transition accepts exactly the reachable pairs"""
        reachable = any(
            from_state == source and next_state == target
            for (from_state, _), next_state in TRANSITIONS.items()
        )
        result = validate_state_transition(source, target)

        assert isinstance(result, Success) == reachable


class TestLifecycleScenarios:
    """Test complete task lifecycles"""

    def test_completed_task_cannot_be_canceled(self):
        """Test submitted -> working -> completed, then cancel is rejected"""
        state = TaskState.SUBMITTED

        result = apply_transition(state, TaskEvent.START_WORKING)
        assert isinstance(result, Success)
        state = result.data
        assert state == TaskState.WORKING

        result = apply_transition(state, TaskEvent.COMPLETE)
        assert isinstance(result, Success)
        state = result.data
        assert state == TaskState.COMPLETED

        result = apply_transition(state, TaskEvent.CANCEL)
        assert isinstance(result, Failure)
        assert result.error == IllegalTransition(state="completed", event="cancel")

    def test_input_round_trip(self):
        """Test a task can pause for input and resume work"""
        state = TaskState.WORKING
        for event, expected in [
            (TaskEvent.REQUIRE_INPUT, TaskState.INPUT_REQUIRED),
            (TaskEvent.RESUME, TaskState.WORKING),
            (TaskEvent.REQUIRE_AUTH, TaskState.AUTH_REQUIRED),
            (TaskEvent.RESUME, TaskState.WORKING),
            (TaskEvent.FAIL, TaskState.FAILED),
        ]:
            result = apply_transition(state, event)
            assert isinstance(result, Success)
            state = result.data
            assert state == expected


class TestStateHelpers:
    """Test state classification helpers"""

    def test_terminal_states(self):
        """Test the terminal state set"""
        assert TERMINAL_STATES == {
            TaskState.COMPLETED, TaskState.CANCELED, TaskState.FAILED, TaskState.REJECTED
        }
        assert is_terminal_state("completed")
        assert not is_terminal_state(TaskState.WORKING)

    def test_interrupted_states(self):
        """Test the interrupted state set"""
        assert INTERRUPTED_STATES == {TaskState.INPUT_REQUIRED, TaskState.AUTH_REQUIRED}
        assert is_interrupted_state("auth-required")
        assert not is_interrupted_state(TaskState.SUBMITTED)

    def test_allowed_events_for_working(self):
        """Test the events available while working"""
        assert allowed_events(TaskState.WORKING) == frozenset({
            TaskEvent.REQUIRE_INPUT,
            TaskEvent.REQUIRE_AUTH,
            TaskEvent.COMPLETE,
            TaskEvent.FAIL,
            TaskEvent.CANCEL,
        })

    def test_allowed_events_for_terminal_state(self):
        """Test terminal states allow nothing"""
        assert allowed_events(TaskState.REJECTED) == frozenset()

    def test_event_for_transition(self):
        """Test the event lookup for a state pair"""
        assert event_for_transition(TaskState.SUBMITTED, TaskState.WORKING) == TaskEvent.START_WORKING
        assert event_for_transition(TaskState.SUBMITTED, TaskState.COMPLETED) is None

    def test_validate_state_transition_failure(self):
        """Test a state-pair rejection names the target state"""
        result = validate_state_transition(TaskState.COMPLETED, TaskState.WORKING)

        assert isinstance(result, Failure)
        assert result.error == IllegalTransition(state="completed", event="transition-to-working")
