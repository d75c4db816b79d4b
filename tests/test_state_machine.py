"""
Tests for the participant state machine.
"""

import pytest

from ecochallenge.challenge import ParticipantStateMachine, ParticipantState
from ecochallenge.database.models import Participant


class TestParticipantStateMachine:
    """Tests for ParticipantStateMachine."""

    def test_full_path(self):
        """Unjoined -> joined -> completed -> claimed."""
        machine = ParticipantStateMachine()
        assert machine.transition_to(ParticipantState.JOINED, 10)
        assert machine.transition_to(ParticipantState.COMPLETED, 20)
        assert machine.transition_to(ParticipantState.CLAIMED, 110)
        assert machine.is_terminal_state()
        assert machine.get_state_history() == [
            (ParticipantState.UNJOINED, 0),
            (ParticipantState.JOINED, 10),
            (ParticipantState.COMPLETED, 20),
            (ParticipantState.CLAIMED, 110),
        ]

    @pytest.mark.parametrize("start, target", [
        (ParticipantState.JOINED, ParticipantState.UNJOINED),
        (ParticipantState.JOINED, ParticipantState.CLAIMED),
        (ParticipantState.COMPLETED, ParticipantState.JOINED),
        (ParticipantState.CLAIMED, ParticipantState.COMPLETED),
        (ParticipantState.UNJOINED, ParticipantState.COMPLETED),
    ])
    def test_reject_invalid_transition(self, start, target):
        """Transitions only move forward one step."""
        machine = ParticipantStateMachine(start)
        assert not machine.transition_to(target, 5)
        assert machine.get_current_state() == start
        assert len(machine.get_state_history()) == 1

    @pytest.mark.parametrize("participant, state", [
        (None, ParticipantState.UNJOINED),
        (Participant(joined=False), ParticipantState.UNJOINED),
        (Participant(progress=3), ParticipantState.JOINED),
        (Participant(progress=10, completed=True), ParticipantState.COMPLETED),
        (Participant(progress=10, completed=True, reward_claimed=True), ParticipantState.CLAIMED),
    ])
    def test_state_of(self, participant, state):
        assert ParticipantStateMachine.state_of(participant) == state
        assert ParticipantStateMachine.for_participant(participant).get_current_state() == state

    def test_from_history(self):
        """A resumed machine continues from the last recorded state."""
        machine = ParticipantStateMachine.from_history([
            ("unjoined", 10),
            ("joined", 10),
        ])
        assert machine.get_current_state() == ParticipantState.JOINED
        assert not machine.can_transition_to(ParticipantState.CLAIMED)
        assert machine.transition_to(ParticipantState.COMPLETED, 40)
        assert machine.get_state_history()[-1] == (ParticipantState.COMPLETED, 40)

    def test_from_empty_history(self):
        with pytest.raises(ValueError):
            ParticipantStateMachine.from_history([])
