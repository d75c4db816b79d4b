"""
Participant state machine for EcoChallenge.
"""

from enum import Enum
from typing import Dict, List, Optional, Set, Tuple
import structlog

from ..database.models import Participant

logger = structlog.get_logger(__name__)


class ParticipantState(str, Enum):
    """Participant state enumeration."""
    UNJOINED = "unjoined"
    JOINED = "joined"
    COMPLETED = "completed"
    CLAIMED = "claimed"


class ParticipantStateMachine:
    """One-directional participant lifecycle."""

    VALID_TRANSITIONS: Dict[ParticipantState, Set[ParticipantState]] = {
        ParticipantState.UNJOINED: {ParticipantState.JOINED},
        ParticipantState.JOINED: {ParticipantState.COMPLETED},
        ParticipantState.COMPLETED: {ParticipantState.CLAIMED},
        ParticipantState.CLAIMED: set(),  # Terminal state
    }

    def __init__(self, initial_state: ParticipantState = ParticipantState.UNJOINED,
                 height: int = 0):
        self.current_state = initial_state
        self.state_history: List[Tuple[ParticipantState, int]] = [(initial_state, height)]

    @staticmethod
    def state_of(participant: Optional[Participant]) -> ParticipantState:
        """Derive the state of a participant record."""
        if participant is None or not participant.joined:
            return ParticipantState.UNJOINED
        if participant.reward_claimed:
            return ParticipantState.CLAIMED
        if participant.completed:
            return ParticipantState.COMPLETED
        return ParticipantState.JOINED

    @classmethod
    def for_participant(cls, participant: Optional[Participant],
                        height: int = 0) -> "ParticipantStateMachine":
        """Create a state machine positioned at a participant's current state."""
        return cls(cls.state_of(participant), height)

    @classmethod
    def from_history(cls, history: List[Tuple[ParticipantState, int]]) -> "ParticipantStateMachine":
        """Resume a state machine from a recorded transition history."""
        if not history:
            raise ValueError("history must not be empty")
        state, height = history[0]
        machine = cls(ParticipantState(state), height)
        machine.state_history = [(ParticipantState(s), h) for s, h in history]
        machine.current_state = machine.state_history[-1][0]
        return machine

    def can_transition_to(self, new_state: ParticipantState) -> bool:
        """Check if transition to new state is valid."""
        return new_state in self.VALID_TRANSITIONS.get(self.current_state, set())

    def transition_to(self, new_state: ParticipantState, height: int) -> bool:
        """Transition to a new state at the given block height."""
        if not self.can_transition_to(new_state):
            logger.warning(
                "Invalid participant transition attempted",
                current_state=self.current_state,
                new_state=new_state
            )
            return False

        old_state = self.current_state
        self.current_state = new_state
        self.state_history.append((new_state, height))

        logger.debug(
            "Participant state transitioned",
            old_state=old_state,
            new_state=new_state,
            height=height
        )

        return True

    def is_terminal_state(self) -> bool:
        """Check if current state is terminal."""
        return len(self.VALID_TRANSITIONS.get(self.current_state, set())) == 0

    def get_current_state(self) -> ParticipantState:
        return self.current_state

    def get_state_history(self) -> List[Tuple[ParticipantState, int]]:
        """Get state transition history."""
        return self.state_history.copy()
