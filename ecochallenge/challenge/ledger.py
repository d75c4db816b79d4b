"""
Participation ledger for EcoChallenge.
"""

from typing import List, Optional, Tuple
import structlog

from ..database import ParticipantOps, StateStore
from ..database.models import Participant
from ..errors import ErrorKind, Result
from .interfaces import Clock, Settlement
from .registry import ChallengeRegistry
from .state_machine import ParticipantState, ParticipantStateMachine

logger = structlog.get_logger(__name__)


class ParticipationLedger:
    """Tracks enrollment, progress and reward claims per participant.

    Each participant record is stored with its state history; a record is only
    written when the matching state transition is accepted.
    """

    def __init__(self, registry: ChallengeRegistry, settlement: Settlement, clock: Clock,
                 store: Optional[StateStore] = None):
        self.registry = registry
        self.settlement = settlement
        self.clock = clock
        self.participant_ops = ParticipantOps(store or registry.challenge_ops.store)

    def get_participant(self, challenge_id: int, principal: str) -> Optional[Participant]:
        return self.participant_ops.get_participant(challenge_id, principal)

    def participant_state(self, challenge_id: int, principal: str) -> ParticipantState:
        """Get the lifecycle state of a principal in a challenge."""
        return ParticipantStateMachine.state_of(self.get_participant(challenge_id, principal))

    def get_participant_history(self, challenge_id: int,
                                principal: str) -> List[Tuple[ParticipantState, int]]:
        """Get (state, block height) pairs for every transition of a participant."""
        return [(ParticipantState(state), height)
                for state, height in self.participant_ops.get_history(challenge_id, principal)]

    def count_participants(self, challenge_id: int) -> int:
        return self.participant_ops.count_participants(challenge_id)

    def _machine(self, challenge_id: int, principal: str,
                 participant: Optional[Participant], height: int) -> ParticipantStateMachine:
        history = self.participant_ops.get_history(challenge_id, principal)
        if history:
            return ParticipantStateMachine.from_history(history)
        return ParticipantStateMachine.for_participant(participant, height)

    def _commit(self, challenge_id: int, principal: str, participant: Participant,
                machine: ParticipantStateMachine):
        self.participant_ops.put_participant_with_history(
            challenge_id, principal, participant, machine.get_state_history()
        )

    def _reject(self, event: str, caller: str, challenge_id: int, error: ErrorKind, **kw) -> Result:
        logger.warning(event, caller=caller, challenge_id=challenge_id, error=error.name, **kw)
        return Result.failure(error)

    def join_challenge(self, caller: str, challenge_id: int) -> Result[bool]:
        """Enroll the caller while the challenge window is open."""
        height = self.clock.current_height()
        challenge = self.registry.get_challenge(challenge_id)

        if challenge is None:
            return self._reject("Join rejected", caller, challenge_id, ErrorKind.CHALLENGE_NOT_FOUND)
        if not challenge.has_started(height):
            return self._reject("Join rejected", caller, challenge_id,
                                ErrorKind.CHALLENGE_NOT_STARTED, height=height)
        if challenge.has_ended(height):
            return self._reject("Join rejected", caller, challenge_id,
                                ErrorKind.CHALLENGE_ENDED, height=height)

        participant = self.get_participant(challenge_id, caller)
        machine = self._machine(challenge_id, caller, participant, height)
        if not machine.transition_to(ParticipantState.JOINED, height):
            return self._reject("Join rejected", caller, challenge_id, ErrorKind.ALREADY_JOINED)

        self._commit(challenge_id, caller, Participant(), machine)
        logger.info("Participant joined", caller=caller, challenge_id=challenge_id, height=height)
        return Result.success(True)

    def update_progress(self, caller: str, challenge_id: int, action_count: int) -> Result[int]:
        """Add completed actions for the caller and return the new progress."""
        height = self.clock.current_height()
        challenge = self.registry.get_challenge(challenge_id)

        if challenge is None:
            return self._reject("Progress rejected", caller, challenge_id, ErrorKind.CHALLENGE_NOT_FOUND)

        participant = self.get_participant(challenge_id, caller)
        if participant is None or not participant.joined:
            return self._reject("Progress rejected", caller, challenge_id, ErrorKind.NOT_JOINED)
        if challenge.has_ended(height):
            return self._reject("Progress rejected", caller, challenge_id,
                                ErrorKind.CHALLENGE_ENDED, height=height)
        if action_count < 0 or participant.progress + action_count > challenge.required_actions:
            return self._reject("Progress rejected", caller, challenge_id, ErrorKind.INVALID_PROGRESS,
                                progress=participant.progress, action_count=action_count,
                                required=challenge.required_actions)

        machine = self._machine(challenge_id, caller, participant, height)
        updated = participant.advance(action_count, challenge.required_actions)
        new_state = ParticipantStateMachine.state_of(updated)
        if new_state != machine.get_current_state() and not machine.transition_to(new_state, height):
            return self._reject("Progress rejected", caller, challenge_id, ErrorKind.INVALID_PROGRESS,
                                state=machine.get_current_state())

        self._commit(challenge_id, caller, updated, machine)
        logger.info("Progress updated", caller=caller, challenge_id=challenge_id,
                    progress=updated.progress, completed=updated.completed)
        return Result.success(updated.progress)

    def claim_reward(self, caller: str, challenge_id: int) -> Result[int]:
        """Pay the reward to a completed participant once the window has closed."""
        height = self.clock.current_height()
        challenge = self.registry.get_challenge(challenge_id)

        if challenge is None:
            return self._reject("Claim rejected", caller, challenge_id, ErrorKind.CHALLENGE_NOT_FOUND)

        participant = self.get_participant(challenge_id, caller)
        state = ParticipantStateMachine.state_of(participant)

        if state == ParticipantState.UNJOINED:
            return self._reject("Claim rejected", caller, challenge_id, ErrorKind.NOT_JOINED)
        if state == ParticipantState.JOINED:
            error = ErrorKind.NOT_COMPLETED
            if self.registry.config.legacy_not_completed_error:
                error = ErrorKind.NOT_JOINED
            return self._reject("Claim rejected", caller, challenge_id, error,
                                progress=participant.progress)
        if state == ParticipantState.CLAIMED:
            return self._reject("Claim rejected", caller, challenge_id, ErrorKind.REWARD_ALREADY_CLAIMED)
        if not challenge.has_ended(height):
            return self._reject("Claim rejected", caller, challenge_id,
                                ErrorKind.CHALLENGE_ENDED, height=height, ends_at=challenge.end_time)

        machine = self._machine(challenge_id, caller, participant, height)
        if not machine.can_transition_to(ParticipantState.CLAIMED):
            return self._reject("Claim rejected", caller, challenge_id,
                                ErrorKind.REWARD_ALREADY_CLAIMED, state=machine.get_current_state())

        amount = challenge.reward_amount
        escrow = self.registry.authority_contract
        if not self.settlement.transfer(amount, escrow, caller):
            logger.error("Reward transfer failed", caller=caller, challenge_id=challenge_id, amount=amount)
            return Result.failure(ErrorKind.SETTLEMENT_FAILED)

        machine.transition_to(ParticipantState.CLAIMED, height)
        self._commit(challenge_id, caller, participant.claim(), machine)
        logger.info("Reward claimed", caller=caller, challenge_id=challenge_id, amount=amount)
        return Result.success(amount)
