"""
Challenge manager for EcoChallenge.
"""

from typing import List, Optional, Tuple, Union
import structlog

from ..config import Settings, get_config
from ..database import StateStore
from ..database.models import Challenge, ChallengeCategory, ChallengeType, ChallengeUpdate, Participant
from ..errors import Result
from .interfaces import (
    AuthorityOracle,
    Clock,
    ManualClock,
    RecordingSettlement,
    Settlement,
    StaticAuthorityOracle,
)
from .ledger import ParticipationLedger
from .registry import ChallengeRegistry
from .state_machine import ParticipantState

logger = structlog.get_logger(__name__)


class ChallengeManager:
    """Manages the challenge lifecycle over one state store.

    Wires the registry and the ledger to the authority oracle, settlement and
    clock supplied by the host. Requests are expected one at a time.
    """

    def __init__(self, oracle: Optional[AuthorityOracle] = None,
                 settlement: Optional[Settlement] = None,
                 clock: Optional[Clock] = None,
                 store: Optional[StateStore] = None,
                 config: Optional[Settings] = None):
        self.config = config or get_config()
        self.store = store or StateStore(creation_fee=self.config.default_creation_fee)
        self.oracle = oracle or StaticAuthorityOracle()
        self.settlement = settlement or RecordingSettlement()
        self.clock = clock or ManualClock()

        self.registry = ChallengeRegistry(
            self.oracle, self.settlement, self.clock, store=self.store, config=self.config
        )
        self.ledger = ParticipationLedger(
            self.registry, self.settlement, self.clock, store=self.store
        )
        logger.debug("Challenge manager initialized", max_challenges=self.config.max_challenges)

    # Configuration

    def set_authority_contract(self, principal: str) -> Result[bool]:
        return self.registry.set_authority_contract(principal)

    def set_creation_fee(self, amount: int) -> Result[bool]:
        return self.registry.set_creation_fee(amount)

    # Registry

    def create_challenge(self, caller: str, name: str, description: str,
                         start_time: int, duration: int, reward_amount: int,
                         required_actions: int, min_participants: int,
                         max_participants: int, challenge_type: Union[str, ChallengeType],
                         difficulty: int, grace_period: int, location: str,
                         category: Union[str, ChallengeCategory]) -> Result[int]:
        """Create a challenge on behalf of an authority."""
        return self.registry.create_challenge(
            caller, name, description, start_time, duration, reward_amount,
            required_actions, min_participants, max_participants, challenge_type,
            difficulty, grace_period, location, category
        )

    def update_challenge(self, caller: str, challenge_id: int, name: str,
                         description: str, duration: int) -> Result[bool]:
        return self.registry.update_challenge(caller, challenge_id, name, description, duration)

    def get_challenge(self, challenge_id: int) -> Optional[Challenge]:
        return self.registry.get_challenge(challenge_id)

    def get_challenge_update(self, challenge_id: int) -> Optional[ChallengeUpdate]:
        return self.registry.get_challenge_update(challenge_id)

    def exists(self, name: str) -> bool:
        return self.registry.exists(name)

    def count(self) -> int:
        return self.registry.count()

    # Ledger

    def join_challenge(self, caller: str, challenge_id: int) -> Result[bool]:
        return self.ledger.join_challenge(caller, challenge_id)

    def update_progress(self, caller: str, challenge_id: int, action_count: int) -> Result[int]:
        return self.ledger.update_progress(caller, challenge_id, action_count)

    def claim_reward(self, caller: str, challenge_id: int) -> Result[int]:
        return self.ledger.claim_reward(caller, challenge_id)

    def get_participant(self, challenge_id: int, principal: str) -> Optional[Participant]:
        return self.ledger.get_participant(challenge_id, principal)

    def participant_state(self, challenge_id: int, principal: str) -> ParticipantState:
        return self.ledger.participant_state(challenge_id, principal)

    def get_participant_history(self, challenge_id: int,
                                principal: str) -> List[Tuple[ParticipantState, int]]:
        return self.ledger.get_participant_history(challenge_id, principal)
