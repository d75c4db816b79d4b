"""
Store operations for EcoChallenge.
"""

from typing import List, Optional, Tuple
import structlog

from .models import AuthorityConfig, Challenge, ChallengeUpdate, Participant
from .store import StateStore, get_store

logger = structlog.get_logger(__name__)


class BaseOperations:
    """Base operations class."""

    def __init__(self, store: Optional[StateStore] = None):
        self.store = store or get_store()


class ConfigOps(BaseOperations):
    """Authority configuration operations."""

    def get_authority(self) -> AuthorityConfig:
        """Get the current authority configuration."""
        return self.store.authority

    def set_authority_contract(self, principal: str):
        """Store the authority contract address."""
        self.store.authority = self.store.authority.model_copy(update={"authority_contract": principal})

    def set_creation_fee(self, amount: int):
        """Store the creation fee."""
        self.store.authority = self.store.authority.model_copy(update={"creation_fee": amount})


class ChallengeOps(BaseOperations):
    """Challenge record operations."""

    def next_id(self) -> int:
        """Get the id the next created challenge will receive."""
        return self.store.next_challenge_id

    def count(self) -> int:
        """Get the number of challenges ever created."""
        return self.store.next_challenge_id

    def get_challenge(self, challenge_id: int) -> Optional[Challenge]:
        """Get challenge by id."""
        return self.store.challenges.get(challenge_id)

    def get_challenge_id(self, name: str) -> Optional[int]:
        """Get challenge id by name."""
        return self.store.challenges_by_name.get(name)

    def insert_challenge(self, challenge: Challenge) -> int:
        """Insert a new challenge, index its name and bump the id counter."""
        if challenge.id != self.store.next_challenge_id:
            raise ValueError(f"expected id {self.store.next_challenge_id}, got {challenge.id}")
        if challenge.name in self.store.challenges_by_name:
            raise KeyError(challenge.name)

        self.store.challenges[challenge.id] = challenge
        self.store.challenges_by_name[challenge.name] = challenge.id
        self.store.next_challenge_id += 1

        logger.debug("Challenge stored", challenge_id=challenge.id, name=challenge.name)
        return challenge.id

    def replace_challenge(self, challenge: Challenge, update: ChallengeUpdate):
        """Replace a challenge, move its name index entry and overwrite its audit slot."""
        old = self.store.challenges[challenge.id]

        self.store.challenges[challenge.id] = challenge
        del self.store.challenges_by_name[old.name]
        self.store.challenges_by_name[challenge.name] = challenge.id
        self.store.challenge_updates[challenge.id] = update

        logger.debug("Challenge replaced", challenge_id=challenge.id,
                     old_name=old.name, new_name=challenge.name)

    def get_update(self, challenge_id: int) -> Optional[ChallengeUpdate]:
        """Get the latest update record of a challenge."""
        return self.store.challenge_updates.get(challenge_id)


class ParticipantOps(BaseOperations):
    """Participant record operations."""

    def get_participant(self, challenge_id: int, principal: str) -> Optional[Participant]:
        """Get participant record for a challenge and principal."""
        return self.store.participants.get(challenge_id, {}).get(principal)

    def put_participant(self, challenge_id: int, principal: str, participant: Participant):
        """Insert or replace a participant record."""
        self.store.participants.setdefault(challenge_id, {})[principal] = participant

    def get_history(self, challenge_id: int, principal: str) -> List[Tuple[str, int]]:
        """Get the recorded state transitions of a participant."""
        return list(self.store.participant_history.get(challenge_id, {}).get(principal, []))

    def put_participant_with_history(self, challenge_id: int, principal: str,
                                     participant: Participant, history: List[Tuple[str, int]]):
        """Write a participant record together with its transition history."""
        self.put_participant(challenge_id, principal, participant)
        self.store.participant_history.setdefault(challenge_id, {})[principal] = list(history)

    def count_participants(self, challenge_id: int) -> int:
        """Get the number of principals enrolled in a challenge."""
        return len(self.store.participants.get(challenge_id, {}))
