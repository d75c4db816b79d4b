"""
In-memory state store for EcoChallenge.
"""

from typing import Dict, List, Optional, Tuple
import structlog

from ..config import get_config
from .models import AuthorityConfig, Challenge, ChallengeUpdate, Participant

logger = structlog.get_logger(__name__)


class StateStore:
    """Key-value maps owned by the registry and the ledger."""

    def __init__(self, creation_fee: Optional[int] = None):
        if creation_fee is None:
            creation_fee = get_config().default_creation_fee

        self.default_creation_fee = creation_fee
        self.authority = AuthorityConfig(creation_fee=creation_fee)
        self.next_challenge_id = 0

        self.challenges: Dict[int, Challenge] = {}
        self.challenge_updates: Dict[int, ChallengeUpdate] = {}
        self.challenges_by_name: Dict[str, int] = {}

        # challenge id -> principal -> participant
        self.participants: Dict[int, Dict[str, Participant]] = {}
        # challenge id -> principal -> [(state, block height), ...]
        self.participant_history: Dict[int, Dict[str, List[Tuple[str, int]]]] = {}

    def clear(self):
        """Drop all records and reset configuration to unset."""
        self.authority = AuthorityConfig(creation_fee=self.default_creation_fee)
        self.next_challenge_id = 0
        self.challenges.clear()
        self.challenge_updates.clear()
        self.challenges_by_name.clear()
        self.participants.clear()
        self.participant_history.clear()
        logger.info("State store cleared")


# Global store instance
_store: Optional[StateStore] = None


def get_store() -> StateStore:
    """Get the global state store instance."""
    global _store

    if _store is None:
        _store = StateStore()
        logger.info("State store created")

    return _store


def close_store():
    """Discard the global state store."""
    global _store
    _store = None
