"""
State storage package for EcoChallenge.
"""

from .store import StateStore, get_store, close_store
from .models import (
    AuthorityConfig,
    Challenge,
    ChallengeCategory,
    ChallengeType,
    ChallengeUpdate,
    Participant,
    Transfer,
)
from .operations import ConfigOps, ChallengeOps, ParticipantOps

__all__ = [
    "StateStore",
    "get_store",
    "close_store",
    "AuthorityConfig",
    "Challenge",
    "ChallengeCategory",
    "ChallengeType",
    "ChallengeUpdate",
    "Participant",
    "Transfer",
    "ConfigOps",
    "ChallengeOps",
    "ParticipantOps",
]
