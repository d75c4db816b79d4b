"""
EcoChallenge: lifecycle of block-height gated sustainability challenges.
"""

from .challenge import (
    ChallengeManager,
    ChallengeRegistry,
    ManualClock,
    ParticipantState,
    ParticipationLedger,
    RecordingSettlement,
    StaticAuthorityOracle,
)
from .database.models import Challenge, ChallengeCategory, ChallengeType, ChallengeUpdate, Participant
from .errors import ChallengeError, ErrorKind, Result

__version__ = "0.1.0"

__all__ = [
    "ChallengeManager",
    "ChallengeRegistry",
    "ManualClock",
    "ParticipantState",
    "ParticipationLedger",
    "RecordingSettlement",
    "StaticAuthorityOracle",
    "Challenge",
    "ChallengeCategory",
    "ChallengeType",
    "ChallengeUpdate",
    "Participant",
    "ChallengeError",
    "ErrorKind",
    "Result",
]
