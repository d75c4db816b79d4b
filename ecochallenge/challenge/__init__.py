"""
Challenge lifecycle package for EcoChallenge.
"""

from .interfaces import (
    AuthorityOracle,
    Clock,
    ManualClock,
    RecordingSettlement,
    Settlement,
    StaticAuthorityOracle,
)
from .ledger import ParticipationLedger
from .manager import ChallengeManager
from .registry import ChallengeRegistry
from .state_machine import ParticipantStateMachine, ParticipantState

__all__ = [
    "AuthorityOracle",
    "Clock",
    "ManualClock",
    "RecordingSettlement",
    "Settlement",
    "StaticAuthorityOracle",
    "ParticipationLedger",
    "ChallengeManager",
    "ChallengeRegistry",
    "ParticipantStateMachine",
    "ParticipantState",
]
