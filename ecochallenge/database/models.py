"""
Record models for EcoChallenge.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ChallengeType(str, Enum):
    """Kind of sustainability task a challenge asks for."""
    RECYCLING = "recycling"
    ENERGY_SAVING = "energy-saving"
    TRANSPORT = "transport"


class ChallengeCategory(str, Enum):
    """Challenge cadence."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Challenge(BaseModel):
    """Challenge record, keyed by its integer id."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0, description="Registry-assigned id")
    name: str = Field(..., description="Unique challenge name")
    description: str = Field(..., description="What participants must do")

    # Timing, in block heights
    start_time: int = Field(..., description="First block height of the window")
    duration: int = Field(..., gt=0, description="Window length in blocks")
    grace_period: int = Field(..., description="Grace period, validated only")

    # Reward
    reward_amount: int = Field(..., gt=0, description="Reward paid per completed participant")
    required_actions: int = Field(..., gt=0, description="Actions needed to complete")

    # Participation bounds, not enforced against join counts
    min_participants: int = Field(..., gt=0)
    max_participants: int = Field(..., gt=0)

    creator: str = Field(..., description="Principal that created the challenge")
    challenge_type: ChallengeType
    difficulty: int = Field(..., description="Difficulty from 1 to 10")
    location: str
    category: ChallengeCategory
    status: bool = Field(default=True, description="True while active")

    @property
    def end_time(self) -> int:
        """First block height after the window."""
        return self.start_time + self.duration

    def has_started(self, height: int) -> bool:
        return height >= self.start_time

    def has_ended(self, height: int) -> bool:
        return height >= self.end_time


class ChallengeUpdate(BaseModel):
    """Audit slot for the latest update of a challenge."""

    model_config = ConfigDict(frozen=True)

    update_name: str
    update_description: str
    update_duration: int
    update_timestamp: int = Field(..., description="Block height of the update")
    updater: str


class Participant(BaseModel):
    """Enrollment record of one principal in one challenge."""

    model_config = ConfigDict(frozen=True)

    joined: bool = True
    progress: int = Field(default=0, ge=0)
    completed: bool = False
    reward_claimed: bool = False

    def advance(self, action_count: int, required_actions: int) -> "Participant":
        """Return a copy with progress increased and completion recomputed."""
        progress = self.progress + action_count
        if progress > required_actions:
            raise ValueError(f"progress {progress} exceeds required actions {required_actions}")
        return self.model_copy(update={
            "progress": progress,
            "completed": progress >= required_actions,
        })

    def claim(self) -> "Participant":
        """Return a copy marked as claimed."""
        if not self.completed:
            raise ValueError("cannot claim before completion")
        if self.reward_claimed:
            raise ValueError("reward already claimed")
        return self.model_copy(update={"reward_claimed": True})


class AuthorityConfig(BaseModel):
    """Process-wide authority configuration; the contract is set once."""

    authority_contract: Optional[str] = Field(None, description="Fee recipient and reward escrow")
    creation_fee: int = Field(default=1000, description="Fee charged per created challenge")

    @property
    def is_configured(self) -> bool:
        return self.authority_contract is not None


class Transfer(BaseModel):
    """Settlement instruction issued by the core."""

    model_config = ConfigDict(frozen=True)

    amount: int
    sender: str
    recipient: str
