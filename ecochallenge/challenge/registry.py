"""
Challenge registry for EcoChallenge.

Owns challenge records, the name index and the authority configuration.
Every check runs before the first write, and the creation fee is settled
before the challenge is stored, so a rejected request leaves no trace.
"""

from typing import Optional, Union
import structlog

from ..config import ChallengeLimits, Settings, get_config, get_limits_config
from ..database import ChallengeOps, ConfigOps, StateStore
from ..database.models import (
    AuthorityConfig,
    Challenge,
    ChallengeCategory,
    ChallengeType,
    ChallengeUpdate,
)
from ..errors import ErrorKind, Result
from .interfaces import AuthorityOracle, Clock, Settlement

logger = structlog.get_logger(__name__)

CHALLENGE_TYPES = [t.value for t in ChallengeType]
CATEGORIES = [c.value for c in ChallengeCategory]


def _valid_text(value: str, max_length: int) -> bool:
    return isinstance(value, str) and 0 < len(value) <= max_length


class ChallengeRegistry:
    """Creates, updates and looks up challenges."""

    def __init__(self, oracle: AuthorityOracle, settlement: Settlement, clock: Clock,
                 store: Optional[StateStore] = None, config: Optional[Settings] = None,
                 limits: Optional[ChallengeLimits] = None):
        self.oracle = oracle
        self.settlement = settlement
        self.clock = clock
        self.config = config or get_config()
        self.limits = limits or get_limits_config()
        self.config_ops = ConfigOps(store)
        self.challenge_ops = ChallengeOps(store)

    # Configuration

    @property
    def authority(self) -> AuthorityConfig:
        return self.config_ops.get_authority()

    @property
    def authority_contract(self) -> Optional[str]:
        return self.authority.authority_contract

    @property
    def creation_fee(self) -> int:
        return self.authority.creation_fee

    def set_authority_contract(self, principal: str) -> Result[bool]:
        """Configure the authority contract once."""
        if principal == self.config.burn_address:
            logger.warning("Authority contract rejected", principal=principal,
                           error=ErrorKind.INVALID_PRINCIPAL.name)
            return Result.failure(ErrorKind.INVALID_PRINCIPAL)

        if self.authority.is_configured:
            logger.warning("Authority contract already configured",
                           current=self.authority_contract, principal=principal)
            return Result.failure(ErrorKind.ALREADY_CONFIGURED)

        self.config_ops.set_authority_contract(principal)
        logger.info("Authority contract configured", principal=principal)
        return Result.success(True)

    def set_creation_fee(self, amount: int) -> Result[bool]:
        """Set the fee charged for each created challenge."""
        if not self.authority.is_configured:
            logger.warning("Creation fee rejected, no authority contract", amount=amount)
            return Result.failure(ErrorKind.NOT_AUTHORIZED)

        self.config_ops.set_creation_fee(amount)
        logger.info("Creation fee set", amount=amount)
        return Result.success(True)

    # Creation

    def _validate_creation(self, caller: str, name: str, description: str,
                           start_time: int, duration: int, reward_amount: int,
                           required_actions: int, min_participants: int,
                           max_participants: int, challenge_type: Union[str, ChallengeType],
                           difficulty: int, grace_period: int, location: str,
                           category: Union[str, ChallengeCategory]) -> Optional[ErrorKind]:
        """Return the first failing rule, in the order callers rely on."""
        limits = self.limits

        if self.challenge_ops.next_id() >= self.config.max_challenges:
            return ErrorKind.MAX_CHALLENGES_EXCEEDED
        if not _valid_text(name, limits.max_name_length):
            return ErrorKind.INVALID_CHALLENGE_NAME
        if not _valid_text(description, limits.max_description_length):
            return ErrorKind.INVALID_DESCRIPTION
        if start_time < self.clock.current_height():
            return ErrorKind.INVALID_START_TIME
        if duration <= 0:
            return ErrorKind.INVALID_DURATION
        if reward_amount <= 0:
            return ErrorKind.INVALID_REWARD
        if required_actions <= 0:
            return ErrorKind.INVALID_REQUIRED_ACTIONS
        if min_participants <= 0:
            return ErrorKind.INVALID_MIN_PARTICIPANTS
        if max_participants <= 0:
            return ErrorKind.INVALID_MAX_PARTICIPANTS
        if challenge_type not in CHALLENGE_TYPES:
            return ErrorKind.INVALID_CHALLENGE_TYPE
        if not limits.min_difficulty <= difficulty <= limits.max_difficulty:
            return ErrorKind.INVALID_DIFFICULTY
        if not 0 <= grace_period <= limits.max_grace_period:
            return ErrorKind.INVALID_GRACE_PERIOD
        if not _valid_text(location, limits.max_location_length):
            return ErrorKind.INVALID_LOCATION
        if category not in CATEGORIES:
            return ErrorKind.INVALID_CATEGORY
        if not self.oracle.is_authority(caller):
            return ErrorKind.NOT_AUTHORIZED
        if self.challenge_ops.get_challenge_id(name) is not None:
            return ErrorKind.CHALLENGE_ALREADY_EXISTS
        if not self.authority.is_configured:
            return ErrorKind.AUTHORITY_NOT_VERIFIED
        return None

    def create_challenge(self, caller: str, name: str, description: str,
                         start_time: int, duration: int, reward_amount: int,
                         required_actions: int, min_participants: int,
                         max_participants: int, challenge_type: Union[str, ChallengeType],
                         difficulty: int, grace_period: int, location: str,
                         category: Union[str, ChallengeCategory]) -> Result[int]:
        """Create a challenge, collect the creation fee and return the new id."""
        error = self._validate_creation(
            caller, name, description, start_time, duration, reward_amount,
            required_actions, min_participants, max_participants, challenge_type,
            difficulty, grace_period, location, category
        )
        if error is not None:
            logger.warning("Challenge creation rejected", caller=caller, name=name, error=error.name)
            return Result.failure(error)

        challenge = Challenge(
            id=self.challenge_ops.next_id(),
            name=name,
            description=description,
            start_time=start_time,
            duration=duration,
            grace_period=grace_period,
            reward_amount=reward_amount,
            required_actions=required_actions,
            min_participants=min_participants,
            max_participants=max_participants,
            creator=caller,
            challenge_type=ChallengeType(challenge_type),
            difficulty=difficulty,
            location=location,
            category=ChallengeCategory(category),
            status=True,
        )

        fee = self.creation_fee
        if not self.settlement.transfer(fee, caller, self.authority_contract):
            logger.error("Creation fee transfer failed", caller=caller, name=name, amount=fee)
            return Result.failure(ErrorKind.SETTLEMENT_FAILED)

        challenge_id = self.challenge_ops.insert_challenge(challenge)
        logger.info("Challenge created", challenge_id=challenge_id, name=name,
                    creator=caller, fee=fee)
        return Result.success(challenge_id)

    # Update

    def update_challenge(self, caller: str, challenge_id: int, name: str,
                         description: str, duration: int) -> Result[bool]:
        """Change a challenge's name, description and duration."""
        challenge = self.challenge_ops.get_challenge(challenge_id)
        error = None

        if challenge is None:
            error = ErrorKind.CHALLENGE_NOT_FOUND
        elif challenge.creator != caller:
            error = ErrorKind.NOT_AUTHORIZED
        elif not _valid_text(name, self.limits.max_name_length):
            error = ErrorKind.INVALID_CHALLENGE_NAME
        elif not _valid_text(description, self.limits.max_description_length):
            error = ErrorKind.INVALID_DESCRIPTION
        elif duration <= 0:
            error = ErrorKind.INVALID_DURATION
        else:
            owner = self.challenge_ops.get_challenge_id(name)
            if owner is not None and owner != challenge_id:
                error = ErrorKind.CHALLENGE_ALREADY_EXISTS

        if error is not None:
            logger.warning("Challenge update rejected", caller=caller,
                           challenge_id=challenge_id, error=error.name)
            return Result.failure(error)

        height = self.clock.current_height()
        updated = challenge.model_copy(update={
            "name": name,
            "description": description,
            "duration": duration,
        })
        record = ChallengeUpdate(
            update_name=name,
            update_description=description,
            update_duration=duration,
            update_timestamp=height,
            updater=caller,
        )
        self.challenge_ops.replace_challenge(updated, record)

        logger.info("Challenge updated", challenge_id=challenge_id,
                    old_name=challenge.name, new_name=name, height=height)
        return Result.success(True)

    # Reads

    def get_challenge(self, challenge_id: int) -> Optional[Challenge]:
        return self.challenge_ops.get_challenge(challenge_id)

    def get_challenge_id(self, name: str) -> Optional[int]:
        return self.challenge_ops.get_challenge_id(name)

    def get_challenge_update(self, challenge_id: int) -> Optional[ChallengeUpdate]:
        return self.challenge_ops.get_update(challenge_id)

    def exists(self, name: str) -> bool:
        return self.challenge_ops.get_challenge_id(name) is not None

    def count(self) -> int:
        return self.challenge_ops.count()
