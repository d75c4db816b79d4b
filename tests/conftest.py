"""
Shared fixtures for EcoChallenge tests.
"""

import pytest

from ecochallenge.challenge import (
    ChallengeManager,
    ManualClock,
    RecordingSettlement,
    StaticAuthorityOracle,
)
from ecochallenge.config import Settings

from .helpers import AUTHORITY_CONTRACT, CREATOR, challenge_fields


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def oracle():
    return StaticAuthorityOracle([CREATOR])


@pytest.fixture
def settlement():
    return RecordingSettlement()


@pytest.fixture
def manager(settings, clock, oracle, settlement):
    return ChallengeManager(oracle=oracle, settlement=settlement, clock=clock, config=settings)


@pytest.fixture
def configured(manager):
    """Manager with the authority contract set."""
    manager.set_authority_contract(AUTHORITY_CONTRACT)
    return manager


@pytest.fixture
def challenge_id(configured):
    """Id of a created RecycleWeek challenge (start 10, duration 100)."""
    return configured.create_challenge(CREATOR, **challenge_fields()).unwrap()
