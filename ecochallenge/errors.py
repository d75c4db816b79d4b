"""
Error kinds and result type for EcoChallenge.

Every fallible operation returns a ``Result``. A failed result carries exactly
one ``ErrorKind``; callers that prefer exceptions can call ``unwrap()``.
"""

from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(int, Enum):
    """Closed enumeration of rejection reasons."""
    NOT_AUTHORIZED = 100
    INVALID_CHALLENGE_NAME = 101
    INVALID_DESCRIPTION = 102
    INVALID_DURATION = 103
    INVALID_REWARD = 104
    INVALID_REQUIRED_ACTIONS = 105
    CHALLENGE_ALREADY_EXISTS = 106
    CHALLENGE_NOT_FOUND = 107
    INVALID_START_TIME = 108
    AUTHORITY_NOT_VERIFIED = 109
    INVALID_MIN_PARTICIPANTS = 110
    INVALID_MAX_PARTICIPANTS = 111
    INVALID_CHALLENGE_TYPE = 112
    INVALID_DIFFICULTY = 113
    INVALID_GRACE_PERIOD = 114
    INVALID_LOCATION = 115
    INVALID_CATEGORY = 116
    MAX_CHALLENGES_EXCEEDED = 117
    INVALID_PRINCIPAL = 118
    ALREADY_CONFIGURED = 119
    SETTLEMENT_FAILED = 120
    ALREADY_JOINED = 121
    NOT_JOINED = 122
    CHALLENGE_ENDED = 123
    CHALLENGE_NOT_STARTED = 124
    INVALID_PROGRESS = 125
    REWARD_ALREADY_CLAIMED = 126
    NOT_COMPLETED = 127


class ChallengeError(Exception):
    """Raised by ``Result.unwrap()`` on a failed result."""

    def __init__(self, kind: ErrorKind):
        super().__init__(f"{kind.name} ({kind.value})")
        self.kind = kind

    @property
    def code(self) -> int:
        return self.kind.value


class Result(Generic[T]):
    """Success value or error kind."""

    __slots__ = ("_value", "_error")

    def __init__(self, value: Optional[T] = None, error: Optional[ErrorKind] = None):
        self._value = value
        self._error = error

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> "Result[Any]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self._error is None

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def error(self) -> Optional[ErrorKind]:
        return self._error

    def unwrap(self) -> T:
        """Return the value or raise ``ChallengeError``."""
        if self._error is not None:
            raise ChallengeError(self._error)
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._value == other._value and self._error == other._error

    def __repr__(self) -> str:
        if self.ok:
            return f"Result.success({self._value!r})"
        return f"Result.failure({self._error.name})"
