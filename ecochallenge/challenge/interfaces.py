"""
External collaborators of the challenge core: authority oracle, settlement and clock.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Set
import structlog

from ..database.models import Transfer

logger = structlog.get_logger(__name__)


class AuthorityOracle(ABC):
    """Answers whether a principal may create challenges."""

    @abstractmethod
    def is_authority(self, principal: str) -> bool:
        ...


class Settlement(ABC):
    """Executes value transfers decided by the core."""

    @abstractmethod
    def transfer(self, amount: int, sender: str, recipient: str) -> bool:
        """Move ``amount`` from ``sender`` to ``recipient``; False on failure."""


class Clock(ABC):
    """Monotonic block-height source."""

    @abstractmethod
    def current_height(self) -> int:
        ...


class StaticAuthorityOracle(AuthorityOracle):
    """Authority oracle backed by a principal set."""

    def __init__(self, authorities: Optional[Iterable[str]] = None):
        self.authorities: Set[str] = set(authorities or ())

    def is_authority(self, principal: str) -> bool:
        return principal in self.authorities

    def grant(self, principal: str):
        self.authorities.add(principal)

    def revoke(self, principal: str):
        self.authorities.discard(principal)


class RecordingSettlement(Settlement):
    """Settlement that records every accepted transfer.

    Set ``fail`` to reject all subsequent transfers.
    """

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.transfers: List[Transfer] = []

    def transfer(self, amount: int, sender: str, recipient: str) -> bool:
        if self.fail:
            logger.warning("Transfer rejected", amount=amount, sender=sender, recipient=recipient)
            return False

        self.transfers.append(Transfer(amount=amount, sender=sender, recipient=recipient))
        return True


class ManualClock(Clock):
    """Block height driven by the host."""

    def __init__(self, height: int = 0):
        self.height = height

    def current_height(self) -> int:
        return self.height

    def advance(self, blocks: int = 1) -> int:
        """Move the height forward and return it."""
        if blocks < 0:
            raise ValueError("clock cannot move backwards")
        self.height += blocks
        return self.height
