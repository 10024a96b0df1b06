"""IClock interface for time sources."""

from abc import ABC, abstractmethod
from datetime import datetime


class IClock(ABC):
    """Source of wall-clock time, monotonic time and sleeping.

    Injected into the scheduler and the poll orchestrator so tests can
    drive cycle timing without real waits.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""

    @abstractmethod
    def monotonic(self) -> float:
        """Return a monotonic timestamp in seconds."""

    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        """Suspend the caller for ``seconds``."""
