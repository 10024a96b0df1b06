"""Poll Cycle Result DTO."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

from ...domain.helpers.transformations import ReadingValue
from .reading_result import ReadingResult


@dataclass
class PollCycleResult:
    """Result of one poll cycle.

    Attributes:
        cycle: Cycle number, starting at 1
        started_at: Wall-clock time the cycle began
        readings: Per-reading results in polling order
        duration: Time taken for the cycle (seconds)
    """

    cycle: int
    started_at: datetime
    readings: List[ReadingResult] = field(default_factory=list)
    duration: float = 0.0

    @property
    def success(self) -> bool:
        """Whether every reading in the cycle succeeded."""
        return all(reading.success for reading in self.readings)

    @property
    def failed_reads(self) -> int:
        """Number of readings that failed."""
        return sum(1 for reading in self.readings if not reading.success)

    @property
    def values(self) -> Dict[str, ReadingValue]:
        """Successful values keyed by reading name."""
        return {
            reading.name: reading.value
            for reading in self.readings
            if reading.success
        }

    def get(self, name: str) -> ReadingResult:
        """Return the result for reading ``name``.

        Raises:
            KeyError: If the reading was not part of the cycle
        """
        for reading in self.readings:
            if reading.name == name:
                return reading
        raise KeyError(name)
