"""Reading Result DTO.

Data Transfer Object for the outcome of one reading within a poll cycle:
either a decoded value or a tagged failure.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...domain.helpers.transformations import ReadingValue
from ...domain.value_objects.failure_kind import FailureKind


@dataclass(frozen=True)
class ReadingResult:
    """Result of one reading.

    Attributes:
        name: Reading name
        timestamp: When the reading completed
        value: Interpreted value on success, None on failure
        failure_kind: Failure kind on failure, None on success
        error: Error message if failed
    """

    name: str
    timestamp: datetime
    value: Optional[ReadingValue] = None
    failure_kind: Optional[FailureKind] = None
    error: str = ""

    @property
    def success(self) -> bool:
        """Whether the reading produced a value."""
        return self.failure_kind is None

    @classmethod
    def ok(cls, name: str, value: ReadingValue, timestamp: datetime) -> "ReadingResult":
        """Build a successful result."""
        return cls(name=name, timestamp=timestamp, value=value)

    @classmethod
    def failed(
        cls,
        name: str,
        failure_kind: FailureKind,
        error: str,
        timestamp: datetime,
    ) -> "ReadingResult":
        """Build a diagnostic result."""
        return cls(
            name=name,
            timestamp=timestamp,
            failure_kind=failure_kind,
            error=error,
        )
