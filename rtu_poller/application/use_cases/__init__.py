"""Use cases for the Modbus RTU poller.

Use cases orchestrate domain objects and infrastructure through the
domain interfaces, and return plain result objects.
"""

from .reading_result import ReadingResult
from .poll_cycle_result import PollCycleResult
from .poll_cycle_use_case import PollCycleUseCase

__all__ = [
    "ReadingResult",
    "PollCycleResult",
    "PollCycleUseCase",
]
