"""IReadingSink interface for reading output."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...application.use_cases.reading_result import ReadingResult


class IReadingSink(ABC):
    """Downstream consumer of per-reading results.

    Receives both successful values and failure diagnostics, in the order
    the readings were polled.
    """

    @abstractmethod
    def emit(self, result: ReadingResult) -> None:
        """Publish one reading result."""
