"""Console output for reading results."""

import logging
import sys
from typing import Optional, TextIO

from ...application.use_cases.reading_result import ReadingResult
from ...domain.interfaces import IReadingSink

_LOGGER = logging.getLogger(__name__)


class ConsoleSink(IReadingSink):
    """Print values as ``<name>: <value>`` lines and log diagnostics.

    Values go to ``stream`` (stdout by default) so they can be piped;
    failures go through logging at WARNING level.

    Example:
        >>> sink = ConsoleSink()
        >>> sink.emit(ReadingResult.ok("FAN_SPEED", 42, now))
        FAN_SPEED: 42
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def emit(self, result: ReadingResult) -> None:
        if result.success:
            stream = self._stream or sys.stdout
            stream.write(f"{result.name}: {result.value}\n")
            stream.flush()
            return

        _LOGGER.warning(
            "Error reading %s (%s): %s",
            result.name,
            result.failure_kind.value,
            result.error,
        )
