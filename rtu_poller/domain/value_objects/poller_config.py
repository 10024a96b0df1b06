"""Poller configuration value objects.

Configuration is loaded once at startup and then passed explicitly to the
transport and the poll orchestrator. Both objects are frozen.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from .parity import Parity

if TYPE_CHECKING:
    from ..entities.reading_spec import ReadingSpec


def timeout_from_ms(milliseconds: int) -> Optional[float]:
    """Convert a configured timeout to seconds.

    A timeout of 0 means wait until data arrives, which pyserial spells
    ``None``; its ``0`` would be a non-blocking read.

    Examples:
        >>> timeout_from_ms(250)
        0.25
        >>> timeout_from_ms(0) is None
        True
    """
    if milliseconds == 0:
        return None
    return milliseconds / 1000.0


@dataclass(frozen=True)
class SerialSettings:
    """Serial line settings owned by the transport.

    Attributes:
        port: Serial device path (e.g. ``/dev/ttyUSB0`` or ``COM3``)
        baudrate: Line speed in baud
        parity: Parity setting
        stopbits: 1 or 2
        timeout: Read timeout in seconds, None to block until data arrives
    """

    port: str
    baudrate: int
    parity: Parity
    stopbits: int
    timeout: Optional[float]


@dataclass(frozen=True)
class PollerConfig:
    """Validated poller configuration.

    Attributes:
        serial: Serial line settings
        slave_address: Modbus slave address of the polled device
        read_interval_seconds: Poll cadence in whole seconds
        read_timeout_ms: Per-read response timeout in milliseconds
        readings: Ordered readings to poll each cycle
    """

    serial: SerialSettings
    slave_address: int
    read_interval_seconds: int
    read_timeout_ms: int
    readings: Tuple["ReadingSpec", ...]

    @property
    def read_timeout(self) -> Optional[float]:
        """Read timeout in seconds, None when reads block."""
        return timeout_from_ms(self.read_timeout_ms)
