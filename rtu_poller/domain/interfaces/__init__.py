"""Domain interfaces for the Modbus RTU poller.

This module defines the contracts that infrastructure implementations
must fulfill, so the orchestrator can run against fakes in tests and
against pyserial in production.
"""

from .i_crc import ICRC
from .i_protocol import IProtocol
from .i_transport import ITransport
from .i_clock import IClock
from .i_reading_sink import IReadingSink

__all__ = [
    "ICRC",
    "IProtocol",
    "ITransport",
    "IClock",
    "IReadingSink",
]
