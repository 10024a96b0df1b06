"""Value Objects for the Modbus RTU poller domain.

Value Objects are immutable domain primitives that validate their
invariants at construction and compare by value.
"""

from .function_code import FunctionCode
from .protocol_error_kind import ProtocolErrorKind
from .failure_kind import FailureKind
from .occupancy_state import OccupancyState
from .parity import Parity
from .register_read_request import RegisterReadRequest
from .poller_config import PollerConfig, SerialSettings, timeout_from_ms

__all__ = [
    "FunctionCode",
    "ProtocolErrorKind",
    "FailureKind",
    "OccupancyState",
    "Parity",
    "RegisterReadRequest",
    "PollerConfig",
    "SerialSettings",
    "timeout_from_ms",
]
