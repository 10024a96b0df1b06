"""Failure kinds reported in per-reading diagnostics."""

from enum import Enum

from .protocol_error_kind import ProtocolErrorKind


class FailureKind(Enum):
    """Stage and cause of a failed reading.

    Transport failures are split into timeouts and other I/O errors.
    Decode failures mirror ``ProtocolErrorKind`` one to one.
    """

    IO_ERROR = "io_error"
    TIMEOUT = "timeout"
    TOO_SHORT = "too_short"
    CRC_MISMATCH = "crc_mismatch"
    INTERPRET_ERROR = "interpret_error"

    @classmethod
    def from_protocol_error(cls, kind: ProtocolErrorKind) -> "FailureKind":
        """Map a decode failure onto its diagnostic kind."""
        return cls(kind.value)
