"""Custom exceptions for the Modbus RTU poller.

This module defines the error taxonomy shared by every layer:

- ``TransportError`` for serial write/read failures (an ``IOError``).
- ``ProtocolError`` for responses that fail frame validation.
- ``ConfigurationError`` for startup-time configuration problems.
"""

from __future__ import annotations

from .value_objects.protocol_error_kind import ProtocolErrorKind


class TransportError(IOError):
    """Serial transport failed to write or read.

    Transport errors are retryable: the next poll tick is the retry.
    """


class TransportTimeoutError(TransportError):
    """No response bytes arrived within the read timeout."""


class ProtocolError(ValueError):
    """Response frame failed validation.

    The ``kind`` attribute tells a truncated frame apart from an
    integrity failure so diagnostics can report them separately.

    Example:
        >>> err = ProtocolError(ProtocolErrorKind.TOO_SHORT, "Response too short")
        >>> assert err.kind is ProtocolErrorKind.TOO_SHORT
    """

    def __init__(self, kind: ProtocolErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class ConfigurationError(Exception):
    """Configuration could not be loaded or failed validation.

    Raised only at startup. The CLI treats it as fatal.
    """
