"""Error translation for serial port operations.

pyserial reports a failing port in several ways depending on where the
failure happens: ``serial.SerialException`` from its own checks, ``OSError``
from ``read``/``write`` system calls and, on POSIX, ``termios.error`` from
``tcflush``/``tcdrain`` when an adapter disappears. Everything above the
transport only deals with ``TransportError``.
"""

import logging
import sys
from functools import wraps
from typing import Awaitable, Callable, Optional, TypeVar

import serial

from ...domain.exceptions import TransportError

if sys.platform == "win32":
    PORT_ERRORS = (serial.SerialException, OSError)
else:
    import termios

    PORT_ERRORS = (serial.SerialException, OSError, termios.error)

T = TypeVar("T")


def handle_transport_errors(
    operation_name: str,
    logger: Optional[logging.Logger] = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator turning port failures of an async operation into TransportError.

    ``TransportError`` raised by the operation itself passes through
    unchanged. Failures are logged at DEBUG only; reporting them is left to
    whoever handles the ``TransportError``.

    Args:
        operation_name: Human-readable operation name for messages
        logger: Logger to use (defaults to function's module logger)

    Example:
        @handle_transport_errors("Serial read")
        async def read(self, max_bytes: int, timeout: Optional[float]) -> bytes:
            return await self._run(self._read_frame, port, max_bytes, timeout)
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            log = logger or logging.getLogger(func.__module__)
            try:
                return await func(*args, **kwargs)
            except TransportError as err:
                log.debug("%s failed: %s", operation_name, err)
                raise
            except PORT_ERRORS as err:
                log.debug("%s failed: %r", operation_name, err)
                raise TransportError(f"{operation_name} failed: {err}") from err

        return wrapper

    return decorator
