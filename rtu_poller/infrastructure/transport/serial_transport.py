"""Serial transport implementation for Modbus RTU.

This module implements the ITransport interface on top of pyserial.
pyserial is blocking, so every port call is handed to the event loop's
default executor.

Frame boundaries in Modbus RTU are marked by at least 3.5 character
times of line silence. The port's ``inter_byte_timeout`` is set to that
gap, so one ``read()`` returns exactly one frame once it has started.
"""

import asyncio
import functools
import logging
from typing import Any, Callable, Optional

import serial

from ...const import (
    BITS_PER_CHARACTER,
    FIXED_INTER_FRAME_DELAY,
    INTER_FRAME_CHARACTERS,
)
from ...domain.exceptions import TransportError, TransportTimeoutError
from ...domain.interfaces import ITransport
from ...domain.value_objects import SerialSettings
from ..decorators import PORT_ERRORS, handle_transport_errors

_LOGGER = logging.getLogger(__name__)

_STOPBITS = {
    1: serial.STOPBITS_ONE,
    2: serial.STOPBITS_TWO,
}


def inter_frame_delay(baudrate: int) -> float:
    """Return the Modbus RTU inter-frame silence for ``baudrate`` in seconds.

    Above 19200 baud the serial line specification fixes the gap at
    1.75 ms instead of scaling it with the character time.

    Examples:
        >>> round(inter_frame_delay(9600), 6)
        0.004010
        >>> inter_frame_delay(115200)
        0.00175
    """
    if baudrate > 19200:
        return FIXED_INTER_FRAME_DELAY
    return INTER_FRAME_CHARACTERS * BITS_PER_CHARACTER / baudrate


def _no_response_message(timeout: Optional[float]) -> str:
    if timeout is None:
        return "No response"
    return f"No response within {timeout:.3f}s"


class SerialTransport(ITransport):
    """Serial (RS-485) transport for Modbus RTU communication.

    This implementation handles:
    - Opening the port with the configured line settings
    - Flushing stale input before each request
    - Reading one response frame with a per-call timeout

    Attributes:
        _settings: Serial line settings from configuration
        _serial: Open pyserial port, or None while disconnected

    Example:
        >>> transport = SerialTransport(config.serial)
        >>> await transport.connect()
        >>> await transport.write(frame)
        >>> response = await transport.read(256, timeout=1.0)
        >>> await transport.disconnect()
    """

    def __init__(
        self,
        settings: SerialSettings,
        serial_factory: Callable[..., Any] = serial.Serial,
    ):
        """Initialize serial transport.

        Args:
            settings: Serial line settings
            serial_factory: Port constructor (default: ``serial.Serial``)
        """
        self._settings = settings
        self._serial_factory = serial_factory
        self._serial: Optional[serial.Serial] = None

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        """Run a blocking port call in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(func, *args))

    async def connect(self) -> None:
        """Open the serial port.

        Raises:
            TransportError: If the port cannot be opened or the stop bit
                setting is not supported
        """
        settings = self._settings
        stopbits = _STOPBITS.get(settings.stopbits)
        if stopbits is None:
            raise TransportError(f"Invalid stop bits: {settings.stopbits}")

        _LOGGER.debug(
            "Opening serial port %s at %d baud, parity=%s, stopbits=%d",
            settings.port,
            settings.baudrate,
            settings.parity.value,
            settings.stopbits,
        )

        try:
            self._serial = await self._run(
                functools.partial(
                    self._serial_factory,
                    port=settings.port,
                    baudrate=settings.baudrate,
                    bytesize=serial.EIGHTBITS,
                    parity=settings.parity.value,
                    stopbits=stopbits,
                    timeout=settings.timeout,
                    inter_byte_timeout=inter_frame_delay(settings.baudrate),
                )
            )
        except (*PORT_ERRORS, ValueError) as err:
            raise TransportError(
                f"Failed to open serial port {settings.port}: {err}"
            ) from err

        _LOGGER.info(
            "Serial transport connected to %s at %d baud",
            settings.port,
            settings.baudrate,
        )

    async def disconnect(self) -> None:
        """Close the serial port. Safe to call when already closed."""
        port = self._serial
        self._serial = None
        if port is None:
            return

        try:
            await self._run(port.close)
            _LOGGER.debug("Serial port %s closed", self._settings.port)
        except PORT_ERRORS as err:
            _LOGGER.warning("Error during disconnect: %s", err)

    def _require_port(self) -> serial.Serial:
        if self._serial is None or not self._serial.is_open:
            raise TransportError("Not connected to device")
        return self._serial

    def _write_frame(self, port: serial.Serial, data: bytes) -> None:
        port.reset_input_buffer()
        port.write(data)
        port.flush()

    @handle_transport_errors("Serial write")
    async def write(self, data: bytes) -> None:
        """Write one request frame, discarding any stale input first.

        Raises:
            TransportError: If not connected or the write fails
        """
        port = self._require_port()

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("TX %s", data.hex())

        await self._run(self._write_frame, port, data)

    def _read_frame(
        self, port: serial.Serial, max_bytes: int, timeout: Optional[float]
    ) -> bytes:
        if port.timeout != timeout:
            port.timeout = timeout
        return port.read(max_bytes)

    @handle_transport_errors("Serial read")
    async def read(self, max_bytes: int, timeout: Optional[float]) -> bytes:
        """Read one response frame.

        Args:
            max_bytes: Upper bound on bytes returned
            timeout: Seconds to wait for the response to start, or None to
                block until it does

        Returns:
            Response bytes (never empty)

        Raises:
            TransportTimeoutError: If nothing arrives within ``timeout``
            TransportError: If not connected or the device fails
        """
        port = self._require_port()

        data = await self._run(self._read_frame, port, max_bytes, timeout)

        if not data:
            raise TransportTimeoutError(_no_response_message(timeout))

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("RX %s", bytes(data).hex())

        return bytes(data)

    @property
    def is_connected(self) -> bool:
        """Check if the serial port is open."""
        return self._serial is not None and self._serial.is_open
