"""Modbus RTU protocol implementation.

This module builds read request frames and validates response frames
for Modbus RTU over a serial line. Two byte orders meet here and must
not be mixed up:

- Register addresses, counts and register words are big-endian.
- The CRC trailer is little-endian (low byte first).
"""

import logging
import struct
from typing import Tuple

from ...const import CRC_SIZE, RESPONSE_HEADER_SIZE
from ...domain.exceptions import ProtocolError
from ...domain.interfaces import ICRC, IProtocol
from ...domain.value_objects import ProtocolErrorKind, RegisterReadRequest

_LOGGER = logging.getLogger(__name__)


class ModbusRTUProtocol(IProtocol):
    """Modbus RTU protocol implementation for serial communication.

    This implementation handles:
    - Building read request frames (function codes 0x03 / 0x04)
    - Minimum length validation of responses
    - CRC validation
    - Big-endian register extraction

    Attributes:
        crc: CRC calculator implementation

    Example:
        >>> protocol = ModbusRTUProtocol(ModbusCRC16())
        >>> command = protocol.build_request(RegisterReadRequest(0x01, 4353))
        >>> # Send command via transport...
        >>> words = protocol.decode_response(response_bytes, 1)
    """

    def __init__(self, crc: ICRC):
        """Initialize Modbus RTU protocol.

        Args:
            crc: CRC calculator implementation
        """
        self._crc = crc

    def build_request(self, request: RegisterReadRequest) -> bytes:
        """Build a Modbus read request frame.

        Args:
            request: Validated read request

        Returns:
            Complete Modbus RTU frame ready to send (8 bytes)
            Format: [Slave][Func][Addr_H][Addr_L][Count_H][Count_L][CRC_L][CRC_H]

        Example:
            >>> protocol = ModbusRTUProtocol(ModbusCRC16())
            >>> frame = protocol.build_request(RegisterReadRequest(0x01, 0x1101, 1))
            >>> assert frame.hex() == "010311010001d0f6"
        """
        # Slave ID + Function + Address (BE) + Count (BE)
        data = struct.pack(
            ">BBHH",
            request.slave_address,
            request.function_code,
            request.start_address,
            request.register_count,
        )

        # CRC goes out low byte first
        crc_value = self._crc.calculate(data)
        frame = data + struct.pack("<H", crc_value)

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug(
                "Built read request: slave=%d, func=0x%02X, addr=0x%04X, count=%d, frame=%s",
                request.slave_address,
                request.function_code,
                request.start_address,
                request.register_count,
                frame.hex(),
            )

        return frame

    def decode_response(
        self, response: bytes, expected_register_count: int
    ) -> Tuple[int, ...]:
        """Validate a read response and extract its register words.

        Validation is fail-fast, in this order:
        1. Length must be at least header + 2 bytes per register
        2. CRC over everything but the last two bytes must match the
           little-endian trailer
        3. Register words are read big-endian from offset 3

        Args:
            response: Raw response bytes from the transport
            expected_register_count: Number of registers requested

        Returns:
            Tuple of register words, ``expected_register_count`` long

        Raises:
            ProtocolError: TOO_SHORT or CRC_MISMATCH

        Example:
            >>> protocol = ModbusRTUProtocol(ModbusCRC16())
            >>> protocol.decode_response(bytes.fromhex("010302002a399b"), 1)
            (42,)
        """
        min_length = RESPONSE_HEADER_SIZE + 2 * expected_register_count
        if len(response) < min_length:
            _LOGGER.debug(
                "Response too short: %d bytes, need at least %d",
                len(response),
                min_length,
            )
            raise ProtocolError(
                ProtocolErrorKind.TOO_SHORT,
                f"Response too short: {len(response)} bytes, "
                f"need at least {min_length} for {expected_register_count} registers",
            )

        received_crc = struct.unpack("<H", response[-CRC_SIZE:])[0]
        calculated_crc = self._crc.calculate(response[:-CRC_SIZE])

        if received_crc != calculated_crc:
            _LOGGER.warning(
                "CRC mismatch: received=0x%04X, calculated=0x%04X",
                received_crc,
                calculated_crc,
            )
            raise ProtocolError(
                ProtocolErrorKind.CRC_MISMATCH,
                f"CRC mismatch: received=0x{received_crc:04X}, "
                f"calculated=0x{calculated_crc:04X}",
            )

        # Byte count field is not consulted; the length check above bounds the read
        values = struct.unpack_from(
            f">{expected_register_count}H", response, RESPONSE_HEADER_SIZE
        )

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug(
                "Decoded read response: slave=0x%02X, func=0x%02X, values=%s",
                response[0],
                response[1],
                values,
            )

        return values
