"""IProtocol interface for Modbus protocol implementation."""

from abc import ABC, abstractmethod
from typing import Tuple

from ..value_objects.register_read_request import RegisterReadRequest


class IProtocol(ABC):
    """Interface for Modbus protocol implementation.

    The protocol implementation handles Modbus RTU framing, request
    building and response validation. It keeps byte-level details away
    from the poll orchestrator.

    Modbus RTU Frame Structure:
        Request:  [Slave ID][Function][Start Addr][Count][CRC-16]
        Response: [Slave ID][Function][Byte Count][Data...][CRC-16]

    Example:
        >>> protocol = ModbusRTUProtocol(crc=ModbusCRC16())
        >>> frame = protocol.build_request(RegisterReadRequest(1, 4353, 1))
        >>> await transport.write(frame)
        >>> response = await transport.read(256, timeout=1.0)
        >>> words = protocol.decode_response(response, 1)
    """

    @abstractmethod
    def build_request(self, request: RegisterReadRequest) -> bytes:
        """Build a complete read request frame.

        Args:
            request: Validated read request

        Returns:
            Frame ready to send over the transport
            Format: [addr][func][start_hi][start_lo][count_hi][count_lo][crc_lo][crc_hi]
        """

    @abstractmethod
    def decode_response(
        self, response: bytes, expected_register_count: int
    ) -> Tuple[int, ...]:
        """Validate a response frame and extract its register words.

        Args:
            response: Raw bytes received from the transport
            expected_register_count: Number of registers requested

        Returns:
            Register words in order, exactly ``expected_register_count`` long

        Raises:
            ProtocolError: If the frame is too short or the CRC does not match
        """
