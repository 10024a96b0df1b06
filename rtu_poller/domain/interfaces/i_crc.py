"""ICRC interface for CRC calculation algorithms."""

from abc import ABC, abstractmethod
from typing import Union


class ICRC(ABC):
    """Interface for CRC calculation algorithms.

    CRC (Cyclic Redundancy Check) is used to detect transmission errors.
    Modbus RTU uses CRC-16 with polynomial 0xA001.

    Example:
        >>> crc = ModbusCRC16()
        >>> data = bytes([0x01, 0x03, 0x00, 0x00, 0x00, 0x01])
        >>> assert crc.calculate(data) == 0x0A84
    """

    @abstractmethod
    def calculate(self, data: Union[bytes, bytearray]) -> int:
        """Calculate CRC checksum for given data.

        Args:
            data: Byte sequence to calculate CRC for

        Returns:
            CRC checksum as 16-bit unsigned integer (0-65535)
        """
