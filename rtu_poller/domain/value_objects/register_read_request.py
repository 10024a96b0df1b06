"""RegisterReadRequest value object.

Represents one Modbus read request (function code 0x03 or 0x04).
Encapsulates the range checks so the frame encoder never sees an
invalid request.
"""

from dataclasses import dataclass
from typing import ClassVar

from ...const import MAX_REGISTERS_PER_READ
from .function_code import FunctionCode


@dataclass(frozen=True)
class RegisterReadRequest:
    """Immutable Modbus read request.

    Attributes:
        slave_address: Slave address on the bus (0-255)
        start_address: First register to read (0x0000 - 0xFFFF)
        register_count: Number of consecutive registers (1-125)
        function_code: Read holding (0x03) or read input (0x04)

    Example:
        >>> request = RegisterReadRequest(0x01, 4353, 1)
        >>> assert request.function_code == FunctionCode.READ_HOLDING_REGISTERS

    Raises:
        ValueError: If any field is out of range or the register range
            runs past 0xFFFF
    """

    slave_address: int
    start_address: int
    register_count: int = 1
    function_code: FunctionCode = FunctionCode.READ_HOLDING_REGISTERS

    MAX_ADDRESS: ClassVar[int] = 0xFFFF
    MAX_COUNT: ClassVar[int] = MAX_REGISTERS_PER_READ

    def __post_init__(self) -> None:
        """Validate request fields.

        Raises:
            ValueError: If any field is out of range
        """
        if not 0 <= self.slave_address <= 0xFF:
            raise ValueError(
                f"Slave address must be 0-255, got {self.slave_address}"
            )

        if not 0 <= self.start_address <= self.MAX_ADDRESS:
            raise ValueError(
                f"Register address must be 0-65535, got {self.start_address}"
            )

        if not 1 <= self.register_count <= self.MAX_COUNT:
            raise ValueError(
                f"Register count must be 1-{self.MAX_COUNT}, got {self.register_count}"
            )

        if self.start_address + self.register_count > self.MAX_ADDRESS + 1:
            raise ValueError(
                f"Register range {self.start_address:#06x}+{self.register_count} "
                "overflows 16-bit address space"
            )

        # Coerces plain ints and rejects unsupported codes
        object.__setattr__(self, "function_code", FunctionCode(self.function_code))
