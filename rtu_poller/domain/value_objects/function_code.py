"""Modbus function codes supported by the poller."""

from enum import IntEnum

from ...const import FUNC_READ_HOLDING, FUNC_READ_INPUT


class FunctionCode(IntEnum):
    """Modbus read function codes."""

    READ_HOLDING_REGISTERS = FUNC_READ_HOLDING
    READ_INPUT_REGISTERS = FUNC_READ_INPUT
