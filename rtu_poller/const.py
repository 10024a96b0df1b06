"""Constants for the Modbus RTU poller.

Protocol constants and the defaults applied to configuration keys that
are missing from the configuration file.
"""

from __future__ import annotations

# Serial port defaults
DEFAULT_BAUDRATE = 9600
DEFAULT_PARITY = "N"
DEFAULT_STOPBITS = 1
DEFAULT_SLAVE_ID = 1

# Polling defaults
DEFAULT_READ_INTERVAL_SECONDS = 10
DEFAULT_READ_TIMEOUT_MS = 1000
DEFAULT_CONFIG_FILE = "config.json"

# Modbus function codes
FUNC_READ_HOLDING = 0x03
FUNC_READ_INPUT = 0x04

# Modbus RTU framing
CRC_INITIAL_VALUE = 0xFFFF
CRC_POLYNOMIAL = 0xA001
RESPONSE_HEADER_SIZE = 3  # slave + func + byte count
CRC_SIZE = 2
MAX_RESPONSE_BYTES = 256
MAX_REGISTERS_PER_READ = 125

# Inter-frame silence is 3.5 character times; fixed above 19200 baud
BITS_PER_CHARACTER = 11
INTER_FRAME_CHARACTERS = 3.5
FIXED_INTER_FRAME_DELAY = 0.00175

# Register addresses of the polled ventilation unit
REG_FAN_SPEED = 4353
REG_MULTISENSOR_TEMP = 4363
REG_STATE = 4609

# Interpretation masks
MASK_12BIT = 0x0FFF
MASK_1BIT = 0x01
