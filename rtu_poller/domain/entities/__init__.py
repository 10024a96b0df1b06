"""Domain entities."""

from .reading_spec import (
    DEFAULT_READINGS,
    FAN_SPEED,
    MULTISENSOR_TEMP,
    STATE,
    ReadingSpec,
)

__all__ = [
    "DEFAULT_READINGS",
    "FAN_SPEED",
    "MULTISENSOR_TEMP",
    "STATE",
    "ReadingSpec",
]
