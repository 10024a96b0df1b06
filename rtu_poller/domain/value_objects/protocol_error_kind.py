"""Kinds of response validation failure."""

from enum import Enum


class ProtocolErrorKind(Enum):
    """Why a response frame was rejected."""

    TOO_SHORT = "too_short"
    CRC_MISMATCH = "crc_mismatch"
