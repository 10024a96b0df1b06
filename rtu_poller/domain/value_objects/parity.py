"""Serial parity setting."""

from enum import Enum


class Parity(Enum):
    """Serial line parity, encoded as in the configuration file.

    The values match pyserial's ``PARITY_EVEN``/``PARITY_ODD``/``PARITY_NONE``
    constants, so a member's value can be handed straight to the port.
    """

    EVEN = "E"
    ODD = "O"
    NONE = "N"
