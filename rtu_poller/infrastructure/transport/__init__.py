"""Transport layer implementations."""

from .serial_transport import SerialTransport, inter_frame_delay

__all__ = [
    "SerialTransport",
    "inter_frame_delay",
]
