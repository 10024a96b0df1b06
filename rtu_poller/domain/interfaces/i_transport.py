"""ITransport interface for transport layer implementations."""

from abc import ABC, abstractmethod
from typing import Optional


class ITransport(ABC):
    """Interface for transport layer implementations.

    The transport is a duplex byte stream with no message boundaries.
    Line settings (baud, parity, stop bits) are owned by the
    implementation, never by the protocol layer.

    Connection lifecycle:
        1. connect() -> opens the device
        2. write(data) / read(max_bytes, timeout) -> one exchange per request
        3. disconnect() -> closes the device

    Example:
        >>> transport = SerialTransport(settings)
        >>> await transport.connect()
        >>> await transport.write(request_frame)
        >>> response = await transport.read(256, timeout=1.0)
        >>> await transport.disconnect()
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying device.

        Raises:
            TransportError: If the device cannot be opened
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the underlying device.

        This method should be idempotent (safe to call multiple times).
        """

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """Write a complete request frame.

        Raises:
            TransportError: If not connected or the write fails
        """

    @abstractmethod
    async def read(self, max_bytes: int, timeout: Optional[float]) -> bytes:
        """Read one response, up to ``max_bytes`` long.

        Args:
            max_bytes: Upper bound on the number of bytes returned
            timeout: Seconds to wait for the first byte, or None to wait
                until data arrives

        Returns:
            Bytes received (never empty)

        Raises:
            TransportTimeoutError: If nothing arrives within ``timeout``
            TransportError: If not connected or the device fails
        """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the transport is currently open."""
