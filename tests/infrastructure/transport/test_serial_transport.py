"""Tests for SerialTransport with a mocked pyserial port."""

import logging
import sys
from unittest.mock import MagicMock, Mock

import pytest
import serial

from rtu_poller.domain.exceptions import TransportError, TransportTimeoutError
from rtu_poller.domain.interfaces import ITransport
from rtu_poller.domain.value_objects import Parity, SerialSettings
from rtu_poller.infrastructure.transport import SerialTransport, inter_frame_delay


@pytest.fixture
def settings():
    """Serial settings for an even-parity, two-stop-bit line."""
    return SerialSettings(
        port="/dev/ttyUSB0",
        baudrate=9600,
        parity=Parity.EVEN,
        stopbits=2,
        timeout=0.5,
    )


@pytest.fixture
def mock_port():
    """Create an open mock pyserial port."""
    port = MagicMock()
    port.is_open = True
    port.timeout = 0.5
    port.read.return_value = b"\x01\x03\x02\x00\x2a\x39\x9b"
    return port


@pytest.fixture
def serial_factory(mock_port):
    """Create a mock pyserial constructor returning the mock port."""
    return Mock(return_value=mock_port)


@pytest.fixture
def serial_transport(settings, serial_factory):
    """Create transport wired to the mock constructor."""
    return SerialTransport(settings, serial_factory=serial_factory)


class TestInterFrameDelay:
    """Test Modbus RTU inter-frame silence computation."""

    def test_scales_with_character_time_at_low_baud(self):
        """Verify 3.5 character times of 11 bits at 9600 baud."""
        assert inter_frame_delay(9600) == pytest.approx(3.5 * 11 / 9600)

    def test_fixed_above_19200(self):
        """Verify the fixed 1.75 ms gap above 19200 baud."""
        assert inter_frame_delay(38400) == pytest.approx(0.00175)
        assert inter_frame_delay(115200) == pytest.approx(0.00175)

    def test_19200_still_scales(self):
        """Verify 19200 baud uses the character-time formula."""
        assert inter_frame_delay(19200) == pytest.approx(3.5 * 11 / 19200)


class TestSerialTransportConnect:
    """Test opening and closing the port."""

    def test_implements_interface(self, serial_transport):
        """Verify SerialTransport implements ITransport."""
        assert isinstance(serial_transport, ITransport)

    @pytest.mark.asyncio
    async def test_connect_opens_port_with_settings(
        self, serial_transport, serial_factory
    ):
        """Verify line settings are passed to pyserial."""
        await serial_transport.connect()

        serial_factory.assert_called_once_with(
            port="/dev/ttyUSB0",
            baudrate=9600,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_EVEN,
            stopbits=serial.STOPBITS_TWO,
            timeout=0.5,
            inter_byte_timeout=pytest.approx(3.5 * 11 / 9600),
        )
        assert serial_transport.is_connected is True

    @pytest.mark.asyncio
    async def test_connect_failure_raises_transport_error(self, settings):
        """Verify SerialException becomes TransportError."""
        factory = Mock(side_effect=serial.SerialException("no such device"))
        transport = SerialTransport(settings, serial_factory=factory)

        with pytest.raises(TransportError, match="no such device"):
            await transport.connect()
        assert transport.is_connected is False

    @pytest.mark.asyncio
    async def test_transport_error_is_ioerror(self, settings):
        """Verify open failures can be caught as IOError."""
        factory = Mock(side_effect=serial.SerialException("busy"))
        transport = SerialTransport(settings, serial_factory=factory)

        with pytest.raises(IOError):
            await transport.connect()

    @pytest.mark.asyncio
    async def test_connect_os_error(self, settings):
        """Verify OS-level open failures become TransportError."""
        factory = Mock(side_effect=OSError(13, "Permission denied"))
        transport = SerialTransport(settings, serial_factory=factory)

        with pytest.raises(TransportError, match="Permission denied"):
            await transport.connect()

    @pytest.mark.asyncio
    async def test_connect_without_timeout(self, serial_factory):
        """Verify a None timeout opens the port in blocking mode."""
        settings = SerialSettings("/dev/ttyUSB0", 9600, Parity.NONE, 1, None)
        transport = SerialTransport(settings, serial_factory=serial_factory)

        await transport.connect()

        assert serial_factory.call_args.kwargs["timeout"] is None

    @pytest.mark.asyncio
    async def test_invalid_stop_bits_rejected(self, serial_factory):
        """Verify unsupported stop bits never reach pyserial."""
        settings = SerialSettings("/dev/ttyUSB0", 9600, Parity.NONE, 3, 0.5)
        transport = SerialTransport(settings, serial_factory=serial_factory)

        with pytest.raises(TransportError, match="Invalid stop bits"):
            await transport.connect()
        serial_factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_disconnect_closes_port(self, serial_transport, mock_port):
        """Verify disconnect closes the port."""
        await serial_transport.connect()
        await serial_transport.disconnect()

        mock_port.close.assert_called_once()
        assert serial_transport.is_connected is False

    @pytest.mark.asyncio
    async def test_disconnect_is_idempotent(self, serial_transport, mock_port):
        """Verify repeated disconnects are safe."""
        await serial_transport.connect()
        await serial_transport.disconnect()
        await serial_transport.disconnect()

        mock_port.close.assert_called_once()


class TestSerialTransportWrite:
    """Test writing request frames."""

    @pytest.mark.asyncio
    async def test_write_flushes_input_then_writes(self, serial_transport, mock_port):
        """Verify stale input is discarded before the request goes out."""
        await serial_transport.connect()
        frame = bytes.fromhex("010311010001d0f6")

        await serial_transport.write(frame)

        names = [call[0] for call in mock_port.method_calls]
        assert names.index("reset_input_buffer") < names.index("write")
        mock_port.write.assert_called_once_with(frame)
        mock_port.flush.assert_called_once()

    @pytest.mark.skipif(sys.platform == "win32", reason="termios is POSIX only")
    @pytest.mark.asyncio
    async def test_write_unplugged_adapter(self, serial_transport, mock_port):
        """Verify tcflush failures of a vanished adapter become TransportError."""
        import termios

        await serial_transport.connect()
        mock_port.reset_input_buffer.side_effect = termios.error(
            5, "Input/output error"
        )

        with pytest.raises(TransportError, match="Serial write failed"):
            await serial_transport.write(b"\x01")

    @pytest.mark.asyncio
    async def test_write_os_error(self, serial_transport, mock_port):
        """Verify system call errors from write become TransportError."""
        await serial_transport.connect()
        mock_port.flush.side_effect = OSError(5, "Input/output error")

        with pytest.raises(TransportError):
            await serial_transport.write(b"\x01")

    @pytest.mark.asyncio
    async def test_write_not_connected(self, serial_transport):
        """Verify writing before connect raises TransportError."""
        with pytest.raises(TransportError, match="Not connected"):
            await serial_transport.write(b"\x01")

    @pytest.mark.asyncio
    async def test_write_serial_error(self, serial_transport, mock_port):
        """Verify pyserial write errors become TransportError."""
        await serial_transport.connect()
        mock_port.write.side_effect = serial.SerialTimeoutException("write timeout")

        with pytest.raises(TransportError, match="write timeout"):
            await serial_transport.write(b"\x01")


class TestSerialTransportRead:
    """Test reading response frames."""

    @pytest.mark.asyncio
    async def test_read_returns_bytes(self, serial_transport, mock_port):
        """Verify read returns what pyserial returned."""
        await serial_transport.connect()

        response = await serial_transport.read(256, 0.5)

        assert response == b"\x01\x03\x02\x00\x2a\x39\x9b"
        mock_port.read.assert_called_once_with(256)

    @pytest.mark.asyncio
    async def test_read_applies_timeout(self, serial_transport, mock_port):
        """Verify the per-call timeout is set on the port."""
        await serial_transport.connect()

        await serial_transport.read(256, 2.0)

        assert mock_port.timeout == 2.0

    @pytest.mark.asyncio
    async def test_read_empty_is_timeout(self, serial_transport, mock_port):
        """Verify an empty read raises TransportTimeoutError."""
        await serial_transport.connect()
        mock_port.read.return_value = b""

        with pytest.raises(TransportTimeoutError):
            await serial_transport.read(256, 0.5)

    @pytest.mark.asyncio
    async def test_read_failure_not_reported_as_warning(
        self, serial_transport, mock_port, caplog
    ):
        """Verify transport failures leave WARNING reporting to the sink."""
        await serial_transport.connect()
        mock_port.read.return_value = b""

        with caplog.at_level(logging.WARNING):
            with pytest.raises(TransportTimeoutError):
                await serial_transport.read(256, 0.5)

        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    @pytest.mark.asyncio
    async def test_read_os_error(self, serial_transport, mock_port):
        """Verify system call errors from read become TransportError."""
        await serial_transport.connect()
        mock_port.read.side_effect = OSError(5, "Input/output error")

        with pytest.raises(TransportError, match="Serial read failed"):
            await serial_transport.read(256, 0.5)

    @pytest.mark.asyncio
    async def test_read_without_timeout_blocks(self, serial_transport, mock_port):
        """Verify a None timeout is handed to pyserial as a blocking read."""
        await serial_transport.connect()

        await serial_transport.read(256, None)

        assert mock_port.timeout is None

    @pytest.mark.asyncio
    async def test_empty_blocking_read_message(self, serial_transport, mock_port):
        """Verify an empty blocking read still raises TransportTimeoutError."""
        await serial_transport.connect()
        mock_port.read.return_value = b""

        with pytest.raises(TransportTimeoutError, match="No response"):
            await serial_transport.read(256, None)

    @pytest.mark.asyncio
    async def test_read_serial_error(self, serial_transport, mock_port):
        """Verify pyserial read errors become TransportError."""
        await serial_transport.connect()
        mock_port.read.side_effect = serial.SerialException("device unplugged")

        with pytest.raises(TransportError, match="device unplugged"):
            await serial_transport.read(256, 0.5)

    @pytest.mark.asyncio
    async def test_read_port_closed_underneath(self, serial_transport, mock_port):
        """Verify a port closed by the OS is reported as not connected."""
        await serial_transport.connect()
        mock_port.is_open = False

        assert serial_transport.is_connected is False
        with pytest.raises(TransportError, match="Not connected"):
            await serial_transport.read(256, 0.5)
