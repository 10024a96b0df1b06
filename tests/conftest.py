"""Pytest configuration and fixtures for rtu_poller tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add repository root to Python path so tests run without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from rtu_poller.domain.entities import DEFAULT_READINGS
from rtu_poller.infrastructure.protocol import ModbusCRC16, ModbusRTUProtocol

from tests.doubles import FakeClock, FakeTransport, RecordingSink


@pytest.fixture
def crc():
    """Create CRC calculator."""
    return ModbusCRC16()


@pytest.fixture
def protocol(crc):
    """Create protocol instance for slave 1."""
    return ModbusRTUProtocol(crc)


@pytest.fixture
def transport():
    """Create a connected fake transport."""
    return FakeTransport(connected=True)


@pytest.fixture
def clock():
    """Create a fake clock at virtual time zero."""
    return FakeClock()


@pytest.fixture
def sink():
    """Create a recording sink."""
    return RecordingSink()


@pytest.fixture
def default_readings():
    """The FAN_SPEED, Multisensor_temp and state readings."""
    return DEFAULT_READINGS


@pytest.fixture
def config_file(tmp_path):
    """Write a configuration file and return its path."""

    def _write(content: str, name: str = "config.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
