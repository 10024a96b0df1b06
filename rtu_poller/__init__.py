"""Modbus RTU register poller for serial field devices."""

__version__ = "1.0.0"
