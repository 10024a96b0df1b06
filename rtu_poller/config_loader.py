"""Configuration loader for the poller.

The configuration file is YAML. JSON is a subset of YAML, so the
``config.json`` files of existing deployments load unchanged.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import voluptuous as vol
import yaml

from .const import (
    DEFAULT_BAUDRATE,
    DEFAULT_PARITY,
    DEFAULT_READ_INTERVAL_SECONDS,
    DEFAULT_READ_TIMEOUT_MS,
    DEFAULT_SLAVE_ID,
    DEFAULT_STOPBITS,
    MAX_REGISTERS_PER_READ,
)
from .domain.entities.reading_spec import DEFAULT_READINGS, ReadingSpec
from .domain.exceptions import ConfigurationError
from .domain.helpers.transformations import INTERPRETERS
from .domain.value_objects import (
    FunctionCode,
    Parity,
    PollerConfig,
    SerialSettings,
    timeout_from_ms,
)

_LOGGER = logging.getLogger(__name__)


def _integer(value: Any) -> int:
    """Validate a plain int, rejecting bools such as YAML `true`."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise vol.Invalid(f"expected int, got {value!r}")
    return value


READING_SCHEMA = vol.Schema(
    {
        vol.Required("name"): vol.All(str, vol.Length(min=1)),
        vol.Required("address"): vol.All(_integer, vol.Range(min=0, max=0xFFFF)),
        vol.Optional("count", default=1): vol.All(
            _integer, vol.Range(min=1, max=MAX_REGISTERS_PER_READ)
        ),
        vol.Optional("interpret", default="raw"): vol.In(sorted(INTERPRETERS)),
        vol.Optional(
            "function_code", default=int(FunctionCode.READ_HOLDING_REGISTERS)
        ): vol.All(_integer, vol.In([int(code) for code in FunctionCode])),
    }
)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required("modbus_port"): vol.All(str, vol.Length(min=1)),
        vol.Optional("modbus_baud", default=DEFAULT_BAUDRATE): vol.All(
            _integer, vol.Range(min=1)
        ),
        vol.Optional("modbus_slave_address", default=DEFAULT_SLAVE_ID): vol.All(
            _integer, vol.Range(min=0, max=255)
        ),
        vol.Optional("modbus_parity", default=DEFAULT_PARITY): vol.All(
            str, vol.Upper, vol.In([parity.value for parity in Parity])
        ),
        vol.Optional("modbus_stop_bit", default=DEFAULT_STOPBITS): vol.All(
            _integer, vol.In([1, 2])
        ),
        vol.Optional(
            "read_interval_seconds", default=DEFAULT_READ_INTERVAL_SECONDS
        ): vol.All(_integer, vol.Range(min=1)),
        vol.Optional("read_timeout_ms", default=DEFAULT_READ_TIMEOUT_MS): vol.All(
            _integer, vol.Range(min=0)
        ),
        vol.Optional("readings"): vol.All([READING_SCHEMA], vol.Length(min=1)),
    },
    extra=vol.ALLOW_EXTRA,
)


def load_config(path: str | Path) -> PollerConfig:
    """Load and validate poller configuration from a file.

    Args:
        path: Path to a YAML or JSON configuration file

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the file is missing, unreadable, not valid
            YAML, or fails validation
    """
    config_file = Path(path)

    try:
        raw = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except OSError as err:
        raise ConfigurationError(
            f"Cannot read configuration file {config_file}: {err}"
        ) from err
    except yaml.YAMLError as err:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {err}") from err

    if not raw:
        raise ConfigurationError(f"Configuration file {config_file} is empty")

    config = parse_config(raw)

    _LOGGER.info(
        "Loaded configuration from %s: port=%s, slave=%d, %d readings every %ds",
        config_file,
        config.serial.port,
        config.slave_address,
        len(config.readings),
        config.read_interval_seconds,
    )
    return config


def parse_config(raw: Any) -> PollerConfig:
    """Validate a configuration mapping and build a PollerConfig.

    Raises:
        ConfigurationError: If validation fails
    """
    try:
        data = CONFIG_SCHEMA(raw)
    except vol.Invalid as err:
        raise ConfigurationError(f"Invalid configuration: {err}") from err

    unknown = sorted(set(data) - {str(key) for key in CONFIG_SCHEMA.schema})
    if unknown:
        _LOGGER.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))

    read_timeout_ms = data["read_timeout_ms"]
    serial_settings = SerialSettings(
        port=data["modbus_port"],
        baudrate=data["modbus_baud"],
        parity=Parity(data["modbus_parity"]),
        stopbits=data["modbus_stop_bit"],
        timeout=timeout_from_ms(read_timeout_ms),
    )

    if "readings" in data:
        readings = tuple(_build_reading(entry) for entry in data["readings"])
    else:
        readings = DEFAULT_READINGS

    names = [reading.name for reading in readings]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ConfigurationError(
            f"Duplicate reading names: {', '.join(duplicates)}"
        )

    return PollerConfig(
        serial=serial_settings,
        slave_address=data["modbus_slave_address"],
        read_interval_seconds=data["read_interval_seconds"],
        read_timeout_ms=read_timeout_ms,
        readings=readings,
    )


def _build_reading(entry: dict[str, Any]) -> ReadingSpec:
    """Build a ReadingSpec from a validated ``readings`` entry.

    Raises:
        ConfigurationError: If the register range overflows 16 bits
    """
    spec = ReadingSpec(
        name=entry["name"],
        start_address=entry["address"],
        interpret=INTERPRETERS[entry["interpret"]],
        register_count=entry["count"],
        function_code=FunctionCode(entry["function_code"]),
    )

    # Surface range problems at startup rather than on the first poll
    try:
        spec.to_request(slave_address=0)
    except ValueError as err:
        raise ConfigurationError(f"Reading {spec.name!r}: {err}") from err

    return spec
