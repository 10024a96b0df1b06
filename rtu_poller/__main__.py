"""Command-line entry point.

Loads the configuration, opens the serial port and polls until SIGINT or
SIGTERM. Configuration and port-open failures are fatal; everything that
happens while polling is reported per reading and never stops the loop.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from typing import List, Optional, Sequence

from . import __version__
from .application.services import PollScheduler
from .application.use_cases import PollCycleUseCase
from .config_loader import load_config
from .const import DEFAULT_CONFIG_FILE
from .domain.exceptions import ConfigurationError, TransportError
from .domain.interfaces import IClock, IReadingSink, ITransport
from .domain.value_objects import PollerConfig
from .infrastructure.clock import SystemClock
from .infrastructure.output import ConsoleSink
from .infrastructure.protocol import ModbusCRC16, ModbusRTUProtocol
from .infrastructure.transport import SerialTransport

_LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rtu-poller",
        description="Poll a Modbus RTU device over a serial line.",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help=f"Configuration file, YAML or JSON (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single poll cycle and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging, including raw frames",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _install_signal_handlers(scheduler: PollScheduler) -> List[int]:
    """Route SIGINT/SIGTERM to ``scheduler.stop``.

    Returns:
        Signals that were actually installed
    """
    loop = asyncio.get_running_loop()
    installed = []
    for signum in _STOP_SIGNALS:
        try:
            loop.add_signal_handler(signum, scheduler.stop)
        except (NotImplementedError, RuntimeError):
            # Windows event loops: Ctrl+C surfaces as KeyboardInterrupt instead
            _LOGGER.debug("No signal handler support for %s", signum)
        else:
            installed.append(signum)
    return installed


def _remove_signal_handlers(signals: Sequence[int]) -> None:
    loop = asyncio.get_running_loop()
    for signum in signals:
        loop.remove_signal_handler(signum)


async def run_poller(
    config: PollerConfig,
    transport: ITransport,
    once: bool = False,
    clock: Optional[IClock] = None,
    sink: Optional[IReadingSink] = None,
    max_cycles: Optional[int] = None,
) -> int:
    """Open the transport, poll, and close the transport.

    Returns:
        Process exit status
    """
    clock = clock or SystemClock()
    sink = sink or ConsoleSink()

    try:
        await transport.connect()
    except TransportError as err:
        _LOGGER.error("Cannot open transport: %s", err)
        return 1

    protocol = ModbusRTUProtocol(ModbusCRC16())
    use_case = PollCycleUseCase(
        transport,
        protocol,
        clock,
        config.readings,
        slave_address=config.slave_address,
        read_timeout=config.read_timeout,
    )
    scheduler = PollScheduler(use_case, clock, config.read_interval_seconds, sink)

    signals: List[int] = []
    try:
        if once:
            await scheduler.run_once()
        else:
            signals = _install_signal_handlers(scheduler)
            await scheduler.run(max_cycles=max_cycles)
    finally:
        _remove_signal_handlers(signals)
        await transport.disconnect()

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config)
    except ConfigurationError as err:
        _LOGGER.error("%s", err)
        return 1

    transport = SerialTransport(config.serial)

    try:
        return asyncio.run(run_poller(config, transport, once=args.once))
    except KeyboardInterrupt:
        _LOGGER.info("Interrupted")
        return 0


if __name__ == "__main__":
    sys.exit(main())
