"""PollCycleUseCase for Modbus register polling.

This use case runs one poll cycle:
1. Build the read request for each reading
2. Exchange it over the transport
3. Validate and decode the response
4. Interpret the register words
5. Record a value or a tagged diagnostic per reading

A failed reading never stops the readings after it. There is no retry
inside a cycle; the next scheduled cycle is the retry.
"""

import asyncio
import logging
from typing import Optional, Sequence, Tuple

from ...const import MAX_RESPONSE_BYTES
from ...domain.entities.reading_spec import ReadingSpec
from ...domain.exceptions import ProtocolError, TransportTimeoutError
from ...domain.interfaces import IClock, IProtocol, ITransport
from ...domain.value_objects import FailureKind
from .poll_cycle_result import PollCycleResult
from .reading_result import ReadingResult

_LOGGER = logging.getLogger(__name__)


class PollCycleUseCase:
    """Use case for polling every configured reading once.

    Dependencies (injected):
    - transport: Exclusive owner of the serial line
    - protocol: Builds request frames and decodes responses
    - clock: Timestamps results and measures cycle duration

    Example:
        >>> use_case = PollCycleUseCase(transport, protocol, clock, DEFAULT_READINGS,
        ...                             slave_address=1, read_timeout=1.0)
        >>> result = await use_case.execute()
        >>> for reading in result.readings:
        ...     print(reading.name, reading.value or reading.failure_kind)
    """

    def __init__(
        self,
        transport: ITransport,
        protocol: IProtocol,
        clock: IClock,
        readings: Sequence[ReadingSpec],
        slave_address: int,
        read_timeout: Optional[float],
    ):
        """Initialize use case with dependencies.

        Args:
            transport: Communication transport
            protocol: Modbus protocol implementation
            clock: Time source
            readings: Readings to poll, in order
            slave_address: Modbus slave address of the device
            read_timeout: Response timeout per reading in seconds, None to
                wait until the device answers
        """
        self._transport = transport
        self._protocol = protocol
        self._clock = clock
        self._readings: Tuple[ReadingSpec, ...] = tuple(readings)
        self._slave_address = slave_address
        self._read_timeout = read_timeout

        # The line is half-duplex; exchanges must never interleave
        self._lock = asyncio.Lock()

        self._cycle_count = 0
        self._total_failed_reads = 0

    @property
    def readings(self) -> Tuple[ReadingSpec, ...]:
        """Readings polled each cycle, in order."""
        return self._readings

    @property
    def cycle_count(self) -> int:
        """Number of cycles executed so far."""
        return self._cycle_count

    @property
    def total_failed_reads(self) -> int:
        """Failed readings across all cycles."""
        return self._total_failed_reads

    async def execute(self) -> PollCycleResult:
        """Execute one poll cycle.

        Returns:
            PollCycleResult with one ReadingResult per reading, in order
        """
        async with self._lock:
            self._cycle_count += 1
            start = self._clock.monotonic()
            result = PollCycleResult(
                cycle=self._cycle_count,
                started_at=self._clock.now(),
            )

            for spec in self._readings:
                result.readings.append(await self._poll_reading(spec))

            result.duration = self._clock.monotonic() - start
            self._total_failed_reads += result.failed_reads

            _LOGGER.debug(
                "Poll cycle %d finished in %.3fs: %d/%d readings ok",
                result.cycle,
                result.duration,
                len(result.readings) - result.failed_reads,
                len(result.readings),
            )
            return result

    async def _poll_reading(self, spec: ReadingSpec) -> ReadingResult:
        """Poll one reading and map any failure to a diagnostic."""
        request = spec.to_request(self._slave_address)
        frame = self._protocol.build_request(request)

        try:
            response = await self._exchange(frame)
        except TransportTimeoutError as err:
            return self._failure(spec, FailureKind.TIMEOUT, err)
        except OSError as err:
            # TransportError, or a plain OSError from another ITransport
            return self._failure(spec, FailureKind.IO_ERROR, err)

        try:
            words = self._protocol.decode_response(response, spec.register_count)
        except ProtocolError as err:
            return self._failure(spec, FailureKind.from_protocol_error(err.kind), err)

        try:
            value = spec.interpret_words(words)
        except ValueError as err:
            return self._failure(spec, FailureKind.INTERPRET_ERROR, err)

        _LOGGER.debug("Read %s = %s", spec.name, value)
        return ReadingResult.ok(spec.name, value, self._clock.now())

    async def _exchange(self, frame: bytes) -> bytes:
        """Write one request and read its response."""
        await self._transport.write(frame)
        return await self._transport.read(
            MAX_RESPONSE_BYTES, timeout=self._read_timeout
        )

    def _failure(
        self,
        spec: ReadingSpec,
        kind: FailureKind,
        err: Exception,
    ) -> ReadingResult:
        _LOGGER.debug("Reading %s failed (%s): %s", spec.name, kind.value, err)
        return ReadingResult.failed(spec.name, kind, str(err), self._clock.now())
