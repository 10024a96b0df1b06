"""Periodic poll scheduler.

Drives one poll cycle per interval on a fixed cadence. Cycles never
overlap: the next tick is only armed after the current cycle returns.
When a cycle overruns, missed ticks are dropped instead of being run
back to back.
"""

import asyncio
import logging
import math
from typing import List, Optional

from ...domain.interfaces import IClock, IReadingSink
from ..use_cases.poll_cycle_result import PollCycleResult
from ..use_cases.poll_cycle_use_case import PollCycleUseCase

_LOGGER = logging.getLogger(__name__)


class PollScheduler:
    """Run poll cycles at a fixed interval until stopped.

    The first cycle fires one interval after ``run()`` starts. Tick
    deadlines are computed from the start time, so cycle duration does
    not make the cadence drift.

    Example:
        >>> scheduler = PollScheduler(use_case, SystemClock(), 10, ConsoleSink())
        >>> task = asyncio.create_task(scheduler.run())
        >>> ...
        >>> scheduler.stop()
        >>> await task
    """

    def __init__(
        self,
        use_case: PollCycleUseCase,
        clock: IClock,
        interval: float,
        sink: IReadingSink,
    ):
        """Initialize scheduler.

        Args:
            use_case: Poll cycle to run on each tick
            clock: Time source
            interval: Seconds between ticks (must be positive)
            sink: Receives every reading result

        Raises:
            ValueError: If interval is not positive
        """
        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")

        self._use_case = use_case
        self._clock = clock
        self._interval = interval
        self._sink = sink
        self._stop_event = asyncio.Event()
        self._skipped_ticks = 0

    @property
    def skipped_ticks(self) -> int:
        """Ticks dropped because a cycle overran its slot."""
        return self._skipped_ticks

    @property
    def stopped(self) -> bool:
        """Whether a stop was requested."""
        return self._stop_event.is_set()

    def stop(self) -> None:
        """Request shutdown.

        A pending sleep is interrupted; a cycle already in progress is
        allowed to finish.
        """
        if not self._stop_event.is_set():
            _LOGGER.info("Stopping poll scheduler")
        self._stop_event.set()

    async def run_once(self) -> PollCycleResult:
        """Run a single cycle immediately and publish its results."""
        result = await self._use_case.execute()
        self._publish(result)
        return result

    async def run(self, max_cycles: Optional[int] = None) -> List[PollCycleResult]:
        """Run cycles until stopped or ``max_cycles`` is reached.

        Returns:
            Results of every cycle that ran
        """
        results: List[PollCycleResult] = []
        start = self._clock.monotonic()
        tick = 1

        _LOGGER.info("Polling every %ss", self._interval)

        while not self._stop_event.is_set():
            if max_cycles is not None and len(results) >= max_cycles:
                break

            deadline = start + tick * self._interval
            await self._wait(deadline - self._clock.monotonic())
            if self._stop_event.is_set():
                break

            results.append(await self.run_once())

            # Drop ticks whose deadline already passed during the cycle
            elapsed_ticks = math.floor((self._clock.monotonic() - start) / self._interval)
            if elapsed_ticks > tick:
                skipped = elapsed_ticks - tick
                self._skipped_ticks += skipped
                _LOGGER.warning(
                    "Poll cycle overran its interval, skipping %d tick(s)", skipped
                )
                tick = elapsed_ticks
            tick += 1

        return results

    async def _wait(self, delay: float) -> None:
        """Sleep ``delay`` seconds unless a stop arrives first."""
        if delay <= 0:
            return

        sleep_task = asyncio.ensure_future(self._clock.sleep(delay))
        stop_task = asyncio.ensure_future(self._stop_event.wait())
        try:
            await asyncio.wait(
                {sleep_task, stop_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (sleep_task, stop_task):
                if not task.done():
                    task.cancel()
            await asyncio.gather(sleep_task, stop_task, return_exceptions=True)

    def _publish(self, result: PollCycleResult) -> None:
        for reading in result.readings:
            self._sink.emit(reading)
