"""System clock backed by the event loop."""

import asyncio
import time
from datetime import datetime, timezone

from ...domain.interfaces import IClock


class SystemClock(IClock):
    """Real time source: UTC wall clock, ``time.monotonic`` and ``asyncio.sleep``."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
