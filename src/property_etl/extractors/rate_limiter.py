"""
Request rate limiting for provider extractors.

A sliding-window limiter over the descriptor's per-minute and per-hour
budgets, plus a fixed minimum spacing between consecutive requests.
"""
import asyncio
import time
from collections import deque
from typing import Awaitable, Callable, Deque, List, Optional, Tuple

from src.property_etl.models.source import PropertyDataSource
from src.property_etl.utils.logger import get_logger

logger = get_logger(__name__)

MINUTE = 60.0
HOUR = 3600.0


class RateLimiter:
    """
    Wait-for-slot limiter used once per outbound request.

    Usage:
        limiter = RateLimiter(requests_per_minute=60, min_interval=1.0)
        await limiter.acquire()
        response = session.get(...)
    """

    def __init__(
        self,
        requests_per_minute: Optional[int] = None,
        requests_per_hour: Optional[int] = None,
        min_interval: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.min_interval = max(0.0, min_interval)
        self._windows: List[Tuple[float, int]] = []
        if requests_per_minute:
            self._windows.append((MINUTE, requests_per_minute))
        if requests_per_hour:
            self._windows.append((HOUR, requests_per_hour))
        self._clock = clock
        self._sleep = sleep
        self._history: Deque[float] = deque()
        self._last_request: Optional[float] = None

    @classmethod
    def for_source(cls, source: PropertyDataSource, min_interval: float) -> "RateLimiter":
        """Build a limiter from a descriptor's budget and a provider delay."""
        if source.rate_limit is None:
            return cls(min_interval=min_interval)
        return cls(
            requests_per_minute=source.rate_limit.requests_per_minute,
            requests_per_hour=source.rate_limit.requests_per_hour,
            min_interval=min_interval,
        )

    async def acquire(self) -> None:
        """Suspend until a request may be issued, then record it."""
        while True:
            now = self._clock()
            wait = self.wait_time(now)
            if wait <= 0:
                break
            logger.debug("rate_limit_wait", seconds=round(wait, 3))
            await self._sleep(wait)

        now = self._clock()
        self._history.append(now)
        self._last_request = now

    def wait_time(self, now: float) -> float:
        """Seconds until the next request slot opens (0 if available now)."""
        wait = 0.0
        if self._last_request is not None and self.min_interval:
            wait = max(wait, self._last_request + self.min_interval - now)

        if self._windows:
            longest = max(window for window, _ in self._windows)
            while self._history and now - self._history[0] >= longest:
                self._history.popleft()

            for window, limit in self._windows:
                in_window = [t for t in self._history if now - t < window]
                if len(in_window) >= limit:
                    wait = max(wait, in_window[-limit] + window - now)

        return wait
