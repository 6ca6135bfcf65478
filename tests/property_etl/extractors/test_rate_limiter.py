"""
Unit tests for RateLimiter
"""
import asyncio

from src.property_etl.extractors.rate_limiter import RateLimiter
from src.property_etl.models.source import PropertyDataSource, RateLimit


class FakeClock:
    """Manual clock whose sleep advances time instantly."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def acquire_times(limiter, clock, count):
    async def run():
        times = []
        for _ in range(count):
            await limiter.acquire()
            times.append(clock.now)
        return times

    return asyncio.run(run())


class TestRateLimiter:
    """Tests for window budgets and minimum spacing"""

    def test_unlimited(self):
        clock = FakeClock()
        limiter = RateLimiter(clock=clock, sleep=clock.sleep)
        acquire_times(limiter, clock, 5)
        assert clock.sleeps == []

    def test_min_interval_spaces_requests(self):
        clock = FakeClock()
        limiter = RateLimiter(min_interval=1.5, clock=clock, sleep=clock.sleep)

        assert acquire_times(limiter, clock, 3) == [0.0, 1.5, 3.0]

    def test_no_wait_when_interval_already_elapsed(self):
        clock = FakeClock()
        limiter = RateLimiter(min_interval=1.0, clock=clock, sleep=clock.sleep)

        acquire_times(limiter, clock, 1)
        clock.now = 5.0
        acquire_times(limiter, clock, 1)
        assert clock.sleeps == []

    def test_per_minute_budget(self):
        clock = FakeClock()
        limiter = RateLimiter(requests_per_minute=2, clock=clock, sleep=clock.sleep)

        assert acquire_times(limiter, clock, 3) == [0.0, 0.0, 60.0]

    def test_per_hour_budget(self):
        clock = FakeClock()
        limiter = RateLimiter(requests_per_minute=100, requests_per_hour=3, clock=clock, sleep=clock.sleep)

        times = acquire_times(limiter, clock, 4)
        assert times[-1] == 3600.0

    def test_wait_time(self):
        clock = FakeClock()
        limiter = RateLimiter(min_interval=2.0, clock=clock, sleep=clock.sleep)
        acquire_times(limiter, clock, 1)

        assert limiter.wait_time(0.5) == 1.5
        assert limiter.wait_time(3.0) == 0.0

    def test_for_source(self):
        source = PropertyDataSource(
            name="attom",
            priority=2,
            rate_limit=RateLimit(requests_per_minute=60, requests_per_hour=1000),
        )
        limiter = RateLimiter.for_source(source, min_interval=1.0)
        assert limiter.min_interval == 1.0

        bare = RateLimiter.for_source(PropertyDataSource(name="attom", priority=2), min_interval=2.0)
        assert bare.min_interval == 2.0
