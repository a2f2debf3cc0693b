"""
Request rate limiting for the MangaDex client.

See https://api.mangadex.org/docs/rate-limits/ for the documented limits.
"""

import asyncio
import functools
from typing import Awaitable, Callable, TypeVar

from pyrate_limiter import Limiter, Rate
from pyrate_limiter.buckets import InMemoryBucket

from mangadex_dl.logger import logger

T = TypeVar("T")

# How long a waiter sleeps between two attempts on a full bucket
POLL_INTERVAL = 0.01


class RateLimiter:
    """Process-wide gate allowing at most ``rate`` acquisitions per second.

    Backed by a pyrate-limiter bucket holding one item per ``1/rate`` second
    window, so requests are spaced evenly and idle time never builds a burst.
    Waiters queue on an ``asyncio.Lock`` and are admitted in arrival order.
    """

    name = "mangadex"

    def __init__(self, rate: float = 5.0):
        if rate <= 0:
            raise ValueError("rate must be positive")
        self._interval = 1.0 / rate
        interval_ms = max(1, round(self._interval * 1000))
        self._limiter = Limiter(
            InMemoryBucket([Rate(1, interval_ms)]),
            raise_when_fail=False,
            max_delay=None,
        )
        self._lock = asyncio.Lock()

    @property
    def interval(self) -> float:
        return self._interval

    async def acquire(self) -> None:
        """Wait until one request may be sent."""
        async with self._lock:
            waited = 0.0
            while not self._limiter.try_acquire(self.name):
                await asyncio.sleep(POLL_INTERVAL)
                waited += POLL_INTERVAL
            if waited:
                logger.trace(f"Rate limited, waited ~{waited:.3f}s")


def with_rate_limit(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """Decorate a client coroutine method so it waits on ``self.limiter`` first."""

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs) -> T:
        await self.limiter.acquire()
        return await func(self, *args, **kwargs)

    return wrapper
