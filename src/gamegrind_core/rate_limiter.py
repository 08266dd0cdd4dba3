import asyncio
import time

from .constants import RATE_LIMIT_INTERVAL


class RateLimiter:
    """
    A fixed-interval limiter for async operations.
    Every caller holds the same lock while it waits, so all requests sharing
    one limiter are serialized to one per `interval` seconds.
    """

    def __init__(self, interval: float = RATE_LIMIT_INTERVAL):
        self.delay = max(interval, 0.0)
        self.last_call = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self):
        """
        Waits until `delay` seconds have passed since the previous holder released.
        """
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self.last_call
            if elapsed < self.delay:
                await asyncio.sleep(self.delay - elapsed)

            # Stamp the release, not the acquisition
            self.last_call = time.monotonic()
