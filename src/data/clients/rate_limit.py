"""Fixed-interval rate limiting for zKillboard requests.

zKillboard asks clients to keep roughly one request per second. Rather than
negotiating limits from response headers, every call is followed by a fixed
pause before the calling task continues. The pause is local to the task that
made the call, so concurrent lookups for different characters still overlap.

The sleep function is injectable so tests can drive the limiter with a
virtual clock instead of real time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 1.1

SleepFunc = Callable[[float], Awaitable[None]]


class FixedDelayRateLimiter:
    """Waits a fixed delay after each request to a rate-limited service.

    Example:
        ```python
        limiter = FixedDelayRateLimiter(delay=1.1)
        response = await http.get(url)
        await limiter.wait_after_call("stats")
        ```
    """

    def __init__(
        self,
        delay: float = DEFAULT_DELAY_SECONDS,
        sleep: SleepFunc | None = None,
    ):
        """Initialize the limiter.

        Args:
            delay: Seconds to wait after each call (0 disables waiting)
            sleep: Awaitable sleep function, defaults to asyncio.sleep
        """
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        self.delay = delay
        self._sleep: SleepFunc = sleep or asyncio.sleep
        self.waits = 0

    async def wait_after_call(self, route: str | None = None) -> None:
        """Pause the calling task for the configured delay.

        Args:
            route: Optional label of the call site, used for logging only
        """
        if self.delay <= 0:
            return
        self.waits += 1
        logger.debug("Rate limit pause %.2fs after %s", self.delay, route or "call")
        await self._sleep(self.delay)

    def get_rate_limit_info(self) -> dict:
        """Current limiter settings and the number of pauses issued."""
        return {"delay": self.delay, "waits": self.waits}
