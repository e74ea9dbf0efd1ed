"""
Rate limiting for outbound translation requests
"""

import asyncio
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class RateLimiter:
    """Sliding-window limiter shared by concurrent auto-fill workers"""

    def __init__(self, max_requests: int, time_window: float):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if time_window <= 0:
            raise ValueError("time_window must be positive")

        self.max_requests = max_requests
        self.time_window = time_window
        self.requests: List[float] = []
        self._lock = asyncio.Lock()

    @classmethod
    def per_second(cls, max_requests_per_second: int) -> Optional['RateLimiter']:
        """Build a limiter from a requests-per-second setting; 0 disables limiting"""
        if max_requests_per_second <= 0:
            return None
        return cls(max_requests=max_requests_per_second, time_window=1.0)

    @staticmethod
    def _now() -> float:
        return asyncio.get_running_loop().time()

    def _prune(self, now: float) -> None:
        self.requests = [req_time for req_time in self.requests if now - req_time < self.time_window]

    async def acquire(self):
        """Wait if necessary to not exceed the limit"""
        async with self._lock:
            now = self._now()
            self._prune(now)

            if len(self.requests) >= self.max_requests:
                sleep_time = self.time_window - (now - self.requests[0])
                if sleep_time > 0:
                    logger.debug(f"Rate limit reached, sleeping for {sleep_time:.2f}s")
                    await asyncio.sleep(sleep_time)
                    now = self._now()
                    self._prune(now)

            self.requests.append(now)

    def reset(self):
        """Reset the rate limiter"""
        self.requests.clear()

    def get_remaining_requests(self) -> int:
        """Get number of remaining requests in current window"""
        self._prune(self._now())
        return max(0, self.max_requests - len(self.requests))
