import threading
import time
from collections import defaultdict, deque
from typing import Deque, Dict

from ...application.ports.rate_limiter import RateDecision, RateLimiter


class InMemoryRateLimiter(RateLimiter):
    """Sliding window per key; state lives in this process only."""

    def __init__(self, clock=time.monotonic) -> None:
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()
        self._clock = clock

    def hit(self, key: str, max_requests: int, window_seconds: int) -> RateDecision:
        now = self._clock()
        with self._lock:
            hits = self._hits[key]
            while hits and hits[0] <= now - window_seconds:
                hits.popleft()
            if len(hits) >= max_requests:
                retry_after = max(1, int(hits[0] + window_seconds - now))
                return RateDecision(allowed=False, remaining=0, retry_after=retry_after)
            hits.append(now)
            return RateDecision(allowed=True, remaining=max_requests - len(hits), retry_after=0)
