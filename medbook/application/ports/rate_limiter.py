from dataclasses import dataclass
from typing import Protocol


@dataclass
class RateDecision:
    allowed: bool
    remaining: int
    retry_after: int


class RateLimiter(Protocol):
    def hit(self, key: str, max_requests: int, window_seconds: int) -> RateDecision:
        ...
