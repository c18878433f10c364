import redis

from ...application.ports.rate_limiter import RateDecision, RateLimiter


class RedisRateLimiter(RateLimiter):
    """Fixed window counter shared by every worker pointed at the same Redis."""

    def __init__(self, url: str, prefix: str = "medbook:rl:") -> None:
        self.client = redis.Redis.from_url(url)
        self.prefix = prefix

    def hit(self, key: str, max_requests: int, window_seconds: int) -> RateDecision:
        rk = f"{self.prefix}{key}:{window_seconds}"
        pipe = self.client.pipeline()
        pipe.incr(rk, 1)
        pipe.ttl(rk)
        count, ttl = pipe.execute()
        if int(ttl) < 0:
            # First hit in this window
            self.client.expire(rk, window_seconds)
            ttl = window_seconds
        count = int(count)
        if count > max_requests:
            return RateDecision(allowed=False, remaining=0, retry_after=max(1, int(ttl)))
        return RateDecision(allowed=True, remaining=max_requests - count, retry_after=0)
