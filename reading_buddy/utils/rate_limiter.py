import math
import random
import threading
import time
from typing import Dict, List, Mapping, Optional
import structlog

from reading_buddy.models.config import RateLimitSettings
from reading_buddy.models.rate_limit import RateLimitResult, RateLimitRule
from reading_buddy.observability.metrics import RATE_LIMIT_DECISIONS
from reading_buddy.utils.exceptions import RateLimitError

logger = structlog.get_logger()


class MemoryRateLimiter:
    """Sliding window rate limiter keyed by requester identifier

    Keeps request timestamps in memory, so limits are per process.
    """

    def __init__(self, cleanup_probability: float = 0.01):
        self.requests: Dict[str, List[float]] = {}
        self.cleanup_probability = cleanup_probability
        self._lock = threading.Lock()

    def limit(
        self, identifier: str, rule: RateLimitRule, now: Optional[float] = None
    ) -> RateLimitResult:
        """Record a request for identifier if the window has room"""
        now = time.time() if now is None else now
        window_start = now - rule.window_seconds

        with self._lock:
            recent = [t for t in self.requests.get(identifier, []) if t > window_start]

            if len(recent) >= rule.max_requests:
                self.requests[identifier] = recent
                return RateLimitResult(
                    success=False,
                    limit=rule.max_requests,
                    remaining=0,
                    reset=min(recent) + rule.window_seconds,
                )

            recent.append(now)
            self.requests[identifier] = recent

            if random.random() < self.cleanup_probability:
                self._cleanup(window_start)

        return RateLimitResult(
            success=True,
            limit=rule.max_requests,
            remaining=rule.max_requests - len(recent),
            reset=now + rule.window_seconds,
        )

    def _cleanup(self, before: float) -> None:
        for key in list(self.requests):
            recent = [t for t in self.requests[key] if t > before]
            if recent:
                self.requests[key] = recent
            else:
                del self.requests[key]


class RateLimitGate:
    """Applies the configured rule for an operation to a requester"""

    def __init__(
        self,
        settings: Optional[RateLimitSettings] = None,
        limiter: Optional[MemoryRateLimiter] = None,
    ):
        self.settings = settings or RateLimitSettings()
        self.limiter = limiter or MemoryRateLimiter()

    def check(self, identifier: str, operation: str) -> RateLimitResult:
        rule = getattr(self.settings, operation, None)
        if not isinstance(rule, RateLimitRule):
            raise ValueError(f"Unknown rate limit operation: {operation}")

        result = self.limiter.limit(identifier, rule)
        outcome = "allowed" if result.success else "rejected"
        RATE_LIMIT_DECISIONS.labels(rule=operation, outcome=outcome).inc()

        if not result.success:
            logger.warning(
                "rate_limit_exceeded",
                requester_id=identifier,
                operation=operation,
                limit=result.limit,
                reset=result.reset,
            )
        return result

    def enforce(self, identifier: str, operation: str) -> RateLimitResult:
        """Like check(), but raise RateLimitError when the limit is hit"""
        result = self.check(identifier, operation)
        if not result.success:
            raise RateLimitError(
                f"Rate limit exceeded for {operation}",
                retry_after=retry_after_seconds(result.reset),
            )
        return result


def get_client_identifier(headers: Mapping[str, str]) -> str:
    """Best-effort client IP from proxy headers"""
    lowered = {k.lower(): v for k, v in headers.items()}
    forwarded_for = lowered.get("x-forwarded-for")
    ip = (
        lowered.get("cf-connecting-ip")
        or lowered.get("x-real-ip")
        or (forwarded_for.split(",")[0] if forwarded_for else None)
        or "unknown"
    )
    return ip.strip()


def get_user_identifier(user_id: Optional[str], headers: Mapping[str, str]) -> str:
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_client_identifier(headers)}"


def retry_after_seconds(reset: float, now: Optional[float] = None) -> int:
    now = time.time() if now is None else now
    return max(0, math.ceil(reset - now))
