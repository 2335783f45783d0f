"""Rate limiting models."""

from pydantic import BaseModel, Field


class RateLimitRule(BaseModel):
    """Maximum requests allowed per sliding window"""

    max_requests: int = Field(..., ge=1)
    window_seconds: float = Field(..., gt=0)


class RateLimitResult(BaseModel):
    """Outcome of a single rate limit check"""

    success: bool
    limit: int
    remaining: int = Field(..., ge=0)
    reset: float = Field(..., description="Epoch seconds when capacity frees up")
