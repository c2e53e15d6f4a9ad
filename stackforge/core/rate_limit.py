"""Sliding-window limiter for repository creation."""

import time
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable

from stackforge.config import settings


@dataclass(frozen=True)
class RateLimitInfo:
    """Quota snapshot for one user."""

    limit: int
    remaining: int
    reset: datetime
    exceeded: bool

    @property
    def retry_after(self) -> int:
        """Whole seconds until a slot frees up, zero if one is free now."""
        if not self.exceeded:
            return 0
        delta = (self.reset - datetime.now(timezone.utc)).total_seconds()
        return max(1, int(delta + 0.999))


class RateLimiter:
    """Allows ``limit`` actions per user within a sliding ``window_seconds``."""

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.time,
    ):
        self.limit = limit
        self.window = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}

    def _prune(self, user_id: str) -> deque[float]:
        hits = self._hits.setdefault(user_id, deque())
        cutoff = self._clock() - self.window
        while hits and hits[0] <= cutoff:
            hits.popleft()
        return hits

    def check_limit(self, user_id: str) -> bool:
        """Record an action if a slot is free. Returns whether it was allowed."""
        hits = self._prune(user_id)
        if len(hits) >= self.limit:
            return False
        hits.append(self._clock())
        return True

    def remaining(self, user_id: str) -> int:
        return max(0, self.limit - len(self._prune(user_id)))

    def info(self, user_id: str) -> RateLimitInfo:
        hits = self._prune(user_id)
        reset_at = hits[0] + self.window if hits else self._clock()
        remaining = max(0, self.limit - len(hits))
        return RateLimitInfo(
            limit=self.limit,
            remaining=remaining,
            reset=datetime.fromtimestamp(reset_at, tz=timezone.utc),
            exceeded=remaining == 0,
        )

    def reset(self, user_id: str) -> None:
        self._hits.pop(user_id, None)


@lru_cache
def get_repository_rate_limiter() -> RateLimiter:
    """Get the process-wide repository creation limiter."""
    return RateLimiter(settings.repo_rate_limit, settings.repo_rate_window_seconds)
