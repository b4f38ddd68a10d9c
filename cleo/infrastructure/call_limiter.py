"""
Call-count limiter with a fixed reset window.

Caps how many times one tag (user id, request id) may invoke an expensive
operation inside a short window. The window starts at the first call and
resets once it is older than window_seconds. Best-effort, single-process,
in-memory: counts are lost on restart. Safe to share between the API worker
threads.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from cleo.config import CALL_LIMIT_MAX, CALL_LIMIT_WINDOW_SECONDS
from cleo.infrastructure.cache import ExpiringCache
from cleo.observability.logging import get_logger
from cleo.observability.telemetry import log_event

logger = get_logger(__name__)


class CallLimitExceeded(RuntimeError):
    """Raised when a tag goes over its call budget for the current window."""

    def __init__(self, tag: str, limit: int, retry_after: float) -> None:
        self.tag = tag
        self.limit = limit
        self.retry_after = retry_after
        super().__init__(f"Too many calls in a single request context (limit {limit})")


@dataclass
class _Bucket:
    count: int
    started: float


class CallLimiter:
    """
    Per-tag call counter.

    Args:
        max_calls: Calls allowed per window
        window_seconds: Window length; the count resets after it elapses
        cache: Bucket storage. Idle buckets expire on their own.
        clock: Monotonic time source, shared with the default cache
    """

    def __init__(
        self,
        max_calls: int = CALL_LIMIT_MAX,
        window_seconds: float = CALL_LIMIT_WINDOW_SECONDS,
        cache: ExpiringCache | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_calls < 1:
            raise ValueError(f"max_calls must be >= 1, got {max_calls}")
        if window_seconds <= 0:
            raise ValueError(f"window_seconds must be > 0, got {window_seconds}")

        self.max_calls = max_calls
        self.window_seconds = window_seconds
        self._clock = clock
        self._buckets = cache if cache is not None else ExpiringCache(clock=clock)
        self._lock = Lock()

    def _current_bucket(self, tag: str, now: float) -> _Bucket:
        bucket = self._buckets.get(tag)
        if bucket is None or now - bucket.started > self.window_seconds:
            bucket = _Bucket(count=0, started=now)
            # Cache TTL only evicts idle tags; the started check above drives resets
            self._buckets.set(tag, bucket, ttl=self.window_seconds * 2)
        return bucket

    def check(self, tag: str) -> int:
        """
        Count one call for tag.

        Returns:
            Calls remaining in the current window

        Raises:
            CallLimitExceeded: If this call goes over max_calls
        """
        with self._lock:
            now = self._clock()
            bucket = self._current_bucket(tag, now)
            bucket.count += 1
            count = bucket.count
            started = bucket.started

        if count > self.max_calls:
            retry_after = max(0.0, self.window_seconds - (now - started))
            log_event(
                "call_limit.exceeded",
                count=count,
                limit=self.max_calls,
                retry_after=round(retry_after, 2),
            )
            raise CallLimitExceeded(tag, self.max_calls, retry_after)

        return self.max_calls - count

    def remaining(self, tag: str) -> int:
        """Calls left for tag without counting one."""
        with self._lock:
            now = self._clock()
            bucket = self._buckets.get(tag)
            if bucket is None or now - bucket.started > self.window_seconds:
                return self.max_calls
            return max(0, self.max_calls - bucket.count)

    def reset(self, tag: str) -> None:
        with self._lock:
            self._buckets.delete(tag)
