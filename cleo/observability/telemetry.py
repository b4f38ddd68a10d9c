"""
In-process telemetry for the file pipeline.

Events go to the "cleo.telemetry" logger as "<event> key=value ..." lines.
Counters and latency summaries stay in memory; nothing is exported. The API
runs the processor on worker threads, so all shared state is guarded by one
lock.
"""

from __future__ import annotations

import contextlib
import time
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, replace
from threading import Lock
from typing import Any

from cleo.observability.logging import get_logger

logger = get_logger("cleo.telemetry")

_lock = Lock()
_counters: Counter[str] = Counter()


@dataclass
class LatencySummary:
    """Running totals for one timed block. Individual samples are not kept."""

    count: int = 0
    total_seconds: float = 0.0
    max_seconds: float = 0.0

    @property
    def mean_seconds(self) -> float:
        return self.total_seconds / self.count if self.count else 0.0

    def record(self, seconds: float) -> None:
        self.count += 1
        self.total_seconds += seconds
        self.max_seconds = max(self.max_seconds, seconds)


_latencies: dict[str, LatencySummary] = {}


def log_event(event_name: str, **fields: Any) -> None:
    """
    Log one pipeline event.

    Fields carry counts and kinds only. Response or user text never goes into
    an event.
    """
    details = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    logger.info("%s %s", event_name, details)


def counter(name: str, increment: int = 1) -> int:
    """Add to a named counter and return its new value."""
    with _lock:
        _counters[name] += increment
        return _counters[name]


def get_counter(name: str) -> int:
    with _lock:
        return _counters[name]


@contextlib.contextmanager
def time_block(metric_name: str) -> Iterator[None]:
    """Time the enclosed block into the metric's LatencySummary, even on error."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        with _lock:
            _latencies.setdefault(metric_name, LatencySummary()).record(elapsed)
        logger.debug("%s took %.2f ms", metric_name, elapsed * 1000)


def get_latency(metric_name: str) -> LatencySummary:
    """Copy of the summary for metric_name (all zeros when never timed)."""
    with _lock:
        summary = _latencies.get(metric_name)
        return replace(summary) if summary is not None else LatencySummary()


def reset() -> None:
    """Drop all counters and latency summaries."""
    with _lock:
        _counters.clear()
        _latencies.clear()
