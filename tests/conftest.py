"""
Pytest configuration shared across Cleo test files
"""

from __future__ import annotations

import pytest

from cleo.observability import telemetry


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def reset_telemetry():
    """Each test starts with empty counters and latency samples"""
    telemetry.reset()
    yield
    telemetry.reset()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def long_plain_text() -> str:
    """~1500 words of plain paragraphs: no markdown, emoji or tables"""
    sentence = (
        "El clima cambia rapidamente en todo el planeta y afecta a millones de personas. "
    )
    paragraph = sentence * 10
    return "\n\n".join([paragraph.strip()] * 11)
