"""
Unit tests for logging setup and in-process telemetry

Tests cover:
- Module loggers nested under the cleo namespace
- Level configuration
- Counters, latency summaries and reset
- Event log line format
"""

from __future__ import annotations

import logging

import pytest

from cleo.observability import telemetry
from cleo.observability.logging import PACKAGE_LOGGER, configure_logging, get_logger


class TestLogging:
    def test_package_modules_keep_their_name(self):
        assert get_logger("cleo.files.markers").name == "cleo.files.markers"

    def test_foreign_names_nested_under_package(self):
        assert get_logger("scripts.batch").name == "cleo.scripts.batch"

    def test_handler_attached_to_package_logger_once(self):
        get_logger("cleo.a")
        get_logger("cleo.b")
        configure_logging()

        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 1

    def test_level_override(self):
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        previous = package_logger.level
        try:
            configure_logging("debug")
            assert package_logger.level == logging.DEBUG

            configure_logging("not-a-level")
            assert package_logger.level == logging.INFO
        finally:
            package_logger.setLevel(previous)


class TestCounters:
    def test_increment_and_read(self):
        assert telemetry.get_counter("files.process.auto_detect") == 0
        assert telemetry.counter("files.process.auto_detect") == 1
        assert telemetry.counter("files.process.auto_detect", 2) == 3
        assert telemetry.get_counter("files.process.auto_detect") == 3

    def test_reset_clears(self):
        telemetry.counter("files.process.hidden_marker")
        telemetry.reset()

        assert telemetry.get_counter("files.process.hidden_marker") == 0


class TestLatency:
    def test_summary_accumulates(self):
        for _ in range(3):
            with telemetry.time_block("files.process.latency"):
                pass

        summary = telemetry.get_latency("files.process.latency")
        assert summary.count == 3
        assert summary.max_seconds <= summary.total_seconds
        assert summary.mean_seconds == pytest.approx(summary.total_seconds / 3)

    def test_recorded_when_block_raises(self):
        with pytest.raises(ValueError):
            with telemetry.time_block("files.process.latency"):
                raise ValueError("boom")

        assert telemetry.get_latency("files.process.latency").count == 1

    def test_unknown_metric_is_empty(self):
        summary = telemetry.get_latency("never.timed")

        assert summary.count == 0
        assert summary.mean_seconds == 0.0

    def test_returns_copy(self):
        with telemetry.time_block("files.process.latency"):
            pass
        telemetry.get_latency("files.process.latency").count = 99

        assert telemetry.get_latency("files.process.latency").count == 1


class TestEvents:
    def test_fields_sorted_as_key_value(self, caplog):
        with caplog.at_level(logging.INFO, logger="cleo.telemetry"):
            telemetry.log_event("files.process.auto_detect", word_count=3, file_type="md")

        assert caplog.records[-1].name == "cleo.telemetry"
        assert caplog.records[-1].getMessage() == (
            "files.process.auto_detect file_type=md word_count=3"
        )
