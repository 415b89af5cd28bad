"""
Integration tests for core/observability.py

Tests structured logging, correlation IDs and operation timing.
"""
import logging
import json
import pytest
import sys
import time as time_module

from core.observability import (
    generate_correlation_id,
    set_correlation_id,
    get_correlation_id,
    correlation_context,
    setup_logging,
    Timer,
    StructuredFormatter,
    HumanReadableFormatter,
    get_logger,
)


def make_record(msg: str = "Test", name: str = "test", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestCorrelationId:
    """Tests for correlation ID management."""

    def test_generate_correlation_id_not_empty(self):
        """Generated ID is not empty."""
        cid = generate_correlation_id()
        assert cid is not None
        assert len(cid) == 8

    def test_generated_ids_differ(self):
        assert generate_correlation_id() != generate_correlation_id()

    def test_set_and_get_correlation_id(self):
        """Can set and retrieve correlation ID."""
        test_id = "test-correlation-123"
        set_correlation_id(test_id)
        assert get_correlation_id() == test_id

    def test_context_restores_previous(self):
        """correlation_context resets the ID on exit."""
        set_correlation_id("outer")
        with correlation_context("inner") as cid:
            assert cid == "inner"
            assert get_correlation_id() == "inner"
        assert get_correlation_id() == "outer"

    def test_context_generates_id(self):
        with correlation_context() as cid:
            assert cid
            assert get_correlation_id() == cid


class TestTimer:
    """Tests for Timer context manager."""

    def test_measures_elapsed_time(self):
        """Timer measures elapsed time correctly."""
        with Timer("test_operation") as timer:
            time_module.sleep(0.05)

        assert timer.elapsed_ms >= 45  # At least 45ms
        assert timer.elapsed_ms < 1000

    def test_timer_name(self):
        """Timer stores operation name."""
        with Timer("my_operation") as timer:
            pass

        assert timer.name == "my_operation"

    def test_logs_completion(self, caplog):
        """Fast operations log at DEBUG with duration."""
        logger = get_logger("test.timer")
        with caplog.at_level(logging.DEBUG, logger="test.timer"):
            with Timer("seed_fetch", logger):
                pass

        (record,) = caplog.records
        assert record.levelno == logging.DEBUG
        assert record.getMessage() == "seed_fetch completed"
        assert hasattr(record, "duration_ms")

    def test_slow_operation_warns(self, caplog):
        """Operations over the threshold log a warning."""
        logger = get_logger("test.timer.slow")
        with caplog.at_level(logging.DEBUG, logger="test.timer.slow"):
            with Timer("slow", logger, warn_threshold_ms=0):
                time_module.sleep(0.01)

        assert caplog.records[0].levelno == logging.WARNING


class TestStructuredFormatter:
    """Tests for JSON log formatter."""

    def test_formats_as_json(self):
        """Outputs valid JSON."""
        formatter = StructuredFormatter()
        output = formatter.format(make_record("Test message", name="test.logger"))
        parsed = json.loads(output)

        assert parsed["message"] == "Test message"
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test.logger"

    def test_includes_timestamp(self):
        """JSON includes ISO timestamp."""
        parsed = json.loads(StructuredFormatter().format(make_record()))

        assert "timestamp" in parsed
        assert "T" in parsed["timestamp"]
        assert parsed["timestamp"].endswith("Z")

    def test_includes_correlation_id(self):
        """JSON includes correlation ID when set."""
        with correlation_context("test-correlation-456"):
            parsed = json.loads(StructuredFormatter().format(make_record()))

        assert parsed["correlation_id"] == "test-correlation-456"

    def test_includes_extra_fields(self):
        """Fields passed through ``extra`` are emitted."""
        record = make_record(path="/api/statistics", status_code=200)
        parsed = json.loads(StructuredFormatter().format(record))

        assert parsed["path"] == "/api/statistics"
        assert parsed["status_code"] == 200

    def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        parsed = json.loads(StructuredFormatter().format(record))
        assert "ValueError: boom" in parsed["exception"]


class TestHumanReadableFormatter:
    """Tests for text log formatter."""

    def test_format(self):
        with correlation_context("abc12345"):
            output = HumanReadableFormatter().format(make_record("Seeded", name="core.seed"))

        assert "INFO" in output
        assert "core.seed [abc12345] - Seeded" in output

    def test_extras_appended(self):
        output = HumanReadableFormatter().format(make_record(duration_ms=12.5))
        assert output.endswith("| {'duration_ms': 12.5}")


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json(self):
        setup_logging(level="DEBUG", json_format=True)
        root = logging.getLogger()

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_text_quiets_libraries(self):
        setup_logging(level="info")

        assert isinstance(logging.getLogger().handlers[0].formatter, HumanReadableFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_logger(self):
        """Returns a logger instance."""
        logger = get_logger("test.module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"
