"""
Logging and tracing for the transactions service.

A request ID set by the web middleware (or by ``correlation_context`` in
scripts) is stamped on every log line, so a seed run or an API call can be
followed across the client, loader and store logs.

Usage:
    from core.observability import setup_logging, get_logger, correlation_context

    setup_logging(level="INFO", json_format=False)
    logger = get_logger(__name__)

    with correlation_context():
        logger.info("Seeding started", extra={"url": url})
"""
import json
import logging
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

# Attributes every LogRecord has; anything else came in through ``extra``
_STANDARD_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "asctime", "taskName",
}


def get_correlation_id() -> Optional[str]:
    """Request ID of the current context, if any."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id.set(correlation_id)


def generate_correlation_id() -> str:
    """Short random request ID (8 hex chars)."""
    return uuid.uuid4().hex[:8]


class correlation_context:
    """Bind a request ID for the duration of a block, restoring the previous one."""

    def __init__(self, correlation_id: Optional[str] = None):
        self.correlation_id = correlation_id or generate_correlation_id()
        self.token = None

    def __enter__(self):
        self.token = _correlation_id.set(self.correlation_id)
        return self.correlation_id

    def __exit__(self, *args):
        _correlation_id.reset(self.token)


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: value for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per line, for log shippers.

    Keys: timestamp (UTC, ``Z``), level, logger, message, correlation_id when
    bound, every ``extra`` field, and exception when there is a traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            entry["correlation_id"] = correlation_id

        entry.update(_extras(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """``2024-01-05 10:00:00 - INFO     - core.seed_service [ab12cd34] - message | {extras}``"""

    def format(self, record: logging.LogRecord) -> str:
        correlation_id = get_correlation_id()
        tag = f" [{correlation_id}]" if correlation_id else ""

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        line = f"{timestamp} - {record.levelname:8} - {record.name}{tag} - {record.getMessage()}"

        extras = _extras(record)
        if extras:
            line += f" | {extras}"

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        return line


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    include_libs: bool = False
) -> None:
    """
    Install a single stream handler on the root logger.

    Args:
        level: Root log level name (case-insensitive)
        json_format: Emit JSON lines instead of text
        include_libs: Keep httpx/httpcore/uvicorn.access at the root level
            instead of WARNING
    """
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter() if json_format else HumanReadableFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not include_libs:
        for name in ("httpx", "httpcore", "uvicorn.access"):
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class Timer:
    """
    Measure a block and, given a logger, report ``<name> completed``.

    The report is DEBUG, or WARNING once the block exceeds
    ``warn_threshold_ms``; the elapsed time is also kept on ``elapsed_ms``.

        with Timer("seed_fetch", logger) as t:
            payload = await client.fetch_records()
    """

    def __init__(self, name: str, logger: Optional[logging.Logger] = None, warn_threshold_ms: float = 1000):
        self.name = name
        self.logger = logger
        self.warn_threshold_ms = warn_threshold_ms
        self.start_time: float = 0
        self.elapsed_ms: float = 0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed_ms = (time.perf_counter() - self.start_time) * 1000

        if self.logger:
            slow = self.elapsed_ms > self.warn_threshold_ms
            self.logger.log(
                logging.WARNING if slow else logging.DEBUG,
                f"{self.name} completed",
                extra={"duration_ms": round(self.elapsed_ms, 2)},
            )
