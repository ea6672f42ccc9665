"""
Structured logging configuration.

Provides JSON-formatted logs with trace_id support for correlating every
log line that belongs to one statement.

Environment Variables:
    STATEMENTS_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    STATEMENTS_LOG_FORMAT: Log format (json, text) - default: json

Usage:
    from statements.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id=statement_id)
    logger.info("Dispatching statement", extra={"kind": "assignment.create"})
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all logs have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True


class TraceLoggerAdapter(logging.LoggerAdapter):
    """
    LoggerAdapter that keeps per-call extra fields next to the trace_id.

    Caller extra fields are merged over the adapter's own.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure root logger with structured logging.

    Arguments override the environment:
    - STATEMENTS_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    - STATEMENTS_LOG_FORMAT: json, text (default: json)

    Logs go to stderr so that command output on stdout stays parseable.
    """
    log_level = (level or os.getenv("STATEMENTS_LOG_LEVEL", "INFO")).upper()
    fmt = (log_format or os.getenv("STATEMENTS_LOG_FORMAT", "json")).lower()
    resolved = LEVELS.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.addFilter(TraceIDFilter())

    if fmt == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Silence noisy libraries
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str, trace_id: Optional[str] = None) -> TraceLoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Trace ID for correlating logs (statement id or event kind)

    Example:
        logger = get_logger(__name__, trace_id="5b0c...")
        logger.info("Statement stored", extra={"path": path})
        # Output (JSON): {"timestamp": "...", "level": "INFO", "message": "Statement stored", "trace_id": "5b0c...", "path": "..."}
    """
    logger = logging.getLogger(name)
    return TraceLoggerAdapter(logger, {"trace_id": trace_id or "N/A"})
