"""Logging configuration for staticsync.

Provides consistent logging across all modules with:
- JSON or text output formats
- Timestamps in ISO format
- Configurable log levels
- File and console handlers
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union


TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else came in through extra=
_RESERVED_ATTRS = frozenset((
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "taskName",
))


class JsonFormatter(logging.Formatter):
    """Format log records as JSON lines for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON string representation of the log record
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps(value)
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        return json.dumps(log_data)


def _parse_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def _build_handlers(
    level: int,
    json_output: bool,
    log_file: Optional[Path],
    console: bool
) -> List[logging.Handler]:
    if json_output:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, DATE_FORMAT)

    handlers: List[logging.Handler] = []

    if console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    return handlers


def get_logger(
    name: str,
    level: Union[int, str] = logging.INFO,
    json_output: bool = False,
    log_file: Optional[Path] = None,
    console: bool = True
) -> logging.Logger:
    """Get a configured logger instance.

    Args:
        name: Logger name (usually __name__ or module name)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, use JSON format. If False, use text format.
        log_file: Optional path to log file
        console: If True, also log to console (stderr)

    Returns:
        Configured logger instance

    Example:
        >>> logger = get_logger("staticsync.sync")
        >>> logger.info("Pass complete", extra={"propagated": 2})
    """
    logger = logging.getLogger(name)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    level = _parse_level(level)
    logger.setLevel(level)

    for handler in _build_handlers(level, json_output, log_file, console):
        logger.addHandler(handler)

    return logger


def configure_root_logger(
    level: Union[int, str] = logging.INFO,
    json_output: bool = False,
    log_file: Optional[Path] = None
) -> None:
    """Configure the root logger for the entire application.

    Call this once at application startup to set defaults for all loggers.

    Args:
        level: Default logging level
        json_output: If True, use JSON format globally
        log_file: Optional path to log file
    """
    root_logger = logging.getLogger()

    level = _parse_level(level)
    root_logger.setLevel(level)

    # Clear existing handlers
    root_logger.handlers.clear()

    for handler in _build_handlers(level, json_output, log_file, console=True):
        root_logger.addHandler(handler)
