"""Structured logging configuration.

This module configures Python logging for the package with:
- JSON structured logging when ``json_format`` is enabled
- A stderr handler, or a rotating file handler when ``file`` is set
- Quieter third-party HTTP loggers
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

from .config import LoggingConfig

PACKAGE_LOGGER = "testclient_auth"

_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    }
)


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds additional context fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to the log record."""
        super().add_fields(log_record, record, message_dict)

        log_record["logger"] = record.name
        log_record["level"] = record.levelname
        log_record["timestamp"] = self.formatTime(record, self.datefmt)

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        # Fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_record[key] = value


def _build_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.json_format:
        return CustomJsonFormatter(
            "%(timestamp)s %(level)s %(logger)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    return logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(config: LoggingConfig, console: bool = True) -> logging.Logger:
    """Configure the package logger.

    Only the ``testclient_auth`` logger is touched; the root logger belongs to
    the test session (pytest's caplog and log capture hook into it).

    Args:
        config: Logging configuration settings
        console: Add a stderr handler when no log file is configured. Inside
            pytest, records already reach the terminal through log capture.

    Returns:
        The configured package logger
    """
    formatter = _build_formatter(config)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(config.level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=config.rotation_size,
            backupCount=config.rotation_count,
            encoding="utf-8",
        )
    elif console:
        handler = logging.StreamHandler(sys.stderr)
    else:
        handler = None

    if handler is not None:
        handler.setLevel(config.level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    # Suppress overly verbose third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    package_logger.debug(
        f"Logging configured: level={config.level} json={config.json_format} "
        f"file={config.file or ('stderr' if console else 'none')}"
    )
    return package_logger


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    """Log a message with additional context fields.

    With JSON logging the context fields become top-level attributes.

    Example:
        log_with_context(
            logger, logging.DEBUG,
            "Configured test client",
            auth_mode="test",
            header_count=3,
        )
    """
    logger.log(level, message, extra=context)
