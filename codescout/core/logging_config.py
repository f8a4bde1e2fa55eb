"""
Logging configuration for review events.

This module provides structured (JSON lines) logging of analysis events:
one record per analyzed file and one per completed request, so batch
behaviour can be inspected after the fact.
"""

import json
import logging
from logging.handlers import TimedRotatingFileHandler
from typing import Any

EVENT_LOGGER_NAME = "codescout.review_events"


class ReviewEventFormatter(logging.Formatter):
    """JSON-lines formatter for review events."""

    EXTRA_FIELDS = (
        "event",
        "repository",
        "file_path",
        "language",
        "lint_count",
        "security_count",
        "file_count",
        "processed_count",
        "error",
    )

    def format(self, record: logging.LogRecord) -> str:
        """Render the record and any known extras as one JSON object."""
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in self.EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        return json.dumps(log_entry)


def configure_review_logging(
    log_file: str | None = None,
    log_level: str = "INFO",
    enable_console: bool = False,
) -> None:
    """
    Configure the review event logger.

    Args:
        log_file: Path to the event log file (optional)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_console: Whether to also log events to the console
    """
    logger = logging.getLogger(EVENT_LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper()))
    logger.propagate = False  # events stay out of the stderr log

    # Clear existing handlers
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    formatter = ReviewEventFormatter()

    if log_file:
        # Rotate daily, keep a week
        file_handler = TimedRotatingFileHandler(
            log_file,
            when='D',
            interval=1,
            backupCount=7,
            encoding='utf-8',
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())


def get_event_logger() -> logging.Logger:
    """Get the review event logger."""
    return logging.getLogger(EVENT_LOGGER_NAME)
