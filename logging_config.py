#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Logging configuration for Tubelist.

Provides structured JSON logging capabilities and setup functions.
"""

import logging
import logging.handlers
import json
import sys
from typing import Dict, Any, Optional

SERVICE_NAME = "tubelist"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Each record becomes one JSON object per line. Fields passed to
    StructuredLogger calls are merged into the top level.
    """

    def format(self, record):
        """Format the log record as a JSON object."""
        log_data = {
            "timestamp": self.formatTime(record),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "name": record.name,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        extra_data = getattr(record, "data", None)
        if isinstance(extra_data, dict):
            for key, value in extra_data.items():
                log_data.setdefault(key, value)

        return json.dumps(log_data, default=str)


class StructuredLogger:
    """Logger that supports structured logging with additional context data.

    Usage: ``logger.info("Fetched page", playlist_id=pid, page=3)``.
    """

    def __init__(self, name: str, extra: Optional[Dict[str, Any]] = None):
        self.logger = logging.getLogger(name)
        self.extra = extra or {}

    def bind(self, **kwargs) -> "StructuredLogger":
        """Return a logger for the same name that adds ``kwargs`` to every record."""
        return StructuredLogger(self.logger.name, {**self.extra, **kwargs})

    def _log(self, level: int, message: str, exc_info=None, **kwargs):
        extra_data = {**self.extra}
        if kwargs:
            extra_data.update(kwargs)
        self.logger.log(level, message, exc_info=exc_info, extra={"data": extra_data})

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info=True, **kwargs):
        """Log an error message; the active exception is attached by default."""
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def critical(self, message: str, exc_info=True, **kwargs):
        self._log(logging.CRITICAL, message, exc_info=exc_info, **kwargs)


def setup_logging(log_level_console=logging.INFO, log_level_file=logging.DEBUG,
                  structured=True, log_file: Optional[str] = "tubelist_backend.log"):
    """Configure logging to console and, when ``log_file`` is set, a rotating file."""
    root_logger = logging.getLogger()

    # Remove any existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    formatter = JSONFormatter() if structured else logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    levels = [log_level_console]
    if log_file:
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(log_level_file)
            root_logger.addHandler(file_handler)
            levels.append(log_level_file)
        except OSError as e:
            print(f"Warning: Could not create log file '{log_file}': {e}", file=sys.stderr)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level_console)
    root_logger.addHandler(console_handler)

    root_logger.setLevel(min(levels))

    # googleapiclient logs every discovery/request at INFO
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)

    logging.getLogger(__name__).info("Logging setup complete.")
