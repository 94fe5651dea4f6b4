"""
logging_config.py - Centralized logging configuration.

Every module gets its logger through get_logger(); the HTTP entrypoint and
the CLI call setup_logging() once at startup.
"""

from __future__ import annotations

import logging
import os
import sys

TRUTHY = {"1", "true", "yes", "on"}


def setup_logging(level: int = logging.INFO, json_format: bool = False) -> None:
    """Configure root logger with consistent formatting.

    Args:
        level: Logging level.
        json_format: If True, emit JSON-like log lines.
    """
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    if json_format:
        formatter = logging.Formatter(
            '{"timestamp":"%(asctime)s","level":"%(levelname)s",'
            '"module":"%(name)s","message":"%(message)s"}',
            datefmt="%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(name)-20s] %(levelname)-7s %(message)s",
            datefmt="%H:%M:%S",
        )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root.addHandler(handler)


def setup_logging_from_env() -> None:
    """Configure logging from LOG_LEVEL / LOG_JSON environment variables."""
    level_name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    json_format = os.getenv("LOG_JSON", "").strip().lower() in TRUTHY
    setup_logging(level=level, json_format=json_format)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger."""
    return logging.getLogger(name)
