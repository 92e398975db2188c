"""structlog setup shared by the CLI and the viewer."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, Optional

import structlog

# File opened by the last setup_logging(log_file=...) call
_log_stream: Optional[IO[str]] = None


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """Configure structlog to emit JSON lines to stderr or to log_file.

    Calling it again replaces the previous configuration and closes the log
    file it opened.
    """
    global _log_stream

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    previous = _log_stream
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _log_stream = log_file.open("a", encoding="utf-8")
        factory = structlog.WriteLoggerFactory(file=_log_stream)
    else:
        _log_stream = None
        factory = structlog.PrintLoggerFactory(file=sys.stderr)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=factory,
        cache_logger_on_first_use=True,
    )

    if previous is not None:
        previous.close()


def get_logger(name: str = "session_usage"):
    return structlog.get_logger(name)
