"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Optional, TextIO

import structlog
from structlog.types import FilteringBoundLogger

# Open log file handles by path, reused across reconfiguration
_log_files: dict[str, TextIO] = {}


def _open_log_file(path: str) -> TextIO:
    handle = _log_files.get(path)
    if handle is None or handle.closed:
        handle = open(path, "a", encoding="utf-8")
        _log_files[path] = handle
    return handle


def close_log_files() -> None:
    """Close every log file opened by configure_logging."""
    while _log_files:
        _, handle = _log_files.popitem()
        handle.close()


def configure_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Configure structlog for the application.

    Args:
        log_file: Optional path to log file. If None, logs to stderr only.
        verbose: If True, enable debug level logging.
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    output: TextIO
    if log_file:
        # JSON lines for file logging
        processors.append(structlog.processors.JSONRenderer())
        output = _open_log_file(log_file)
    else:
        processors.append(structlog.dev.ConsoleRenderer())
        output = sys.stderr

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        Configured structlog logger.
    """
    return structlog.get_logger(name)
