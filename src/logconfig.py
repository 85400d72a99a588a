"""Structured logging configuration using ``structlog``.

Call :func:`setup_logging` once at startup. Log output goes to stderr so that
JSON results written to stdout stay machine-readable.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _stderr_logger(*_args: object) -> structlog.PrintLogger:
    """Print to the ``sys.stderr`` current at call time, not at configure time."""
    return structlog.PrintLogger(file=sys.stderr)


def setup_logging(log_level: str = "WARNING") -> None:
    """Configure structlog and the standard-library root logger.

    Args:
        log_level: Minimum severity level (e.g. ``"DEBUG"``, ``"INFO"``).
    """
    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


__all__ = ["setup_logging"]
