"""Structured logging configuration using structlog.

Logs are JSON lines on stderr; stdout is reserved for the report. A run
binds its scope (namespace, checks) once via ``bind_run_context`` and every
log line emitted during that run carries it.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable

import structlog


def setup_logging(level: str = "info") -> None:
    """Configure structlog for JSON output to stderr."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def bind_run_context(namespace: str | None, checks: Iterable[str]) -> None:
    """Attach the scope of the current validation run to every log line."""
    structlog.contextvars.bind_contextvars(
        scope=namespace or "<all>",
        checks=",".join(checks),
    )


def clear_run_context() -> None:
    structlog.contextvars.unbind_contextvars("scope", "checks")


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
