"""Structured logging configuration using structlog.

Nothing is configured on import. ``chartplan.pipeline.analyze`` calls
``setup_logging`` with the configured level unless the caller has already
configured structlog. Output always goes to stderr.
"""

from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(level: str = "info", json_output: bool = True) -> None:
    """Configure structlog output to stderr.

    Args:
        level:       Minimum level (debug, info, warning, error).
        json_output: JSON lines when True, human-readable console lines otherwise.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # Module-level loggers follow a later reconfiguration.
        cache_logger_on_first_use=False,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a chartplan component name, e.g. ``graph.builder``."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
