"""Logging utilities for the records rule engines."""

from __future__ import annotations

import logging
from typing import Any

import structlog


def configure_logging(level: str = "INFO", **context: Any) -> None:
    """Configure structlog with JSON output.

    ``context`` (for example the CLI command) is bound to every event of the run.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=log_level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    if context:
        structlog.contextvars.bind_contextvars(**context)
