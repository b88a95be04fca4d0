from __future__ import annotations

import structlog

from gurustatus.logging import configure_logging


def test_configure_logging_binds_run_context():
    configure_logging("DEBUG", command="audit")
    try:
        assert structlog.contextvars.get_contextvars() == {"command": "audit"}

        configure_logging("INFO")
        assert structlog.contextvars.get_contextvars() == {}
    finally:
        structlog.contextvars.clear_contextvars()
