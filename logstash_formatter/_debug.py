# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Opt-in diagnostics for the formatter's own internals.

Set ``LOGSTASH_FORMATTER_DEBUG=1`` to get a structlog logger on stderr that
traces configuration resolution.  The logger is never used on the
per-record formatting path.
"""

from __future__ import annotations

import os
import sys

import structlog

# Debug logging - enable with LOGSTASH_FORMATTER_DEBUG=1
DEBUG_ENV_VAR = "LOGSTASH_FORMATTER_DEBUG"

_debug_log: structlog.stdlib.BoundLogger | None = None


def debug_enabled() -> bool:
    """Return True when the debug environment variable is set."""
    return os.environ.get(DEBUG_ENV_VAR, "").lower() in ("1", "true", "yes")


def get_debug_log(component: str) -> structlog.stdlib.BoundLogger:
    """Get or create the debug logger, configured to write to stderr."""
    global _debug_log
    if _debug_log is None:
        structlog.configure(
            processors=[
                structlog.processors.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.dev.ConsoleRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(0),
            logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        )
        _debug_log = structlog.get_logger()
    return _debug_log.bind(component=component)
