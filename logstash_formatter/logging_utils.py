# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Stdlib :mod:`logging` integration.

Provides :class:`LogstashJsonFormatter`, a :class:`logging.Formatter`
subclass that renders each record as a single Logstash JSON line, and
:func:`configure_logging` to install it on the root logger.

Usable from :func:`logging.config.dictConfig`::

    "formatters": {"logstash": {"()": "logstash_formatter.LogstashJsonFormatter"}}

"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from logstash_formatter.config import ProcessConfig
from logstash_formatter.event import LogEvent
from logstash_formatter.formatter import LogstashFormatter

__all__ = ["LogstashJsonFormatter", "configure_logging"]


class LogstashJsonFormatter(logging.Formatter):
    """JSON formatter producing Logstash lines.

    The record's ``msg`` and ``args`` are resolved by the two-stage message
    resolver rather than by :meth:`logging.LogRecord.getMessage`, so both
    ``{0}`` and ``%s`` templates work.  The returned line keeps its
    trailing newline.
    """

    def __init__(self, config: ProcessConfig | None = None) -> None:
        """Create a formatter bound to *config* (default: the process config)."""
        super().__init__()
        self.logstash = LogstashFormatter(config)

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a single-line JSON string."""
        return self.logstash.format_event(LogEvent.from_record(record))


def configure_logging(
    level: int = logging.INFO,
    stream: TextIO | None = None,
    config: ProcessConfig | None = None,
) -> logging.StreamHandler[TextIO]:
    """Send root logger output to *stream* as Logstash JSON lines.

    Args:
        level: Root logger level.
        stream: Destination, ``sys.stdout`` by default.
        config: Process configuration for the formatter.

    Returns:
        The installed handler.

    """
    handler: logging.StreamHandler[TextIO] = logging.StreamHandler(stream if stream is not None else sys.stdout)
    # Lines already end with "\n"
    handler.terminator = ""
    handler.setFormatter(LogstashJsonFormatter(config))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)
    return handler
