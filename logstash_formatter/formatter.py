# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Render a :class:`~logstash_formatter.event.LogEvent` as one JSON line.

Output fields, in order::

    thread_name, message, timestamp, level, mdc, container, logger_name,
    source_host[, exception_class][, exception_message][, stacktrace]

The line is compact JSON terminated by a single ``"\\n"``.
"""

from __future__ import annotations

import json
import threading
import time

from logstash_formatter.config import ProcessConfig, default_config
from logstash_formatter.event import LogEvent
from logstash_formatter.message import resolve_message

__all__ = ["LogstashFormatter", "date_format"]

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_MSEC_FORMAT = "%s.%03d"


def date_format(millis: int) -> str:
    """Render epoch milliseconds as ``yyyy-MM-dd HH:mm:ss.SSS`` in local time."""
    seconds, msecs = divmod(millis, 1000)
    return _MSEC_FORMAT % (time.strftime(_DATE_FORMAT, time.localtime(seconds)), msecs)


class LogstashFormatter:
    """Format log events as Logstash JSON lines.

    Instances hold only an immutable :class:`ProcessConfig`, so one formatter
    can be shared across threads.

    Args:
        config: Process configuration.  Defaults to :func:`default_config`.

    """

    def __init__(self, config: ProcessConfig | None = None) -> None:
        """Bind the formatter to a process configuration."""
        self.config = config if config is not None else default_config()

    def format_event(self, event: LogEvent) -> str:
        """Return *event* as one line of compact JSON, newline terminated."""
        fields = self.build_fields(event, self.resolve_message(event))
        self.add_throwable_info(event, fields)
        return json.dumps(fields, separators=(",", ":"), ensure_ascii=False) + "\n"

    def resolve_message(self, event: LogEvent) -> str | None:
        """Resolve the event's message template against its parameters."""
        return resolve_message(event.message, event.parameters)

    def build_fields(self, event: LogEvent, message: str | None) -> dict[str, object]:
        """Build the fields every record carries."""
        return {
            "thread_name": threading.current_thread().name,
            "message": message,
            "timestamp": date_format(event.timestamp),
            "level": event.level,
            "mdc": {},
            "container": self.config.container,
            "logger_name": event.logger_name,
            "source_host": self.config.host_name,
        }

    def add_throwable_info(self, event: LogEvent, fields: dict[str, object]) -> None:
        """Add the error fields of *event* to *fields*, if it carries an error.

        ``exception_class`` is only added when the event has a source class
        name; ``exception_message`` only when the error has a message.
        """
        error = event.error
        if error is None:
            return
        if event.source_class_name:
            fields["exception_class"] = error.type_name
        if error.message is not None:
            fields["exception_message"] = error.message
        fields["stacktrace"] = error.trace
