# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Format log events as line-delimited Logstash JSON."""

from logstash_formatter.config import ProcessConfig, default_config
from logstash_formatter.event import ErrorInfo, LogEvent
from logstash_formatter.formatter import LogstashFormatter, date_format
from logstash_formatter.logging_utils import LogstashJsonFormatter, configure_logging
from logstash_formatter.message import format_positional, resolve_message
from logstash_formatter.printf import IllegalFormatError, format_printf

__all__ = [
    "ErrorInfo",
    "IllegalFormatError",
    "LogEvent",
    "LogstashFormatter",
    "LogstashJsonFormatter",
    "ProcessConfig",
    "configure_logging",
    "date_format",
    "default_config",
    "format_positional",
    "format_printf",
    "resolve_message",
]
