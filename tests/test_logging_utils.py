# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Tests for logstash_formatter.logging_utils: stdlib logging integration."""

from __future__ import annotations

import io
import json
import logging
import logging.config
import sys

from logstash_formatter.config import ProcessConfig
from logstash_formatter.logging_utils import LogstashJsonFormatter, configure_logging


def _record(msg: str, args: tuple[object, ...] = (), exc_info: object = None) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=exc_info,  # type: ignore[arg-type]
    )


# ---------------------------------------------------------------------------
# LogstashJsonFormatter
# ---------------------------------------------------------------------------


class TestLogstashJsonFormatter:
    """Tests for the logging.Formatter subclass."""

    def test_valid_json_line(self, process_config: ProcessConfig) -> None:
        """Output is one JSON line with the standard fields."""
        output = LogstashJsonFormatter(process_config).format(_record("test message"))
        assert output.endswith("\n")
        parsed = json.loads(output)
        assert parsed["level"] == "INFO"
        assert parsed["logger_name"] == "test"
        assert parsed["message"] == "test message"
        assert parsed["container"] == "foo"
        assert parsed["source_host"] == "test-host"
        assert parsed["mdc"] == {}

    def test_percent_args(self, process_config: ProcessConfig) -> None:
        """Classic ``%s`` logging arguments are substituted."""
        output = LogstashJsonFormatter(process_config).format(_record("hello %s", ("world",)))
        assert json.loads(output)["message"] == "hello world"

    def test_positional_args(self, process_config: ProcessConfig) -> None:
        """``{0}`` placeholders are substituted."""
        output = LogstashJsonFormatter(process_config).format(_record("hello {0}", ("world",)))
        assert json.loads(output)["message"] == "hello world"

    def test_bad_template_does_not_raise(self, process_config: ProcessConfig) -> None:
        """A template that does not fit its arguments is logged verbatim."""
        output = LogstashJsonFormatter(process_config).format(_record("%d apples", ("many",)))
        assert json.loads(output)["message"] == "%d apples"

    def test_exception_without_source(self, process_config: ProcessConfig) -> None:
        """Records without a source file omit exception_class."""
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()
        parsed = json.loads(LogstashJsonFormatter(process_config).format(_record("failed", exc_info=exc_info)))
        assert "exception_class" not in parsed
        assert parsed["exception_message"] == "test error"
        assert "ValueError: test error" in parsed["stacktrace"]

    def test_none_exc_info_tuple_excluded(self, process_config: ProcessConfig) -> None:
        """exc_info=(None, None, None) should not produce error fields."""
        parsed = json.loads(LogstashJsonFormatter(process_config).format(_record("m", exc_info=(None, None, None))))
        assert "stacktrace" not in parsed

    def test_dict_config_factory(self) -> None:
        """The formatter can be built from a dictConfig formatter entry."""
        configurator = logging.config.DictConfigurator({"version": 1})
        formatter = configurator.configure_formatter({"()": "logstash_formatter.LogstashJsonFormatter"})
        assert isinstance(formatter, LogstashJsonFormatter)
        parsed = json.loads(formatter.format(_record("configured %s", ("ok",))))
        assert parsed["message"] == "configured ok"


# ---------------------------------------------------------------------------
# configure_logging
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    """Tests for root logger wiring."""

    def test_lines_written(self, restore_root_logger: logging.Logger, process_config: ProcessConfig) -> None:
        """Each record becomes exactly one line on the stream."""
        stream = io.StringIO()
        handler = configure_logging(logging.INFO, stream=stream, config=process_config)
        assert handler in restore_root_logger.handlers

        log = logging.getLogger("logstash_formatter.tests.configure")
        log.info("first %s", "line")
        log.debug("filtered out")
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            log.exception("second")

        lines = stream.getvalue().splitlines()
        assert len(lines) == 2
        first, second = (json.loads(line) for line in lines)
        assert first["message"] == "first line"
        assert second["level"] == "ERROR"
        assert second["exception_class"] == "RuntimeError"
        assert second["exception_message"] == "boom"
        assert stream.getvalue().endswith("}\n")
