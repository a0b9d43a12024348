"""Shared test fixtures for logstash-formatter tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

import logstash_formatter.config as config_module
from logstash_formatter.config import ProcessConfig
from logstash_formatter.formatter import LogstashFormatter

TEST_HOST = "test-host"


def _raise_cause() -> None:
    raise Exception("This is the cause")


def _raise_exception() -> None:
    try:
        _raise_cause()
    except Exception as cause:
        raise Exception("That is an exception") from cause


@pytest.fixture
def process_config() -> ProcessConfig:
    """Config with tags ``foo,bar`` and a fixed host name."""
    return ProcessConfig(tags=("foo", "bar"), host_name=TEST_HOST)


@pytest.fixture
def formatter(process_config: ProcessConfig) -> LogstashFormatter:
    """Formatter bound to :func:`process_config`."""
    return LogstashFormatter(process_config)


@pytest.fixture
def chained_exception() -> Exception:
    """An exception raised from a cause, with a traceback on both."""
    try:
        _raise_exception()
    except Exception as e:
        return e
    raise AssertionError("unreachable")


@pytest.fixture
def fresh_default_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Forget the cached process-wide config for the duration of a test."""
    monkeypatch.setattr(config_module, "_default_config", None)
    yield


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
