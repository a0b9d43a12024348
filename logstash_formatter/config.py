# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Process-wide formatter configuration.

The tag list and the local host name are resolved once and then shared,
read-only, by every formatter in the process.

CONFIGURATION
-------------
LOGSTASH_FORMATTER_TAGS : comma separated tag list, default ``UNKNOWN``.
    Only the first tag is emitted (as ``container``); the others are kept
    on :class:`ProcessConfig` and reserved for future fields.

"""

from __future__ import annotations

import logging
import os
import socket
import threading
from collections.abc import Mapping
from dataclasses import dataclass

from logstash_formatter._debug import debug_enabled, get_debug_log

__all__ = [
    "DEFAULT_TAGS",
    "TAGS_ENV_VAR",
    "UNKNOWN_CONTAINER",
    "UNKNOWN_HOST",
    "ProcessConfig",
    "default_config",
    "parse_tags",
    "resolve_host_name",
]

_logger = logging.getLogger("logstash_formatter.config")

TAGS_ENV_VAR = "LOGSTASH_FORMATTER_TAGS"
DEFAULT_TAGS = "UNKNOWN"
UNKNOWN_CONTAINER = "UNKNOWN"
UNKNOWN_HOST = "unknown-host"


def parse_tags(raw: str) -> tuple[str, ...]:
    """Split a comma separated tag string.

    Entries are not stripped.  Trailing empty entries are dropped, so
    ``"foo,bar,"`` gives ``("foo", "bar")`` and ``",,"`` gives ``()``.
    """
    tags = raw.split(",")
    while tags and not tags[-1]:
        tags.pop()
    # "" splits to [""]; keep the single empty tag like a one-element list
    if not tags and not raw:
        return ("",)
    return tuple(tags)


def resolve_host_name() -> str:
    """Return the local host name, or ``unknown-host`` if it cannot be resolved."""
    try:
        name = socket.gethostname()
    except OSError as e:
        _logger.warning("Host name resolution failed, using %r: %s", UNKNOWN_HOST, e)
        return UNKNOWN_HOST
    if not name:
        _logger.warning("Host name resolution returned nothing, using %r", UNKNOWN_HOST)
        return UNKNOWN_HOST
    return name


@dataclass(frozen=True)
class ProcessConfig:
    """Immutable per-process settings read by every formatter.

    Attributes:
        tags: Ordered tag list.  Only the first entry is surfaced today.
        host_name: Resolved local host name, emitted as ``source_host``.

    """

    tags: tuple[str, ...] = (DEFAULT_TAGS,)
    host_name: str = UNKNOWN_HOST

    @property
    def container(self) -> str:
        """First tag, or ``UNKNOWN`` when no tags are configured."""
        return self.tags[0] if self.tags else UNKNOWN_CONTAINER

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ProcessConfig:
        """Build a config from the environment and the local host identity."""
        env = os.environ if environ is None else environ
        tags = parse_tags(env.get(TAGS_ENV_VAR, DEFAULT_TAGS))
        config = cls(tags=tags, host_name=resolve_host_name())
        if debug_enabled():
            get_debug_log("config").debug("resolved config", tags=config.tags, host_name=config.host_name)
        return config


_default_config: ProcessConfig | None = None
_default_config_lock = threading.Lock()


def default_config() -> ProcessConfig:
    """Return the process-wide config, resolving it on first use."""
    global _default_config
    config = _default_config
    if config is None:
        with _default_config_lock:
            if _default_config is None:
                _default_config = ProcessConfig.from_env()
            config = _default_config
    return config
