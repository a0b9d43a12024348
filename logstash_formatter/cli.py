# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for the Logstash formatter.

Provides ``format`` to render one event and ``config`` to show the
resolved process configuration.

Usage::

    logstash-formatter format "user {0} logged in" alice --level INFO
    logstash-formatter format "%d items" 3 --tags web,eu
    logstash-formatter config

"""

from __future__ import annotations

import json
import time
from typing import Annotated

import typer

from logstash_formatter.config import ProcessConfig, parse_tags
from logstash_formatter.event import LogEvent
from logstash_formatter.formatter import LogstashFormatter

app = typer.Typer(
    name="logstash-formatter",
    help="Render log events as Logstash JSON lines.",
    add_completion=False,
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _coerce_param(value: str) -> object:
    """Turn a CLI parameter into an int or float when it looks like one."""
    for kind in (int, float):
        try:
            return kind(value)
        except ValueError:
            continue
    return value


def _resolve_config(tags: str | None, host: str | None) -> ProcessConfig:
    """Build the process config, applying command-line overrides."""
    config = ProcessConfig.from_env()
    if tags is not None:
        config = ProcessConfig(tags=parse_tags(tags), host_name=config.host_name)
    if host is not None:
        if not host:
            raise typer.BadParameter("--host must not be empty")
        config = ProcessConfig(tags=config.tags, host_name=host)
    return config


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("format")
def format_command(
    message: Annotated[str, typer.Argument(help="Message template")],
    params: Annotated[list[str] | None, typer.Argument(help="Template parameters")] = None,
    level: Annotated[str, typer.Option("--level", "-l", help="Severity label")] = "INFO",
    logger: Annotated[str | None, typer.Option("--logger", "-n", help="Logger name")] = None,
    tags: Annotated[str | None, typer.Option("--tags", "-t", help="Comma separated tags")] = None,
    host: Annotated[str | None, typer.Option("--host", help="Override the source host")] = None,
    raw: Annotated[bool, typer.Option("--raw", help="Pass parameters as strings")] = False,
) -> None:
    """Render one log event and print it."""
    config = _resolve_config(tags, host)
    parameters = tuple(params if raw else [_coerce_param(p) for p in params]) if params else None
    event = LogEvent(
        timestamp=time.time_ns() // 1_000_000,
        level=level,
        message=message,
        parameters=parameters,
        logger_name=logger,
    )
    typer.echo(LogstashFormatter(config).format_event(event), nl=False)


@app.command("config")
def config_command(
    tags: Annotated[str | None, typer.Option("--tags", "-t", help="Comma separated tags")] = None,
) -> None:
    """Print the resolved process configuration as JSON."""
    config = _resolve_config(tags, None)
    typer.echo(
        json.dumps(
            {"tags": list(config.tags), "container": config.container, "source_host": config.host_name},
            indent=2,
        )
    )


def main() -> None:
    """Console script entry point."""
    app()
