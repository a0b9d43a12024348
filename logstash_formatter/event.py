# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Immutable views of a log event and its attached error.

:class:`LogEvent` is what the formatter consumes.  It can be built directly
or adapted from a :class:`logging.LogRecord` with
:meth:`LogEvent.from_record`.
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

__all__ = ["ErrorInfo", "LogEvent"]


def qualified_type_name(exc_type: type[BaseException]) -> str:
    """Return ``module.QualName`` for an exception type.

    The module prefix is dropped for ``builtins`` and ``__main__``, the same
    way the traceback module renders exception headers.
    """
    module = exc_type.__module__
    qualname = exc_type.__qualname__
    if module in ("builtins", "__main__", None):
        return qualname
    return f"{module}.{qualname}"


@dataclass(frozen=True)
class ErrorInfo:
    """An error attached to a log event.

    Attributes:
        type_name: Fully qualified type name of the error.
        message: Error message, or ``None`` when the error carries none.
        trace: Full traceback text including chained causes, ending in a newline.

    """

    type_name: str
    message: str | None
    trace: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> ErrorInfo:
        """Capture an exception, its message and its formatted traceback."""
        tb_exc = traceback.TracebackException.from_exception(exc, capture_locals=False)
        return cls(
            type_name=qualified_type_name(type(exc)),
            message=str(exc) if exc.args else None,
            trace="".join(tb_exc.format()),
        )


@dataclass(frozen=True)
class LogEvent:
    """A single log event, as handed to the formatter.

    Attributes:
        timestamp: Milliseconds since the epoch.
        level: Severity label, e.g. ``"INFO"``.
        message: Raw message template, possibly with placeholders.
        parameters: Ordered template parameters, absent or possibly empty.
        logger_name: Name of the emitting logger.
        source_class_name: Where the event was emitted from.  Only its
            presence matters to the formatter.
        error: Attached error, if any.

    """

    timestamp: int
    level: str
    message: str | None
    parameters: tuple[object, ...] | None = None
    logger_name: str | None = None
    source_class_name: str | None = None
    error: ErrorInfo | None = None

    @classmethod
    def from_record(cls, record: logging.LogRecord) -> LogEvent:
        """Adapt a stdlib :class:`logging.LogRecord`."""
        msg = record.msg if record.msg is None or isinstance(record.msg, str) else str(record.msg)

        parameters: tuple[object, ...] | None
        args = record.args
        if args is None:
            parameters = None
        elif isinstance(args, Mapping):
            parameters = (args,)
        elif isinstance(args, Sequence) and not isinstance(args, str):
            parameters = tuple(args)
        else:
            parameters = (args,)

        error: ErrorInfo | None = None
        if record.exc_info and record.exc_info[1] is not None:
            error = ErrorInfo.from_exception(record.exc_info[1])

        return cls(
            timestamp=int(record.created) * 1000 + int(record.msecs),
            level=record.levelname,
            message=msg,
            parameters=parameters,
            logger_name=record.name,
            source_class_name=record.module or None,
            error=error,
        )
