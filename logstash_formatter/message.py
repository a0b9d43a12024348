# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Message template resolution.

A template is resolved against its parameters in two stages:

1. Positional substitution (``{0}``, ``{1,number,integer}``, ...), tried only
   when the template mentions ``{0`` through ``{3``.
2. printf-style substitution (``%s``, ``%d``, ...), tried only when stage 1
   did not apply and there are parameters.

Neither stage ever raises out of :func:`resolve_message`: a template that
fails to format is returned as it was.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

from logstash_formatter.printf import IllegalFormatError, format_printf

__all__ = ["format_positional", "has_positional_placeholders", "resolve_message"]

_POSITIONAL_MARKERS = ("{0", "{1", "{2", "{3")
_ARGUMENT_INDEX = re.compile(r"[0-9]+")

# Positions inside a ``{index,type,style}`` element
_SEG_INDEX = 0
_SEG_TYPE = 1
_SEG_STYLE = 2


def has_positional_placeholders(template: str) -> bool:
    """Return True when *template* should go through positional substitution."""
    return any(marker in template for marker in _POSITIONAL_MARKERS)


def _format_number(value: object, style: str) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise IllegalFormatError(f"Cannot format {type(value).__name__} as a number")
    if style not in ("", "integer", "percent"):
        raise IllegalFormatError(f"Unsupported number style: {style!r}")
    suffix = ""
    if style == "percent":
        value, suffix = value * 100, "%"
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return ("-\u221e" if value < 0 else "\u221e") + suffix
    if style:
        return f"{round(value):,}" + suffix
    if isinstance(value, int):
        return f"{value:,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def _format_argument(segments: list[str], args: Sequence[object]) -> str:
    index_text = segments[_SEG_INDEX]
    if not _ARGUMENT_INDEX.fullmatch(index_text):
        raise IllegalFormatError(f"Can't parse argument number: {index_text!r}")
    index = int(index_text)
    kind = segments[_SEG_TYPE].strip().lower()
    style = segments[_SEG_STYLE].strip().lower()
    if kind not in ("", "number"):
        raise IllegalFormatError(f"Unsupported format type: {kind!r}")

    if index >= len(args):
        return "{" + index_text + "}"
    value = args[index]
    if value is None:
        return "null"
    if kind == "number":
        return _format_number(value, style)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _format_number(value, "")
    return str(value)


def _apply_pattern(pattern: str, args: Sequence[object]) -> str:
    """Render a positional pattern.

    Single quotes quote literal text and ``''`` is a literal quote, both
    outside and inside format elements.
    """
    out: list[str] = []
    segments: list[str] | None = None
    part = _SEG_INDEX
    in_quote = False
    brace_depth = 0
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if segments is None:
            if ch == "'":
                if pattern[i + 1 : i + 2] == "'":
                    out.append(ch)
                    i += 1
                else:
                    in_quote = not in_quote
            elif ch == "{" and not in_quote:
                segments = ["", "", ""]
                part = _SEG_INDEX
            else:
                out.append(ch)
        elif in_quote:
            segments[part] += ch
            if ch == "'":
                in_quote = False
        elif ch == ",":
            if part < _SEG_STYLE:
                part += 1
            else:
                segments[part] += ch
        elif ch == "{":
            brace_depth += 1
            segments[part] += ch
        elif ch == "}":
            if brace_depth == 0:
                out.append(_format_argument(segments, args))
                segments = None
            else:
                brace_depth -= 1
                segments[part] += ch
        elif ch == " ":
            # leading spaces of the type are skipped
            if part != _SEG_TYPE or segments[_SEG_TYPE]:
                segments[part] += ch
        else:
            if ch == "'":
                in_quote = True
            segments[part] += ch
        i += 1

    if segments is not None:
        raise IllegalFormatError("Unmatched braces in the pattern")
    return "".join(out)


def format_positional(template: str, parameters: Sequence[object]) -> tuple[str, bool]:
    """Substitute ``{n}`` placeholders.

    Returns:
        ``(text, applied)``.  ``applied`` is False, and ``text`` is the
        template unchanged, when the template has no positional
        placeholders or does not parse.

    """
    if not has_positional_placeholders(template):
        return template, False
    try:
        return _apply_pattern(template, parameters), True
    except IllegalFormatError:
        return template, False


def resolve_message(template: str | None, parameters: Sequence[object] | None) -> str | None:
    """Resolve a message template against its parameters.

    Args:
        template: Raw template, or ``None``.
        parameters: Ordered parameters, ``None`` or empty for a plain message.

    Returns:
        The resolved text.  The template itself when there are no
        parameters or when neither stage can format it.

    """
    if template is None or not parameters:
        return template
    text, applied = format_positional(template, parameters)
    if applied:
        return text
    try:
        return format_printf(text, parameters)
    except IllegalFormatError:
        return text
