# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Strict printf-style substitution.

Python's ``%`` operator is lenient in places where log templates written
for other runtimes expect a failure (``"%0.5s" % ("hi",)`` renders ``"hi"``)
and strict where they expect leniency (surplus arguments raise).  This module
implements the stricter dialect:

- ``%[index$][flags][width][.precision]conversion``
- Conversions ``b B h H s S c C d o x X e E f g G % n``.  Upper-case
  variants upper-case the rendered text.
- Flags ``-`` ``#`` ``+`` (space) ``0`` ``,`` ``(``, plus ``<`` to reuse the
  previous argument.
- Any malformed or mismatched specifier raises :class:`IllegalFormatError`.
- Surplus arguments are ignored.

"""

from __future__ import annotations

import math
import re
import zlib
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeGuard

__all__ = ["IllegalFormatError", "format_printf"]

_SPECIFIER = re.compile(r"%(\d+\$)?([-#+ 0,(<]*)?(\d+)?(\.\d+)?([tT])?([a-zA-Z%])")

_GENERAL = frozenset("bBhHsS")
_CHARACTER = frozenset("cC")
_INTEGRAL = frozenset("doxX")
_FLOATING = frozenset("eEfgG")
_TEXT = frozenset("%n")

_LONG_MASK = (1 << 64) - 1
_DEFAULT_FLOAT_PRECISION = 6


class IllegalFormatError(ValueError):
    """A printf-style template and its arguments do not fit together."""


@dataclass(frozen=True)
class _Specifier:
    """One parsed ``%`` specifier."""

    text: str
    index: int | None
    flags: str
    width: int | None
    precision: int | None
    conversion: str

    @property
    def relative(self) -> bool:
        """Whether the specifier reuses the previous argument (``<``)."""
        return "<" in self.flags

    def has(self, flag: str) -> bool:
        """Return True when *flag* is present."""
        return flag in self.flags


# ---------------------------------------------------------------------------
# Parsing and validation
# ---------------------------------------------------------------------------


def _parse(template: str) -> list[str | _Specifier]:
    """Split *template* into literal text and validated specifiers."""
    parts: list[str | _Specifier] = []
    pos = 0
    while pos < len(template):
        start = template.find("%", pos)
        if start < 0:
            parts.append(template[pos:])
            break
        if start > pos:
            parts.append(template[pos:start])
        match = _SPECIFIER.match(template, start)
        if match is None:
            bad = template[start + 1 : start + 2] or "%"
            raise IllegalFormatError(f"Unknown format conversion: {bad!r}")
        index_text, flags, width_text, precision_text, date_prefix, conversion = match.groups()
        if date_prefix:
            raise IllegalFormatError(f"Date/time conversion not supported: {match.group(0)!r}")
        spec = _Specifier(
            text=match.group(0),
            index=int(index_text[:-1]) if index_text else None,
            flags=flags or "",
            width=int(width_text) if width_text else None,
            precision=int(precision_text[1:]) if precision_text else None,
            conversion=conversion,
        )
        _validate(spec)
        parts.append(spec)
        pos = match.end()
    return parts


def _bad_flags(spec: _Specifier, forbidden: str) -> None:
    for flag in forbidden:
        if spec.has(flag):
            raise IllegalFormatError(f"Flag {flag!r} does not apply to conversion {spec.conversion!r} in {spec.text!r}")


def _check_width_flags(spec: _Specifier, needs_width: str) -> None:
    if spec.width is None:
        for flag in needs_width:
            if spec.has(flag):
                raise IllegalFormatError(f"Flag {flag!r} requires a width in {spec.text!r}")


def _check_numeric(spec: _Specifier) -> None:
    _check_width_flags(spec, "-0")
    if (spec.has("+") and spec.has(" ")) or (spec.has("-") and spec.has("0")):
        raise IllegalFormatError(f"Illegal flag combination in {spec.text!r}")


def _no_precision(spec: _Specifier) -> None:
    if spec.precision is not None:
        raise IllegalFormatError(f"Precision not allowed in {spec.text!r}")


def _validate(spec: _Specifier) -> None:
    """Reject specifiers whose flags, width or precision do not fit the conversion."""
    conv = spec.conversion
    flags = spec.flags.replace("<", "")
    if len(set(flags)) != len(flags):
        raise IllegalFormatError(f"Duplicate flags in {spec.text!r}")
    if spec.index == 0:
        raise IllegalFormatError(f"Argument index must start at 1 in {spec.text!r}")

    if conv in _GENERAL:
        _bad_flags(spec, "#")
        _check_width_flags(spec, "-")
        _bad_flags(spec, "+ 0,(")
    elif conv in _CHARACTER:
        _no_precision(spec)
        _bad_flags(spec, "#+ 0,(")
        _check_width_flags(spec, "-")
    elif conv in _INTEGRAL:
        _check_numeric(spec)
        _no_precision(spec)
        if conv == "d":
            _bad_flags(spec, "#")
        else:
            _bad_flags(spec, ",+ (")
    elif conv in _FLOATING:
        _check_numeric(spec)
        if conv in "eE":
            _bad_flags(spec, ",")
        elif conv in "gG":
            _bad_flags(spec, "#")
    elif conv == "%":
        _no_precision(spec)
        if spec.flags not in ("", "-"):
            raise IllegalFormatError(f"Illegal flags {spec.flags!r} in {spec.text!r}")
        _check_width_flags(spec, "-")
    elif conv == "n":
        if spec.width is not None or spec.precision is not None or spec.flags:
            raise IllegalFormatError(f"Line separator takes no flags, width or precision: {spec.text!r}")
    else:
        raise IllegalFormatError(f"Unknown format conversion: {conv!r}")


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _justify(spec: _Specifier, text: str) -> str:
    if spec.width is None or len(text) >= spec.width:
        return text
    if spec.has("-"):
        return text.ljust(spec.width)
    return text.rjust(spec.width)


def _finish(spec: _Specifier, text: str) -> str:
    if spec.conversion.isupper():
        text = text.upper()
    return _justify(spec, text)


def _signed(spec: _Specifier, negative: bool, magnitude: str, *, zero_pad: bool = True) -> str:
    """Apply sign flags and zero padding around an unsigned *magnitude*."""
    if negative:
        prefix, suffix = ("(", ")") if spec.has("(") else ("-", "")
    elif spec.has("+"):
        prefix, suffix = "+", ""
    elif spec.has(" "):
        prefix, suffix = " ", ""
    else:
        prefix, suffix = "", ""
    if zero_pad and spec.has("0") and spec.width is not None:
        magnitude = magnitude.rjust(spec.width - len(prefix) - len(suffix), "0")
    return prefix + magnitude + suffix


def _is_integral(value: object) -> TypeGuard[int]:
    return isinstance(value, int) and not isinstance(value, bool)


def _render_general(spec: _Specifier, arg: object) -> str:
    conv = spec.conversion.lower()
    if conv == "b":
        text = "false" if arg is None or arg is False else "true"
    elif arg is None:
        text = "null"
    elif conv == "h":
        # CRC-32 of the text form, stable across processes and defined for unhashable values
        text = format(zlib.crc32(str(arg).encode("utf-8")), "x")
    else:
        text = str(arg)
    if spec.precision is not None:
        text = text[: spec.precision]
    return _finish(spec, text)


def _render_character(spec: _Specifier, arg: object) -> str:
    if arg is None:
        return _finish(spec, "null")
    if isinstance(arg, str) and len(arg) == 1:
        return _finish(spec, arg)
    if _is_integral(arg):
        if not 0 <= arg <= 0x10FFFF:
            raise IllegalFormatError(f"Illegal code point {arg:#x} for {spec.text!r}")
        return _finish(spec, chr(arg))
    raise IllegalFormatError(f"{spec.text!r} cannot format {type(arg).__name__}")


def _render_integral(spec: _Specifier, arg: object) -> str:
    if arg is None:
        return _finish(spec, "null")
    if not _is_integral(arg):
        raise IllegalFormatError(f"{spec.text!r} cannot format {type(arg).__name__}")
    conv = spec.conversion.lower()
    if conv == "d":
        magnitude = f"{abs(arg):,}" if spec.has(",") else str(abs(arg))
        return _finish(spec, _signed(spec, arg < 0, magnitude))

    value = arg & _LONG_MASK if arg < 0 else arg
    digits = format(value, "o" if conv == "o" else "x")
    prefix = ""
    if spec.has("#"):
        prefix = "0" if conv == "o" else "0x"
    if spec.has("0") and spec.width is not None:
        digits = digits.rjust(spec.width - len(prefix), "0")
    return _finish(spec, prefix + digits)


def _render_floating(spec: _Specifier, arg: object) -> str:
    if arg is None:
        return _finish(spec, "null")
    if isinstance(arg, bool) or not isinstance(arg, (int, float)):
        raise IllegalFormatError(f"{spec.text!r} cannot format {type(arg).__name__}")
    value = float(arg)
    negative = math.copysign(1.0, value) < 0
    if math.isnan(value):
        return _finish(spec, "NaN")
    if math.isinf(value):
        return _finish(spec, _signed(spec, negative, "Infinity", zero_pad=False))

    conv = spec.conversion.lower()
    precision = _DEFAULT_FLOAT_PRECISION if spec.precision is None else spec.precision
    alternate = "#" if spec.has("#") else ""
    grouping = "," if spec.has(",") else ""
    if conv == "f":
        magnitude = format(abs(value), f"{alternate}{grouping}.{precision}f")
    elif conv == "e":
        magnitude = format(abs(value), f"{alternate}.{precision}e")
    else:
        # Trailing zeros are kept, so always use the alternate form.
        magnitude = format(abs(value), f"#{grouping}.{max(precision, 1)}g")
    return _finish(spec, _signed(spec, negative, magnitude))


def _render_text(spec: _Specifier) -> str:
    if spec.conversion == "n":
        return "\n"
    return _justify(spec, "%")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_printf(template: str, args: Sequence[object]) -> str:
    """Substitute *args* into *template* using printf-style specifiers.

    Args:
        template: Text with ``%``-specifiers.
        args: Positional arguments; surplus arguments are ignored.

    Returns:
        The rendered text.

    Raises:
        IllegalFormatError: If a specifier is malformed, does not fit its
            argument, or refers to a missing argument.

    """
    out: list[str] = []
    ordinary = 0
    last: int | None = None
    for part in _parse(template):
        if isinstance(part, str):
            out.append(part)
            continue
        if part.conversion in _TEXT:
            out.append(_render_text(part))
            continue

        if part.index is not None:
            index = part.index - 1
        elif part.relative:
            if last is None:
                raise IllegalFormatError(f"No previous argument for {part.text!r}")
            index = last
        else:
            index = ordinary
            ordinary += 1
        if index >= len(args):
            raise IllegalFormatError(f"Missing argument for {part.text!r}")
        last = index
        arg = args[index]

        if part.conversion in _GENERAL:
            out.append(_render_general(part, arg))
        elif part.conversion in _CHARACTER:
            out.append(_render_character(part, arg))
        elif part.conversion in _INTEGRAL:
            out.append(_render_integral(part, arg))
        else:
            out.append(_render_floating(part, arg))
    return "".join(out)
