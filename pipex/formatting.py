"""Small printf-style formatter and the line printer used for diagnostics."""

from __future__ import annotations

import operator
import sys
from typing import Any, Callable

_INT_BITS = 32
_LONG_BITS = 64


def _to_signed_int(value: Any) -> int:
    number = operator.index(value) % (1 << _INT_BITS)
    if number >= 1 << (_INT_BITS - 1):
        number -= 1 << _INT_BITS
    return number


def _to_unsigned_int(value: Any) -> int:
    return operator.index(value) % (1 << _INT_BITS)


def _format_char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError("%c expects a single character")
        return value
    return chr(operator.index(value) % 256)


def _format_string(value: Any) -> str:
    return "(null)" if value is None else str(value)


def _format_pointer(value: Any) -> str:
    if value is None:
        return "(nil)"
    address = operator.index(value) % (1 << _LONG_BITS)
    if address == 0:
        return "(nil)"
    return f"0x{address:x}"


def _format_signed(value: Any) -> str:
    return str(_to_signed_int(value))


def _format_unsigned(value: Any) -> str:
    return str(_to_unsigned_int(value))


def _format_hex_lower(value: Any) -> str:
    return f"{_to_unsigned_int(value):x}"


def _format_hex_upper(value: Any) -> str:
    return f"{_to_unsigned_int(value):X}"


_CONVERSIONS: dict[str, Callable[[Any], str]] = {
    "c": _format_char,
    "s": _format_string,
    "p": _format_pointer,
    "d": _format_signed,
    "i": _format_signed,
    "u": _format_unsigned,
    "x": _format_hex_lower,
    "X": _format_hex_upper,
}


def format_message(template: str, *args: Any) -> str:
    """Expand the %c %s %p %d %i %u %x %X and %% conversions of *template*.

    An unknown conversion character is dropped together with its ``%``.
    Raises ValueError when the template needs more arguments than given.
    """
    pieces: list[str] = []
    values = iter(args)
    chars = iter(template)
    for char in chars:
        if char != "%":
            pieces.append(char)
            continue
        spec = next(chars, "")
        if spec == "%":
            pieces.append("%")
            continue
        convert = _CONVERSIONS.get(spec)
        if convert is None:
            continue
        try:
            value = next(values)
        except StopIteration:
            raise ValueError(
                f"not enough arguments for format {template!r}"
            ) from None
        pieces.append(convert(value))
    return "".join(pieces)


def println(template: str, *args: Any) -> int:
    """Write a formatted line to standard output and return its length.

    A template without any ``%`` is written after the newline rather than
    before it, and the returned count leaves that newline out.
    """
    out = sys.stdout
    if "%" not in template:
        out.write("\n" + template)
        out.flush()
        return len(template)
    message = format_message(template, *args)
    out.write(message + "\n")
    out.flush()
    return len(message) + 1