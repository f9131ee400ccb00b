"""A small printf supporting the %c %s %p %d %i %u %x %X %% conversions."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from typing import Any, TextIO

__all__ = ["itoa_base", "uitoa_base", "format_printf", "ft_printf"]

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

# Backslash sequences understood inside the format string itself.
_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    ",": ",",
    "\\": "\\",
}

_UINT_MASK = 0xFFFFFFFF
_POINTER_MASK = 0xFFFFFFFFFFFFFFFF


def _check_base(base: int) -> None:
    if not 2 <= base <= len(_DIGITS):
        raise ValueError(f"base must be between 2 and {len(_DIGITS)}, got {base}")


def _digits(n: int, base: int) -> str:
    out: list[str] = []
    while n:
        n, rest = divmod(n, base)
        out.append(_DIGITS[rest])
    return "".join(reversed(out)) or "0"


def _to_int32(value: int) -> int:
    value &= _UINT_MASK
    return value - 0x100000000 if value & 0x80000000 else value


def itoa_base(n: int, base: int) -> str:
    """Write ``n`` in ``base`` with lowercase digits.

    A minus sign is only written in base 10; other bases show the magnitude.
    """
    _check_base(base)
    if n < 0:
        text = _digits(-n, base)
        return f"-{text}" if base == 10 else text
    return _digits(n, base)


def uitoa_base(n: int, base: int) -> str:
    """Write the non-negative ``n`` in ``base`` with lowercase digits."""
    _check_base(base)
    if n < 0:
        raise ValueError(f"value must not be negative, got {n}")
    return _digits(n, base)


def _null_pointer_text() -> str:
    return "0x0" if sys.platform == "darwin" else "(nil)"


def _convert_char(arg: Any) -> str:
    if isinstance(arg, str):
        if len(arg) != 1:
            raise TypeError(f"%c needs a single character, got {arg!r}")
        return arg
    return chr(int(arg) & 0xFF)


def _convert_string(arg: Any) -> str:
    return "(null)" if arg is None else str(arg)


def _convert_pointer(arg: Any) -> str:
    if not arg:
        return _null_pointer_text()
    return "0x" + uitoa_base(int(arg) & _POINTER_MASK, 16)


def _convert_signed(arg: Any) -> str:
    return str(_to_int32(int(arg)))


def _convert_unsigned(arg: Any) -> str:
    return str(int(arg) & _UINT_MASK)


def _convert_hex(arg: Any) -> str:
    return uitoa_base(int(arg) & _UINT_MASK, 16)


def _convert_hex_upper(arg: Any) -> str:
    return _convert_hex(arg).upper()


_CONVERSIONS: dict[str, Callable[[Any], str]] = {
    "c": _convert_char,
    "s": _convert_string,
    "p": _convert_pointer,
    "d": _convert_signed,
    "i": _convert_signed,
    "u": _convert_unsigned,
    "x": _convert_hex,
    "X": _convert_hex_upper,
}


def format_printf(fmt: str, *args: Any) -> str:
    """Return ``fmt`` with its conversions replaced by ``args``.

    Unknown conversions and unknown backslash sequences produce nothing.
    Raises TypeError when there are fewer arguments than conversions.
    """
    values: Iterator[Any] = iter(args)
    chars = iter(fmt)
    parts: list[str] = []
    for ch in chars:
        if ch == "%":
            conv = next(chars, "")
            if conv == "%":
                parts.append("%")
                continue
            handler = _CONVERSIONS.get(conv)
            if handler is None:
                continue
            try:
                arg = next(values)
            except StopIteration:
                raise TypeError(f"not enough arguments for %{conv}") from None
            parts.append(handler(arg))
        elif ch == "\\":
            parts.append(_ESCAPES.get(next(chars, ""), ""))
        else:
            parts.append(ch)
    return "".join(parts)


def ft_printf(fmt: str, *args: Any, stream: TextIO | None = None) -> int:
    """Format and write to ``stream`` (standard output by default).

    Returns the number of characters written.
    """
    text = format_printf(fmt, *args)
    out = sys.stdout if stream is None else stream
    out.write(text)
    return len(text)