"""Reading XPM pixmaps, from string lists or files, into images."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator

from .colors import text_to_rgb
from .image import Image, new_image

__all__ = [
    "XpmError",
    "str_str",
    "str_str_quoted",
    "split_words",
    "strip_comments",
    "parse_xpm",
    "xpm_to_image",
    "xpm_file_to_image",
]

_TRANSPARENT = 0xFF000000
_WORD_SEPARATORS = re.compile(r"[ \t]+")
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read."""


def _check_find(find: str) -> None:
    if not find:
        raise ValueError("search string must not be empty")


def str_str(text: str, find: str, length: int) -> int:
    """Return the position of ``find`` in ``text``, or -1.

    Gives -1 at once when ``find`` is longer than ``length``.
    """
    _check_find(find)
    if len(find) > length:
        return -1
    return text.find(find)


def str_str_quoted(text: str, find: str, length: int) -> int:
    """Like str_str, but ignore matches inside double quotes."""
    _check_find(find)
    if len(find) > length:
        return -1
    quoted = False
    for pos, ch in enumerate(text[: len(text) - len(find) + 1]):
        if ch == '"':
            quoted = not quoted
        if not quoted and text.startswith(find, pos):
            return pos
    return -1


def split_words(text: str) -> list[str]:
    """Split on runs of spaces and tabs."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _blank(text: str, start: int, count: int) -> str:
    end = min(len(text), start + count)
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace C comments outside quoted strings with spaces.

    The text keeps its length; a line comment takes its newline with it.
    """
    while (begin := str_str_quoted(text, "/*", len(text))) != -1:
        end = str_str(text[begin + 2:], "*/", len(text) - begin - 2)
        text = _blank(text, begin, end + 4)
    while (begin := str_str_quoted(text, "//", len(text))) != -1:
        end = str_str(text[begin + 2:], "\n", len(text) - begin - 2)
        text = _blank(text, begin, end + 3)
    return text


def _atoi(word: str) -> int:
    match = _ATOI.match(word)
    return int(match.group(1)) if match else 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before {what}") from None


def _color_spec(words: list[str]) -> int:
    try:
        at = words.index("c")
    except ValueError:
        raise XpmError("colour definition has no 'c' key") from None
    if at + 1 >= len(words):
        raise XpmError("colour definition has no value after 'c'")
    suffix = words[at + 2] if at + 2 < len(words) else None
    return text_to_rgb(words[at + 1], suffix)


def parse_xpm(lines: Iterable[str], depth: int = 24) -> Image:
    """Build an image from XPM strings: header, colours, then pixel rows."""
    source = iter(lines)
    header = split_words(_next_line(source, "the header"))
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header {' '.join(header)!r}")

    direct = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(source, "the colour table is complete")
        key = line[:cpp]
        value = _color_spec(split_words(line[cpp:]))
        if direct:
            palette[key] = value
        else:
            palette.setdefault(key, value)

    image = new_image(width, height, depth)
    for y in range(height):
        line = _next_line(source, "the last pixel row")
        for x in range(width):
            color = palette.get(line[x * cpp:(x + 1) * cpp], 0)
            if color == -1:
                color = _TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def xpm_to_image(data: Iterable[str], depth: int = 24) -> Image:
    """Build an image from in-memory XPM strings."""
    return parse_xpm(data, depth)


def _quoted_strings(text: str) -> Iterator[str]:
    pos = 0
    while True:
        start = text.find('"', pos)
        if start == -1:
            return
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def xpm_file_to_image(path: str | os.PathLike[str], depth: int = 24) -> Image:
    """Read an XPM file and build an image from its quoted strings."""
    with open(path, "rb") as handle:
        text = handle.read().decode("latin-1")
    return parse_xpm(_quoted_strings(strip_comments(text)), depth)