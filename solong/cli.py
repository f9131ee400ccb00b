"""Command line entry point: load a map, check it and draw it in a window."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .display import Display, DisplayError
from .mapdata import MapError, parse_file, valid_borders, valid_path
from .render import render_map, window_init

__all__ = ["main"]

_TITLE = "Test #1"


def _say(text: str) -> None:
    print(text, flush=True)


def _fail(message: str) -> int:
    sys.stderr.write(f"[!] {message}\n")
    sys.stderr.write("[i] Everything has been properly freed, exiting cleanly\n")
    return 1


def _check(mdata) -> bool:
    _say("[ ] Checking map borders")
    if not valid_borders(mdata):
        return False
    _say("[x] Map borders checked")
    _say("[ ] Checking path")
    mdata.duplicate()
    if not valid_path(mdata):
        return False
    _say("[x] Valid path found !")
    _say("[x] Path checked")
    return True


def main(argv: Sequence[str] | None = None) -> int:
    """Run the program on one map file; returns the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        return 0
    _say("[ ] Parsing file")
    try:
        mdata = parse_file(args[0])
    except MapError as exc:
        return _fail(str(exc))
    _say("[x] File parsed")
    if not _check(mdata):
        return _fail("Invalid map")
    _say("[ ] Initializing MLX")
    try:
        display = Display()
    except DisplayError:
        return _fail("Couldn't initialize library")
    with display:
        _say("[x] MLX initialized")
        _say("[ ] Spawning window")
        try:
            window = window_init(mdata, display, _TITLE)
        except DisplayError:
            return _fail("Error initializing window")
        _say("[x] Window initialized")
        _say("[ ] Rendering map")
        render_map(window, mdata)
        _say("[x] Map rendered")
        display.loop()
    return 1


if __name__ == "__main__":
    sys.exit(main())