"""Reading a map file into rows and checking its walls and reachability."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

__all__ = [
    "MapError",
    "MapData",
    "MAX_ROWS",
    "WALL",
    "VISITED",
    "PLAYER",
    "parse_lines",
    "parse_file",
    "valid_borders",
    "valid_path",
    "valid_map",
]

MAX_ROWS = 1025
WALL = "1"
VISITED = "V"
PLAYER = "P"


class MapError(ValueError):
    """Raised when a map cannot be read."""


@dataclass
class MapData:
    """The rows of a map, its size, and the working copy used for path search."""

    map: list[str]
    col_nb: int
    row_nb: int
    d_map: list[list[str]] = field(default_factory=list)

    def duplicate(self) -> list[list[str]]:
        """Fill the working copy from the map, marking the player as visited."""
        self.d_map = [list(row.replace(PLAYER, VISITED)) for row in self.map]
        return self.d_map


def parse_lines(lines: Iterable[str]) -> MapData:
    """Build map data from lines, each with or without its trailing newline.

    Raises MapError for more than MAX_ROWS rows or rows of different widths.
    """
    rows: list[str] = []
    for line in lines:
        if len(rows) == MAX_ROWS:
            raise MapError(f"Map size > {MAX_ROWS} rows")
        rows.append(line[:-1] if line.endswith("\n") else line)
    width = 0
    for row in rows:
        if width and len(row) != width:
            raise MapError("Uneven columns number")
        width = len(row)
    return MapData(map=rows, col_nb=width, row_nb=len(rows))


def _raw_lines(text: str) -> Iterator[str]:
    parts = text.split("\n")
    for part in parts[:-1]:
        yield part + "\n"
    if parts[-1]:
        yield parts[-1]


def parse_file(path: str | os.PathLike[str]) -> MapData:
    """Read the map stored at ``path``."""
    try:
        with open(path, "rb") as handle:
            text = handle.read().decode("latin-1")
    except OSError as exc:
        raise MapError("Error opening file") from exc
    return parse_lines(_raw_lines(text))


def _at(row: str, index: int) -> str:
    return row[index] if 0 <= index < len(row) else ""


def valid_borders(mdata: MapData) -> bool:
    """Return True when the first and last rows and columns are all walls."""
    if mdata.row_nb == 0 or mdata.col_nb == 0:
        return False
    first, last = mdata.map[0], mdata.map[mdata.row_nb - 1]
    if any(_at(first, i) != WALL or _at(last, i) != WALL for i in range(mdata.col_nb)):
        return False
    return all(
        _at(row, 0) == WALL and _at(row, mdata.col_nb - 1) == WALL
        for row in mdata.map[1:mdata.row_nb - 1]
    )


def _fill(grid: list[list[str]], y: int, x: int) -> int:
    if not (0 <= y < len(grid) and 0 <= x < len(grid[y])):
        return 0
    if grid[y][x] in (WALL, VISITED):
        return 0
    grid[y][x] = VISITED
    return 1


def _replace_pass(grid: list[list[str]]) -> int:
    changed = 0
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if row[x] == VISITED:
                changed += _fill(grid, y, x + 1)
                changed += _fill(grid, y, x - 1)
                changed += _fill(grid, y + 1, x)
                changed += _fill(grid, y - 1, x)
    return changed


def valid_path(mdata: MapData) -> bool:
    """Flood from the player; True when every non-wall cell gets reached.

    Works on ``mdata.d_map``, filling it from the map first if it is empty.
    """
    grid = mdata.d_map or mdata.duplicate()
    for _ in range(mdata.col_nb * mdata.row_nb):
        if not _replace_pass(grid):
            break
    return all(cell in (VISITED, WALL) for row in grid for cell in row)


def valid_map(mdata: MapData) -> bool:
    """Return True when the map is walled in and fully reachable."""
    if not valid_borders(mdata):
        return False
    mdata.duplicate()
    return valid_path(mdata)