"""Opening a window sized to a map and drawing the map's tiles."""

from __future__ import annotations

from .display import Display, Window
from .mapdata import MapData

__all__ = ["TILE_SIZE", "TILE_COLORS", "create_trgb", "window_init", "render_map"]

TILE_SIZE = 32

TILE_COLORS: dict[str, int] = {
    "1": 0x000000,
    "0": 0xFFFFFF,
    "P": 0x551606,
    "C": 0xFFA500,
    "E": 0x013220,
}


def create_trgb(t: int, r: int, g: int, b: int) -> int:
    """Pack transparency and colour channels into one 32-bit signed value."""
    value = (t << 24 | r << 16 | g << 8 | b) & 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def window_init(mdata: MapData, display: Display, title: str) -> Window:
    """Open a window with one tile per map cell."""
    return display.new_window(mdata.col_nb * TILE_SIZE, mdata.row_nb * TILE_SIZE, title)


def _draw_tile(window: Window, column: int, row: int, color: int) -> None:
    left, top = column * TILE_SIZE, row * TILE_SIZE
    for y in range(top, top + TILE_SIZE):
        for x in range(left, left + TILE_SIZE):
            window.pixel_put(x, y, color)


def render_map(window: Window, mdata: MapData) -> None:
    """Draw every known map cell as a filled tile; other cells are left as they are."""
    for row, line in enumerate(mdata.map):
        for column, cell in enumerate(line):
            color = TILE_COLORS.get(cell)
            if color is not None:
                _draw_tile(window, column, row, color)