import pytest

from solong.display import Display, DisplayError
from solong.mapdata import parse_lines
from solong.render import TILE_COLORS, TILE_SIZE, create_trgb, render_map, window_init


@pytest.fixture
def display():
    with Display(display_name=":0", hostname="host") as disp:
        yield disp


def test_create_trgb_matches_tile_colours():
    assert create_trgb(0, 0xFF, 0xA5, 0x00) == 0xFFA500
    assert create_trgb(0, 0x55, 0x16, 0x06) == 0x551606


def test_create_trgb_round_trip():
    value = create_trgb(0x12, 0x34, 0x56, 0x78)
    assert value.to_bytes(4, "big") == bytes([0x12, 0x34, 0x56, 0x78])


def test_create_trgb_high_transparency_is_negative():
    value = create_trgb(0xFF, 0, 0, 0)
    assert value < 0
    assert value & 0xFFFFFFFF == 0xFF000000


def test_window_init_size(display):
    mdata = parse_lines(["1111", "1P01", "1111"])
    window = window_init(mdata, display, "Test #1")
    assert window.width == mdata.col_nb * TILE_SIZE
    assert window.height == mdata.row_nb * TILE_SIZE
    assert window.title == "Test #1"
    assert window in display.windows


def test_window_init_empty_map(display):
    with pytest.raises(DisplayError):
        window_init(parse_lines([]), display, "empty")


def test_render_map_tiles(display):
    mdata = parse_lines(["111", "PCE", "101"])
    window = window_init(mdata, display, "t")
    render_map(window, mdata)
    for row, line in enumerate(mdata.map):
        for column, cell in enumerate(line):
            for dx, dy in ((0, 0), (TILE_SIZE - 1, TILE_SIZE - 1)):
                x, y = column * TILE_SIZE + dx, row * TILE_SIZE + dy
                assert window.pixel(x, y) == display.color_value(TILE_COLORS[cell])


def test_render_map_leaves_unknown_cells(display):
    mdata = parse_lines(["1X"])
    window = window_init(mdata, display, "t")
    window.pixel_put(TILE_SIZE + 3, 3, 0x123456)
    render_map(window, mdata)
    assert window.pixel(TILE_SIZE + 3, 3) == 0x123456
    assert window.pixel(3, 3) == TILE_COLORS["1"]