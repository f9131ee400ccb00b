import pytest

from solong.colors import PixelFormat, color_value, lookup_color, text_to_rgb

RGB565 = (0xF800, 0x07E0, 0x001F)
RGB888 = (0xFF0000, 0x00FF00, 0x0000FF)


def test_from_masks_truecolor_layout():
    fmt = PixelFormat.from_masks(*RGB888)
    assert (fmt.red_shift, fmt.red_bits) == (16, 8)
    assert (fmt.green_shift, fmt.green_bits) == (8, 8)
    assert (fmt.blue_shift, fmt.blue_bits) == (0, 8)


def test_from_masks_565_layout():
    fmt = PixelFormat.from_masks(*RGB565)
    assert (fmt.red_shift, fmt.red_bits) == (11, 5)
    assert (fmt.green_shift, fmt.green_bits) == (5, 6)
    assert (fmt.blue_shift, fmt.blue_bits) == (0, 5)


@pytest.mark.parametrize("color", [0x000000, 0x123456, 0xFFFFFF, 0xFF99FF, 0x00FFFF])
def test_truecolor_convert_is_identity(color):
    fmt = PixelFormat.from_masks(*RGB888)
    assert fmt.convert(color) == color


def test_565_white_fills_all_masks():
    fmt = PixelFormat.from_masks(*RGB565)
    assert fmt.convert(0xFFFFFF) == sum(RGB565)
    assert fmt.convert(0x000000) == 0


@pytest.mark.parametrize("channel, mask", [(0xFF0000, 0xF800), (0x00FF00, 0x07E0), (0x0000FF, 0x001F)])
def test_565_channels_map_to_their_mask(channel, mask):
    fmt = PixelFormat.from_masks(*RGB565)
    assert fmt.convert(channel) == mask


def test_from_masks_rejects_empty_mask():
    with pytest.raises(ValueError):
        PixelFormat.from_masks(0, 0xFF00, 0xFF)


def test_wide_channel_rejected():
    with pytest.raises(ValueError):
        PixelFormat(0, 17, 0, 8, 0, 8)


def test_color_value_deep_display_passes_through():
    fmt = PixelFormat.from_masks(*RGB565)
    assert color_value(0x123456, 24, fmt) == 0x123456
    assert color_value(0x123456, 32, fmt) == 0x123456


def test_color_value_shallow_display_converts():
    fmt = PixelFormat.from_masks(*RGB565)
    assert color_value(0xFFFFFF, 16, fmt) == fmt.convert(0xFFFFFF)
    assert color_value(0xFF0000, 16, fmt) == 0xF800


def test_lookup_named_colors():
    assert lookup_color("snow") == 0xFFFAFA
    assert lookup_color("gainsboro") == 0xDCDCDC
    assert lookup_color("none") == -1
    assert lookup_color("gray50") == 0x7F7F7F
    assert lookup_color("grey100") == 0xFFFFFF
    assert lookup_color("thistle4") == 0x8B7B8B


def test_lookup_is_case_insensitive():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Ghost White") == lookup_color("ghostwhite")


def test_lookup_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2
    assert lookup_color("lightgoldenrod") == 0xEEDD82


def test_lookup_unknown_raises():
    with pytest.raises(KeyError):
        lookup_color("not a colour")


def test_text_to_rgb_hex():
    assert text_to_rgb("#FF0000") == 0xFF0000
    assert text_to_rgb("#00ff7f", None) == 0x00FF7F
    assert text_to_rgb("#") == 0
    assert text_to_rgb("#zz") == 0


def test_text_to_rgb_joins_two_words():
    assert text_to_rgb("dark", "slate") == lookup_color("dark slate")
    assert text_to_rgb("ghost", "white") == lookup_color("ghostwhite")


def test_text_to_rgb_single_name_and_unknown():
    assert text_to_rgb("red") == lookup_color("red")
    assert text_to_rgb("None") == -1
    assert text_to_rgb("nosuchcolour") == 0
    assert text_to_rgb("red", "fish") == 0