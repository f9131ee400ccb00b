import pytest

from solong.xpm import (
    XpmError,
    parse_xpm,
    split_words,
    str_str,
    str_str_quoted,
    strip_comments,
    xpm_file_to_image,
    xpm_to_image,
)


def test_str_str_finds_first_match():
    text = 'ab"cd"ef"'
    pos = str_str(text, '"', len(text))
    assert text[pos] == '"'
    assert '"' not in text[:pos]


def test_str_str_too_long_find():
    assert str_str("abcdef", "cd", 1) == -1
    assert str_str("abcdef", "zz", 6) == -1


def test_str_str_empty_find_rejected():
    with pytest.raises(ValueError):
        str_str("abc", "", 3)


def test_str_str_quoted_skips_quoted_text():
    text = '"a/*b" /*c'
    pos = str_str_quoted(text, "/*", len(text))
    assert pos == text.rindex("/*")


def test_str_str_quoted_not_found():
    text = '"/* only inside */"'
    assert str_str_quoted(text, "/*", len(text)) == -1


def test_split_words_spaces_and_tabs():
    assert split_words("  40 \t 2  3 1 ") == ["40", "2", "3", "1"]


def test_split_words_keeps_newlines():
    assert split_words("a\nb c") == ["a\nb", "c"]


def test_strip_block_comment():
    text = '"a /* b */" /* x */ y'
    result = strip_comments(text)
    assert len(result) == len(text)
    assert result.startswith('"a /* b */"')
    assert "x" not in result[11:]
    assert result.endswith(" y")


def test_strip_line_comment_takes_newline():
    text = "a // note\nb"
    result = strip_comments(text)
    assert len(result) == len(text)
    assert "\n" not in result
    assert result.split() == ["a", "b"]


def test_strip_keeps_quoted_slashes():
    text = '"a//b" // c\n'
    result = strip_comments(text)
    assert result.startswith('"a//b"')
    assert "c" not in result[6:]


def test_strip_unterminated_block():
    text = "x /*"
    result = strip_comments(text)
    assert len(result) == len(text)
    assert result.rstrip() == "x"


def test_parse_basic_image():
    img = parse_xpm(["2 2 2 1", "a c #FF0000", "b c #0000FF", "ab", "ba"])
    assert (img.width, img.height) == (2, 2)
    assert img.get_pixel(0, 0) == 0xFF0000
    assert img.get_pixel(1, 0) == 0x0000FF
    assert img.get_pixel(0, 1) == 0x0000FF
    assert img.get_pixel(1, 1) == 0xFF0000


def test_named_colours_and_two_word_names():
    img = xpm_to_image(["2 1 2 1", "r c red", "l c light blue", "rl"])
    assert img.get_pixel(0, 0) == 0xFF0000
    assert img.get_pixel(1, 0) == 0xADD8E6


def test_none_becomes_transparent():
    img = xpm_to_image(["1 1 1 1", ". c None", "."])
    assert img.get_pixel(0, 0) == 0xFF000000


def test_unknown_pixel_is_black():
    img = xpm_to_image(["2 1 1 1", "a c #FFFFFF", "az"])
    assert img.get_pixel(0, 0) == 0xFFFFFF
    assert img.get_pixel(1, 0) == 0


def test_direct_palette_last_definition_wins():
    img = xpm_to_image(["1 1 2 1", "a c #000011", "a c #000022", "a"])
    assert img.get_pixel(0, 0) == 0x000022


def test_wide_palette_first_definition_wins():
    img = xpm_to_image(["1 1 2 3", "aaa c #000011", "aaa c #000022", "aaa"])
    assert img.get_pixel(0, 0) == 0x000011


def test_two_chars_per_pixel():
    img = xpm_to_image(["2 1 2 2", "aa c #123456", "bb c #654321", "bbaa"])
    assert img.get_pixel(0, 0) == 0x654321
    assert img.get_pixel(1, 0) == 0x123456


@pytest.mark.parametrize(
    "data",
    [
        [],
        ["2 2 1"],
        ["0 2 1 1", "a c #FFFFFF", "aa", "aa"],
        ["2 x 1 1", "a c #FFFFFF", "aa", "aa"],
        ["1 1 2 1", "a c #FFFFFF"],
        ["1 1 1 1", "a m #FFFFFF", "a"],
        ["1 1 1 1", "a c", "a"],
        ["1 2 1 1", "a c #FFFFFF", "a"],
    ],
)
def test_invalid_data_raises(data):
    with pytest.raises(XpmError):
        xpm_to_image(data)


def test_file_matches_in_memory(tmp_path):
    content = (
        "/* XPM */\n"
        "static char *demo[] = {\n"
        "/* columns rows colors chars-per-pixel */\n"
        '"2 1 2 1 ",\n'
        '"a c #00FF00",\n'
        '"b c None",\n'
        "// pixels\n"
        '"ab"\n'
        "};\n"
    )
    path = tmp_path / "demo.xpm"
    path.write_text(content)
    from_file = xpm_file_to_image(path)
    in_memory = xpm_to_image(["2 1 2 1 ", "a c #00FF00", "b c None", "ab"])
    assert from_file.get_pixel(0, 0) == 0x00FF00
    assert from_file.get_pixel(1, 0) == 0xFF000000
    assert from_file.data == in_memory.data


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        xpm_file_to_image(tmp_path / "absent.xpm")


def test_empty_file_raises(tmp_path):
    path = tmp_path / "empty.xpm"
    path.write_text("")
    with pytest.raises(XpmError):
        xpm_file_to_image(path)