import io
from unittest import mock

import pytest

from solong.printf import format_printf, ft_printf, itoa_base, uitoa_base


def test_decimal_and_integer():
    assert format_printf("(%d, %i)", 42, -7) == "(42, -7)"


def test_int_min():
    assert format_printf("%d", -2147483648) == "-2147483648"


def test_decimal_wraps_to_32_bits():
    assert format_printf("%d", 2**31) == "-2147483648"


def test_unsigned_of_negative():
    assert format_printf("%u", -1) == "4294967295"


@pytest.mark.parametrize("value", [0, 1, 15, 255, 4096, 0xDEADBEEF])
def test_hex_roundtrip(value):
    low = format_printf("%x", value)
    high = format_printf("%X", value)
    assert int(low, 16) == value
    assert high == low.upper()
    assert low == low.lower()


def test_string_and_null():
    assert format_printf("[%s]", "abc") == "[abc]"
    assert format_printf("%s", None) == "(null)"


def test_char_from_int_and_str():
    assert format_printf("%c%c", "A", ord("B")) == "AB"


def test_percent_literal():
    assert format_printf("100%%") == "100%"


def test_unknown_conversion_is_dropped():
    assert format_printf("a%qb") == "ab"


def test_pointer():
    assert format_printf("%p", 255) == "0xff"


@pytest.mark.parametrize("platform,expected", [("linux", "(nil)"), ("darwin", "0x0")])
def test_null_pointer(platform, expected):
    with mock.patch("sys.platform", platform):
        assert format_printf("%p", None) == expected


def test_backslash_escapes():
    assert format_printf("a\\nb\\tc\\\\") == "a\nb\tc\\"
    assert format_printf("x\\qy") == "xy"


def test_missing_argument():
    with pytest.raises(TypeError):
        format_printf("%d %d", 1)


def test_ft_printf_writes_and_counts():
    stream = io.StringIO()
    count = ft_printf("[x] %s %d\n", "ok", 3, stream=stream)
    assert stream.getvalue() == "[x] ok 3\n"
    assert count == len(stream.getvalue())


def test_itoa_base():
    assert itoa_base(0, 2) == "0"
    assert itoa_base(-42, 10) == "-42"
    assert int(itoa_base(-255, 16), 16) == 255


@pytest.mark.parametrize("base", [2, 8, 10, 16])
@pytest.mark.parametrize("value", [0, 1, 7, 100, 65535])
def test_uitoa_roundtrip(value, base):
    assert int(uitoa_base(value, base), base) == value


def test_uitoa_rejects_negative():
    with pytest.raises(ValueError):
        uitoa_base(-1, 10)


def test_bad_base():
    with pytest.raises(ValueError):
        itoa_base(5, 1)