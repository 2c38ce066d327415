import math
from datetime import datetime

import pytest

from s7stream import datatypes
from s7stream.byteorder import from_big_endian, size_of, to_big_endian
from s7stream.datatypes import bcd_to_int, int_to_bcd, s7_weekday, to_hex_string


@pytest.mark.codec
class TestByteOrder:
    @pytest.mark.parametrize(
        "fmt, value, expected",
        [
            (datatypes.BYTE, 0xFE, b"\xfe"),
            (datatypes.WORD, 0x1234, b"\x12\x34"),
            (datatypes.INT, -2, b"\xff\xfe"),
            (datatypes.DINT, -2147483648, b"\x80\x00\x00\x00"),
            (datatypes.UDINT, 4294967295, b"\xff\xff\xff\xff"),
            (datatypes.REAL, 1.0, b"\x3f\x80\x00\x00"),
            (datatypes.LREAL, -2.0, b"\xc0\x00\x00\x00\x00\x00\x00\x00"),
        ],
    )
    def test_big_endian(self, fmt: str, value: float, expected: bytes) -> None:
        assert to_big_endian(value, fmt) == expected
        assert from_big_endian(expected, fmt) == value

    def test_size_of(self) -> None:
        for fmt, size in datatypes.SIZES.items():
            assert size_of(fmt) == size

    def test_nan_survives(self) -> None:
        assert math.isnan(from_big_endian(to_big_endian(float("nan"), datatypes.LREAL), datatypes.LREAL))


@pytest.mark.codec
class TestDataTypes:
    def test_bcd(self) -> None:
        assert bcd_to_int(0x00) == 0
        assert bcd_to_int(0x59) == 59
        assert bcd_to_int(0x99) == 99
        assert int_to_bcd(0) == 0x00
        assert int_to_bcd(7) == 0x07
        assert int_to_bcd(89) == 0x89
        for value in range(100):
            assert bcd_to_int(int_to_bcd(value)) == value

    def test_s7_weekday(self) -> None:
        # 2020-07-12 was a Sunday
        assert s7_weekday(datetime(2020, 7, 12)) == 1
        assert s7_weekday(datetime(2020, 7, 13)) == 2
        assert s7_weekday(datetime(2020, 7, 18)) == 7

    def test_to_hex_string(self) -> None:
        assert to_hex_string(0) == "0"
        assert to_hex_string(0xABCD) == "ABCD"
        assert to_hex_string(0xFFFFFFFF) == "FFFFFFFF"
        assert to_hex_string(0x0123456789ABCDEF) == "123456789ABCDEF"

    def test_to_hex_string_negative(self) -> None:
        with pytest.raises(ValueError):
            to_hex_string(-1)

    def test_date_time_bounds(self) -> None:
        assert datatypes.MIN_DATE_TIME == datetime(1990, 1, 1)
        assert datatypes.MAX_DATE_TIME == datetime(2089, 12, 31, 23, 59, 59, 999000)
