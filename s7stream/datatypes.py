"""
S7 primitive data type definitions.

Format codes, sizes and value limits of the S7 primitive types plus the
small conversion helpers shared by the reader and the writer.
"""

from datetime import datetime
from enum import Enum


# struct format characters of the fixed-width S7 scalars
BYTE = "B"  # 8-bit unsigned
WORD = "H"  # 16-bit unsigned
INT = "h"  # 16-bit signed
DINT = "i"  # 32-bit signed
UDINT = "I"  # 32-bit unsigned
REAL = "f"  # IEEE 754 binary32
LREAL = "d"  # IEEE 754 binary64

SIZES = {
    BYTE: 1,
    WORD: 2,
    INT: 2,
    DINT: 4,
    UDINT: 4,
    REAL: 4,
    LREAL: 8,
}

BOOLS_PER_BYTE = 8
BOOLEAN_STOP_BYTE = 0x00

# STRING[n]: one byte max length, one byte actual length, n bytes payload
MAX_STRING_LENGTH = 255
STRING_HEADER_SIZE = 2

# TIME is a signed 32-bit millisecond count
MIN_TIME_MS = -(2**31)
MAX_TIME_MS = 2**31 - 1

# DATE_AND_TIME stores the year in two BCD digits, 90-99 map to 199x
DATE_AND_TIME_SIZE = 8
MIN_DATE_TIME = datetime(1990, 1, 1, 0, 0, 0, 0)
MAX_DATE_TIME = datetime(2089, 12, 31, 23, 59, 59, 999000)


class DateTimeKind(Enum):
    """How a decoded DATE_AND_TIME is tagged. The wall clock value is never converted."""

    UNSPECIFIED = 0  # naive datetime
    LOCAL = 1  # tagged with the local timezone of the host
    UTC = 2  # tagged with timezone.utc


def bcd_to_int(byte: int) -> int:
    """Decode a two digit packed BCD byte.

    Examples:
        >>> bcd_to_int(0x59)
        59
    """
    return (byte >> 4) * 10 + (byte & 0x0F)


def int_to_bcd(value: int) -> int:
    """Encode a value between 0 and 99 as a two digit packed BCD byte.

    Examples:
        >>> int_to_bcd(59)
        89
    """
    return ((value // 10) << 4) | (value % 10)


def s7_weekday(value: datetime) -> int:
    """Day of the week as stored in DATE_AND_TIME: Sunday is 1, Saturday is 7."""
    return value.isoweekday() % 7 + 1


def to_hex_string(value: int) -> str:
    """Render an unsigned WORD/DWORD/LWORD value the way TIA Portal shows it.

    Args:
        value: non negative integer.

    Returns:
        Uppercase hexadecimal digits without prefix.

    Examples:
        >>> to_hex_string(0xABCD)
        'ABCD'
    """
    if value < 0:
        raise ValueError(f"{value} is not an unsigned value")
    return format(value, "X")
