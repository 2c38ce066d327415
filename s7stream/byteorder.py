"""
Big-endian conversion of fixed-width scalars.

S7 transmits every multi-byte value most significant byte first, whatever
the byte order of the host.
"""

import struct
from functools import cache
from typing import Union

Scalar = Union[int, float]


@cache
def _codec(fmt: str) -> struct.Struct:
    return struct.Struct(">" + fmt)


def size_of(fmt: str) -> int:
    """Width in bytes of a single value of the given struct format character."""
    return _codec(fmt).size


def to_big_endian(value: Scalar, fmt: str) -> bytes:
    """Encode a scalar as big-endian bytes.

    Args:
        value: the value to encode.
        fmt: struct format character, see :mod:`s7stream.datatypes`.

    Returns:
        The encoded value, exactly :func:`size_of` bytes long.

    Examples:
        >>> to_big_endian(258, "H")
        b'\\x01\\x02'
    """
    return _codec(fmt).pack(value)


def from_big_endian(data: bytes, fmt: str) -> Scalar:
    """Decode big-endian bytes into a scalar.

    Examples:
        >>> from_big_endian(b"\\xff\\xfe", "h")
        -2
    """
    value: Scalar = _codec(fmt).unpack(data)[0]
    return value
