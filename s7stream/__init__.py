"""
The s7stream Python library.

Byte-exact encoding and decoding of the primitive data types Siemens S7
PLCs exchange: BOOL runs, integers, reals, STRING[n], TIME and
DATE_AND_TIME, read from and written to any binary stream.
"""

from importlib.metadata import version, PackageNotFoundError

from .reader import S7BinaryReader
from .writer import S7BinaryWriter
from .datatypes import DateTimeKind, MIN_DATE_TIME, MAX_DATE_TIME, to_hex_string
from .error import S7Error, FormatMismatchError, TruncatedInputError, InvalidArgumentError, OutOfRangeError

__all__ = [
    "S7BinaryReader",
    "S7BinaryWriter",
    "DateTimeKind",
    "MIN_DATE_TIME",
    "MAX_DATE_TIME",
    "to_hex_string",
    "S7Error",
    "FormatMismatchError",
    "TruncatedInputError",
    "InvalidArgumentError",
    "OutOfRangeError",
]

try:
    __version__ = version("python-s7stream")
except PackageNotFoundError:
    __version__ = "0.0rc0"
