"""
Encoding of S7 primitive values into a byte stream.

Siemens PLCs expect one complete telegram per write. The writer therefore
stages every value in memory and hands the whole record to the stream in a
single ``write()`` call when :meth:`S7BinaryWriter.flush` is called.
"""

import logging
import struct
from datetime import datetime, timedelta
from types import TracebackType
from typing import BinaryIO, Optional, Type

from .byteorder import Scalar, to_big_endian
from .datatypes import (
    BOOLEAN_STOP_BYTE,
    BOOLS_PER_BYTE,
    BYTE,
    DINT,
    INT,
    LREAL,
    MAX_DATE_TIME,
    MAX_STRING_LENGTH,
    MAX_TIME_MS,
    MIN_DATE_TIME,
    MIN_TIME_MS,
    REAL,
    UDINT,
    WORD,
    int_to_bcd,
    s7_weekday,
)
from .error import InvalidArgumentError, OutOfRangeError, S7Error

logger = logging.getLogger(__name__)


class S7BinaryWriter:
    """
    Stream writer following the S7 encoding of primitive data types.

    The method names follow the S7 data type names, not the Python ones.
    Nothing reaches the stream before :meth:`flush` (or :meth:`close`) is
    called, because the PLC expects the entire data package at once.

    Examples:
        >>> stream = io.BytesIO()
        >>> with S7BinaryWriter(stream, leave_open=True) as writer:
        ...     writer.write_bool(True)
        ...     writer.write_dint(42)
        >>> stream.getvalue()
        b'\\x01\\x00\\x00\\x00\\x00*'
    """

    MIN_DATE_TIME = MIN_DATE_TIME
    MAX_DATE_TIME = MAX_DATE_TIME

    def __init__(self, stream: BinaryIO, leave_open: bool = False):
        """
        Args:
            stream: binary stream to write into.
            leave_open: whether the stream is left open when the writer is closed.
        """
        self._stream = stream
        self._leave_open = leave_open
        self._buffer = bytearray()

        self._boolean_byte = 0
        self._cached_booleans = 0

        self._closed = False

    @property
    def base_stream(self) -> BinaryIO:
        return self._stream

    @property
    def buffer(self) -> bytes:
        """The staged part of the current record."""
        return bytes(self._buffer)

    @property
    def pending(self) -> int:
        """Number of staged bytes, BOOLs of an open run not included."""
        return len(self._buffer)

    @property
    def closed(self) -> bool:
        return self._closed

    def _write_cached_booleans(self) -> None:
        self._buffer.append(self._boolean_byte)
        self._boolean_byte = 0
        self._cached_booleans = 0

    # has to be called before writing anything but a BOOL
    def _end_boolean_flag(self) -> None:
        if self._cached_booleans == 0:
            return

        self._write_cached_booleans()
        self._buffer.append(BOOLEAN_STOP_BYTE)

    def _write_scalar(self, value: Scalar, fmt: str, s7_type: str) -> None:
        try:
            data = to_big_endian(value, fmt)
        except (struct.error, OverflowError) as e:
            raise OutOfRangeError(f"{value!r} can not be encoded as S7 {s7_type}: {e}") from e

        self._end_boolean_flag()
        self._buffer += data

    def write_byte(self, value: int) -> None:
        self._write_scalar(value, BYTE, "BYTE")

    def write_word(self, value: int) -> None:
        self._write_scalar(value, WORD, "WORD")

    def write_int(self, value: int) -> None:
        self._write_scalar(value, INT, "INT")

    def write_dint(self, value: int) -> None:
        self._write_scalar(value, DINT, "DINT")

    def write_udint(self, value: int) -> None:
        self._write_scalar(value, UDINT, "UDINT")

    def write_real(self, value: float) -> None:
        self._write_scalar(value, REAL, "REAL")

    def write_lreal(self, value: float) -> None:
        self._write_scalar(value, LREAL, "LREAL")

    def write_bool(self, value: bool) -> None:
        """Add a BOOL to the current run.

        BOOLs are cached until a byte is full or the run ends, the first BOOL
        of a run ends up in the least significant bit.

        Raises:
            InvalidArgumentError: if ``value`` is not a boolean expression.
        """
        if value not in {0, 1, True, False}:
            raise InvalidArgumentError(f"Value value:{value} is not a boolean expression.")

        if self._cached_booleans >= BOOLS_PER_BYTE:
            self._write_cached_booleans()

        if value:
            self._boolean_byte |= 1 << self._cached_booleans

        self._cached_booleans += 1

    def write_string(self, value: str, max_length: int) -> None:
        """Write a STRING[max_length].

        Args:
            value: ASCII string of at most ``max_length`` chars.
            max_length: the declared max length of the string, 0 to 255.

        Raises:
            :obj:`TypeError`: if ``value`` is not a :obj:`str`.
            InvalidArgumentError: if ``value`` contains non-ascii characters or does
                not fit into ``max_length``, or ``max_length`` does not fit into a byte.

        Examples:
            >>> writer.write_string("hi", 4)
            >>> writer.buffer
            b'\\x04\\x02hi\\x00\\x00'
        """
        if not isinstance(value, str):
            raise TypeError(f"Value value:{value} is not from Type string")
        if not 0 <= max_length <= MAX_STRING_LENGTH:
            raise InvalidArgumentError(f"max_length: {max_length} is not between 0 and {MAX_STRING_LENGTH}")
        if not value.isascii():
            raise InvalidArgumentError("string can only contain ascii characters")
        size = len(value)
        if size > max_length:
            raise InvalidArgumentError(f"size {size} > max_length {max_length} {value}")

        self._end_boolean_flag()
        self._buffer.append(max_length)
        self._buffer.append(size)
        self._buffer += value.encode("ascii").ljust(max_length, b"\x00")

    def write_time(self, value: timedelta) -> None:
        """Write a TIME. Sub-millisecond fractions are truncated toward zero.

        Raises:
            OutOfRangeError: if ``value`` does not fit into a signed 32-bit millisecond count.
        """
        microseconds = value // timedelta(microseconds=1)
        milliseconds = abs(microseconds) // 1000
        if microseconds < 0:
            milliseconds = -milliseconds

        if not MIN_TIME_MS <= milliseconds <= MAX_TIME_MS:
            raise OutOfRangeError(f"{value} is too large/small for S7 32-bit TIME")

        self.write_dint(milliseconds)

    def write_date_time(self, value: datetime) -> None:
        """Write a DATE_AND_TIME.

        Notes:
            The wall clock of ``value`` is encoded as is, an attached tzinfo
            is ignored. Milliseconds are kept, finer fractions are dropped.

        Raises:
            OutOfRangeError: if ``value`` lies outside 1990-01-01 00:00:00.000
                to 2089-12-31 23:59:59.999.
        """
        wall_clock = value.replace(tzinfo=None)
        if wall_clock < MIN_DATE_TIME or wall_clock > MAX_DATE_TIME:
            raise OutOfRangeError(
                f"Cannot encode {value}. S7 DATE_AND_TIME ranges from {MIN_DATE_TIME} to {MAX_DATE_TIME}"
            )

        millisecond = wall_clock.microsecond // 1000
        data = bytearray(
            [
                int_to_bcd(wall_clock.year % 100),
                int_to_bcd(wall_clock.month),
                int_to_bcd(wall_clock.day),
                int_to_bcd(wall_clock.hour),
                int_to_bcd(wall_clock.minute),
                int_to_bcd(wall_clock.second),
                int_to_bcd(millisecond // 10),
                int_to_bcd(millisecond % 10 * 10),
            ]
        )
        data[-1] |= s7_weekday(wall_clock)

        self._end_boolean_flag()
        self._buffer += data

    def end_struct(self) -> None:
        """Mark the end of a structure. BOOL packing restarts after a structure boundary."""
        self._end_boolean_flag()

    def flush(self) -> None:
        """Write the staged record into the stream with a single write call.

        The staged record is discarded before it is handed to the stream, a
        record the stream failed to take is never sent again.

        Raises:
            S7Error: if the stream accepted only part of the record.
        """
        self._end_boolean_flag()

        size = len(self._buffer)
        if size <= 0:
            return

        data = bytes(self._buffer)
        self._buffer.clear()

        written = self._stream.write(data)
        if written is not None and written != size:
            raise S7Error(f"Partial data written: {written} of {size} bytes accepted by the stream")

        self._stream.flush()
        logger.debug(f"Flushed {size} bytes")

    def close(self) -> None:
        """Flush the pending record and release the stream, even if the flush fails."""
        if self._closed:
            return

        try:
            self.flush()
        finally:
            if not self._leave_open:
                self._stream.close()
            self._closed = True
            logger.debug("Writer closed")

    def __enter__(self) -> "S7BinaryWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()
