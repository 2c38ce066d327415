"""
Decoding of S7 primitive values from a byte stream.
"""

import logging
from datetime import datetime, timedelta, timezone
from types import TracebackType
from typing import BinaryIO, Optional, Type

from .byteorder import Scalar, from_big_endian, size_of
from .datatypes import (
    BOOLEAN_STOP_BYTE,
    BOOLS_PER_BYTE,
    BYTE,
    DATE_AND_TIME_SIZE,
    DINT,
    INT,
    LREAL,
    REAL,
    STRING_HEADER_SIZE,
    UDINT,
    WORD,
    DateTimeKind,
    bcd_to_int,
    to_hex_string,
)
from .error import FormatMismatchError, InvalidArgumentError, TruncatedInputError

logger = logging.getLogger(__name__)


class S7BinaryReader:
    """
    Stream reader following the S7 decoding of primitive data types.

    The method names follow the S7 data type names, not the Python ones.
    Values have to be read in the order the fields appear in the record.

    Consecutive BOOLs share one byte, least significant bit first. After the
    last BOOL of a run the sender puts a stop byte, which is skipped as soon
    as anything other than a BOOL is read or :meth:`end_struct` is called.

    Examples:
        >>> with S7BinaryReader(io.BytesIO(data)) as reader:
        ...     flag = reader.read_bool()
        ...     counter = reader.read_dint()
    """

    def __init__(self, stream: BinaryIO, leave_open: bool = False):
        """
        Args:
            stream: binary stream to read from.
            leave_open: whether the stream is left open when the reader is closed.
        """
        self._stream = stream
        self._leave_open = leave_open

        self._boolean_byte = 0
        self._extracted_bools = 0
        self._was_last_boolean = False

        self._closed = False

    @property
    def base_stream(self) -> BinaryIO:
        return self._stream

    @property
    def closed(self) -> bool:
        return self._closed

    def _read_exact(self, size: int, what: str) -> bytes:
        data = bytearray()
        while len(data) < size:
            chunk = self._stream.read(size - len(data))
            if not chunk:
                raise TruncatedInputError(size, len(data), what)
            data.extend(chunk)
        return bytes(data)

    # has to be called before reading anything but a BOOL
    def _end_boolean_flag(self) -> None:
        if not self._was_last_boolean:
            return

        stop = self._read_exact(1, "boolean stop byte")[0]
        if stop != BOOLEAN_STOP_BYTE:
            logger.warning(f"Boolean stop byte is 0x{to_hex_string(stop)}, expected 0x00")

        self._extracted_bools = 0
        self._was_last_boolean = False

    def _read_scalar(self, fmt: str) -> Scalar:
        self._end_boolean_flag()
        return from_big_endian(self._read_exact(size_of(fmt), "scalar"), fmt)

    def read_byte(self) -> int:
        """BYTE, 0 to 255."""
        return int(self._read_scalar(BYTE))

    def read_word(self) -> int:
        """WORD, 0 to 65535."""
        return int(self._read_scalar(WORD))

    def read_int(self) -> int:
        """INT, -32768 to 32767."""
        return int(self._read_scalar(INT))

    def read_dint(self) -> int:
        """DINT, -2147483648 to 2147483647."""
        return int(self._read_scalar(DINT))

    def read_udint(self) -> int:
        """UDINT, 0 to 4294967295."""
        return int(self._read_scalar(UDINT))

    def read_real(self) -> float:
        """REAL, IEEE 754 binary32."""
        return float(self._read_scalar(REAL))

    def read_lreal(self) -> float:
        """LREAL, IEEE 754 binary64."""
        return float(self._read_scalar(LREAL))

    def read_bool(self) -> bool:
        """Read the next BOOL of the current run.

        Up to eight BOOLs are taken from one byte. A new byte is consumed
        for the first BOOL of a run and after every eighth BOOL.

        Returns:
            True if the bit is set.
        """
        if self._extracted_bools >= BOOLS_PER_BYTE or not self._was_last_boolean:
            self._boolean_byte = self._read_exact(1, "BOOL")[0]
            self._extracted_bools = 0

        value = (self._boolean_byte >> self._extracted_bools) & 1 == 1
        self._extracted_bools += 1
        self._was_last_boolean = True

        return value

    def read_string(self, expected_max_length: int) -> str:
        """Read a STRING[n].

        Notes:
            The first byte holds the declared max length of the string, the
            second byte its actual length. The payload always occupies the
            declared max length, bytes after the actual length are padding.

        Args:
            expected_max_length: the max length ``n`` the record layout declares.

        Returns:
            The string value.

        Raises:
            FormatMismatchError: if the declared max length is not ``expected_max_length``
                or the header or payload is not a valid ASCII string.
            TruncatedInputError: if the stream ends before the payload is complete.

        Examples:
            >>> S7BinaryReader(io.BytesIO(b"\\x04\\x02hi\\x00\\x00")).read_string(4)
            'hi'
        """
        self._end_boolean_flag()
        max_size, actual_size = self._read_exact(STRING_HEADER_SIZE, "STRING header")

        if max_size != expected_max_length:
            raise FormatMismatchError(f"Expected STRING[{expected_max_length}], got STRING[{max_size}]")

        payload = self._read_exact(max_size, f"STRING[{max_size}]")

        if actual_size > max_size:
            raise FormatMismatchError(f"STRING[{max_size}] claims to contain {actual_size} chars")

        try:
            return payload[:actual_size].decode("ascii")
        except UnicodeDecodeError as e:
            raise FormatMismatchError(f"STRING[{max_size}] contains non-ascii data") from e

    def read_time(self) -> timedelta:
        """Read a TIME, a signed 32-bit millisecond count."""
        return timedelta(milliseconds=self.read_dint())

    def read_date_time(self, kind: DateTimeKind = DateTimeKind.UNSPECIFIED) -> datetime:
        """Read a DATE_AND_TIME.

        Notes:
            Eight BCD encoded bytes: year (last two digits), month, day, hour,
            minute, second, the hundreds and tens of the milliseconds and
            finally the ms units digit next to the day of the week.
            Years 90-99 are 1990-1999, 00-89 are 2000-2089. The last byte is
            not evaluated, so milliseconds resolve to 10 ms.

        Args:
            kind: how the result is tagged, the wall clock is never converted.

        Raises:
            TruncatedInputError: if less than 8 bytes are left on the stream.
            FormatMismatchError: if the fields do not form a valid timestamp.
            InvalidArgumentError: if ``kind`` is not a :class:`DateTimeKind`.

        Examples:
            >>> data = bytes([0x20, 0x07, 0x12, 0x17, 0x32, 0x02, 0x85, 0x41])
            >>> S7BinaryReader(io.BytesIO(data)).read_date_time()
            datetime.datetime(2020, 7, 12, 17, 32, 2, 850000)
        """
        if not isinstance(kind, DateTimeKind):
            raise InvalidArgumentError(f"kind: {kind!r} is not a DateTimeKind")

        self._end_boolean_flag()
        raw = self._read_exact(DATE_AND_TIME_SIZE, "DATE_AND_TIME")

        year = bcd_to_int(raw[0])
        century = 2000 if year < 90 else 1900
        millisecond = bcd_to_int(raw[6]) * 10

        try:
            value = datetime(
                century + year,
                bcd_to_int(raw[1]),
                bcd_to_int(raw[2]),
                bcd_to_int(raw[3]),
                bcd_to_int(raw[4]),
                bcd_to_int(raw[5]),
                millisecond * 1000,
            )
        except ValueError as e:
            raise FormatMismatchError(f"Invalid DATE_AND_TIME {raw.hex(' ')}: {e}") from e

        if kind is DateTimeKind.UTC:
            return value.replace(tzinfo=timezone.utc)
        if kind is DateTimeKind.LOCAL:
            # astimezone() may shift a wall clock inside a DST gap, only its tzinfo is used
            return value.replace(tzinfo=value.astimezone().tzinfo)
        return value

    def end_struct(self) -> None:
        """Mark the end of a structure. BOOL packing restarts after a structure boundary."""
        self._end_boolean_flag()

    def close(self) -> None:
        if self._closed:
            return

        if not self._leave_open:
            self._stream.close()
        self._closed = True
        logger.debug("Reader closed")

    def __enter__(self) -> "S7BinaryReader":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()
