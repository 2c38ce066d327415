"""
S7 encoding error classes.

All errors raised while encoding or decoding S7 primitive values derive from
:class:`S7Error`. Faults of the underlying stream are not wrapped.
"""


class S7Error(Exception):
    """Base exception for all S7 encoding errors."""

    pass


class FormatMismatchError(S7Error):
    """Raised when the data on the stream does not match the expected layout."""

    pass


class TruncatedInputError(S7Error, EOFError):
    """Raised when the stream ends before a value could be read completely."""

    def __init__(self, expected: int, received: int, what: str = "value"):
        super().__init__(expected, received, what)
        self.expected = expected
        self.received = received
        self.what = what

    def __str__(self) -> str:
        return f"Expected {self.expected} bytes for {self.what} but got {self.received} before end of stream"


class InvalidArgumentError(S7Error, ValueError):
    """Raised when a value can not be encoded as the requested S7 type."""

    pass


class OutOfRangeError(S7Error, ValueError):
    """Raised when a value lies outside the range of the requested S7 type."""

    pass
