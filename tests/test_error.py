import copy
import pickle

import pytest

from s7stream.error import FormatMismatchError, OutOfRangeError, S7Error, TruncatedInputError


class TestErrors:
    def test_truncated_input_message(self) -> None:
        error = TruncatedInputError(8, 5, "DATE_AND_TIME")
        assert str(error) == "Expected 8 bytes for DATE_AND_TIME but got 5 before end of stream"
        assert isinstance(error, S7Error)
        assert isinstance(error, EOFError)

    @pytest.mark.parametrize("clone", [lambda e: pickle.loads(pickle.dumps(e)), copy.copy, copy.deepcopy])
    def test_truncated_input_survives_copies(self, clone) -> None:  # type: ignore[no-untyped-def]
        error = clone(TruncatedInputError(8, 5, "DATE_AND_TIME"))
        assert type(error) is TruncatedInputError
        assert (error.expected, error.received, error.what) == (8, 5, "DATE_AND_TIME")
        assert str(error) == "Expected 8 bytes for DATE_AND_TIME but got 5 before end of stream"

    def test_message_errors_pickle(self) -> None:
        for error in (FormatMismatchError("Expected STRING[10], got STRING[8]"), OutOfRangeError("too large")):
            clone = pickle.loads(pickle.dumps(error))
            assert type(clone) is type(error)
            assert str(clone) == str(error)
