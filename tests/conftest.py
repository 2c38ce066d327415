import io
from typing import List

import pytest


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "reader: decoding of S7 primitive values")
    config.addinivalue_line("markers", "writer: encoding of S7 primitive values")
    config.addinivalue_line("markers", "codec: byte order and data type helpers")


class RecordingStream(io.BytesIO):
    """BytesIO remembering every single write call."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: List[bytes] = []
        self.flushes = 0

    def write(self, data) -> int:  # type: ignore[no-untyped-def, override]
        self.writes.append(bytes(data))
        return super().write(data)

    def flush(self) -> None:
        self.flushes += 1
        super().flush()


@pytest.fixture
def stream() -> RecordingStream:
    return RecordingStream()
