import io
import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


class FailingSink:
    """Binary sink that accepts ``fail_after`` writes, then raises OSError."""

    def __init__(self, fail_after: int = 0):
        self.fail_after = fail_after
        self.writes = []

    def write(self, data):
        if len(self.writes) >= self.fail_after:
            raise OSError("sink is broken")
        self.writes.append(bytes(data))
        return len(data)


class ChunkedSource:
    """Binary source returning at most ``step`` bytes per read.

    With ``stall`` set, every other read returns ``None`` the way a
    non-blocking stream with no data ready does.
    """

    def __init__(self, data: bytes, step: int, stall: bool = False):
        self.stream = io.BytesIO(data)
        self.step = step
        self.stall = stall
        self._stalled = False

    def read(self, size=-1):
        if self.stall and not self._stalled:
            self._stalled = True
            return None
        self._stalled = False
        if size is None or size < 0:
            size = self.step
        return self.stream.read(min(size, self.step))


@pytest.fixture()
def failing_sink():
    """Factory for sinks that break after a number of successful writes."""
    return FailingSink


@pytest.fixture()
def chunked_source():
    """Factory for sources that hand out short reads."""
    return ChunkedSource


VECTOR_24 = bytes([
    0xc0, 0x73, 0x62, 0x4a, 0xaf, 0x39, 0x78, 0x51,
    0x4e, 0xf8, 0x44, 0x3b, 0xb2, 0xa8, 0x59, 0xc7,
    0x5f, 0xc3, 0xcc, 0x6a, 0xf2, 0x6d, 0x5a, 0xaa,
])
VECTOR_24_TEXT = "AB3SR12X8FHFNVZAE075FKN3A7XH8VDK6JS22K0"

BYTE_CASES = [
    (bytes([240, 191, 199]), "6N9HQ"),
    (bytes([212, 122, 4]), "4T7YE"),
    (b"\xff", "9H"),
    (b"\xb5", "SW"),
    (b"\x34\x5a", "GTPY"),
    (b"\xff" * 5, "99999999"),
    (b"\xff" * 6, "999999999H"),
    (VECTOR_24, VECTOR_24_TEXT),
]


@pytest.fixture(params=BYTE_CASES, ids=lambda c: c[1] or "empty")
def byte_case(request):
    """Known byte-aligned (data, standard text) pairs."""
    return request.param
