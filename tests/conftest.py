"""Pytest configuration for tvctl tests."""
import pytest
import sys
import threading
from pathlib import Path

src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from tvctl.commands.key_table import KeyAction
from tvctl.core.errors import ExternalActionFailed, PortReadFailed


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedPort:
    """Serial port stand-in replaying (delay, line) pairs, then failing like an unplugged device."""

    def __init__(self, lines, clock: FakeClock | None = None):
        self.lines = list(lines)
        self.clock = clock
        self.opened = False
        self.close_count = 0

    def open(self) -> None:
        self.opened = True

    def read_line(self) -> bytes:
        if not self.lines:
            raise PortReadFailed("Unable to read: device returned no data")
        delay, data = self.lines.pop(0)
        if self.clock is not None:
            self.clock.advance(delay)
        return data

    def close(self) -> None:
        self.close_count += 1


class BlockingPort(ScriptedPort):
    """Port whose read blocks until the port is closed."""

    def __init__(self):
        super().__init__([])
        self.released = threading.Event()

    def read_line(self) -> bytes:
        self.released.wait(timeout=5)
        raise PortReadFailed("Unable to read: port closed")

    def close(self) -> None:
        super().close()
        self.released.set()


class RecordingInvoker:
    """Collects shortcuts instead of spawning xdotool."""

    def __init__(self, fail: bool = False):
        self.sent: list[str] = []
        self.fail = fail

    def send(self, shortcut: str) -> None:
        if self.fail:
            raise ExternalActionFailed(f"Unable send shortcut {shortcut!r}: exited with status 1")
        self.sent.append(shortcut)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def recording_invoker():
    return RecordingInvoker()


@pytest.fixture
def key_table():
    """Table used by the end-to-end scenarios."""
    return {
        12: KeyAction(shortcut="space"),
        13: KeyAction(shortcut="ctrl+q", comment="quit player"),
    }


@pytest.fixture
def char_device():
    """Path to a character device present on every Linux system."""
    path = Path("/dev/null")
    if not path.is_char_device():
        pytest.skip("/dev/null is not a character device")
    return str(path)
