"""Pytest configuration and shared fixtures for slaveplay tests."""

from collections import deque
from collections.abc import Iterable

from pytest import fixture

from slaveplay.player import MPlayer
from slaveplay.session import Session


class FakeStream:
    """Scripted LineStream.

    Lines queued with ``feed`` are returned in order. Lines registered with
    ``respond`` are queued when the matching command is written. Once the
    queue is empty, reads time out immediately, or return end-of-stream when
    ``eof`` is set.
    """

    def __init__(self, lines: Iterable[str] = (), eof: bool = False) -> None:
        self.lines: deque[str] = deque(lines)
        self.eof = eof
        self.writes: list[bytes] = []
        self.responses: dict[str, list[str]] = {}
        self.closed = False
        self.reads = 0

    def feed(self, *lines: str) -> None:
        self.lines.extend(lines)

    def respond(self, command: str, *lines: str) -> None:
        self.responses[command] = list(lines)

    @property
    def commands(self) -> list[str]:
        """Written commands without their trailing newline."""
        return [data.decode("utf-8").rstrip("\n") for data in self.writes]

    def write(self, data: bytes) -> None:
        if self.closed:
            raise ValueError("write to closed stream")
        self.writes.append(data)
        command = data.decode("utf-8").rstrip("\n")
        self.lines.extend(self.responses.get(command, []))

    def readline(self, timeout: float | None = None) -> str | None:
        self.reads += 1
        if self.lines:
            return self.lines.popleft()
        if self.eof:
            return None
        raise TimeoutError("no scripted output")

    def close(self) -> None:
        self.closed = True


@fixture
def stream() -> FakeStream:
    """Fixture for an empty scripted stream."""
    return FakeStream()


@fixture
def session(stream: FakeStream) -> Session:
    """Fixture for a session over the scripted stream."""
    return Session(stream, timeout=0.5)


@fixture
def player(session: Session) -> MPlayer:
    """Fixture for a player over the scripted session."""
    return MPlayer(session)
