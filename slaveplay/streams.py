"""
Line streams connecting a session to a running player process.
"""

import logging
import queue
import re
import subprocess
import threading
from collections.abc import Sequence
from typing import IO, Protocol, Self, runtime_checkable

from slaveplay.exceptions import PlayerNotFoundError

logger = logging.getLogger(__name__)

# Queued by the reader thread once stdout is exhausted
_EOF = None

# Seconds to wait for the process to exit after its input is closed
CLOSE_WAIT = 1.0

_LINE_RE = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+")


@runtime_checkable
class LineStream(Protocol):
    """Duplex line-oriented stream to a player process."""

    def write(self, data: bytes) -> None:
        """Write raw bytes to the player's input."""
        ...

    def readline(self, timeout: float | None = None) -> str | None:
        """Read one line of player output.

        Returns the line including its terminator, or None at end-of-stream.
        Raises TimeoutError if no line arrives within ``timeout`` seconds.
        """
        ...

    def close(self) -> None:
        """Close the player's input."""
        ...


def split_lines(chunk: str) -> list[str]:
    r"""Split player output on both ``\n`` and ``\r``.

    MPlayer redraws its status line with bare carriage returns, so a single
    ``\n``-terminated read may hold several logical lines. Other Unicode
    line separators are part of the text, as in metadata values.

    >>> split_lines("A: 1.0\rA: 2.0\rANS_LENGTH=3.00\n")
    ['A: 1.0\r', 'A: 2.0\r', 'ANS_LENGTH=3.00\n']
    """
    return _LINE_RE.findall(chunk)


class ProcessStream:
    """LineStream over the stdin/stdout pipes of a subprocess."""

    def __init__(
        self, process: "subprocess.Popen[bytes]", encoding: str = "utf-8"
    ) -> None:
        if process.stdin is None or process.stdout is None:
            raise ValueError("Process must be started with stdin and stdout pipes")
        self._process = process
        self._stdin: IO[bytes] = process.stdin
        self._stdout: IO[bytes] = process.stdout
        self._encoding = encoding
        self._lines: queue.Queue[str | None] = queue.Queue()
        self._eof = False
        self._reader = threading.Thread(
            target=self._read_output,
            name=f"slaveplay-reader-{process.pid}",
            daemon=True,
        )
        self._reader.start()

    @classmethod
    def spawn(cls, argv: Sequence[str], encoding: str = "utf-8") -> Self:
        """Start a process and attach a stream to it.

        Args:
            argv: Command line of the process
            encoding: Encoding of the process output

        Returns:
            A new stream connected to the started process

        Raises:
            PlayerNotFoundError: If the executable does not exist
        """
        logger.debug("Starting %s", subprocess.list2cmdline(argv))
        try:
            process = subprocess.Popen(
                list(argv),
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                bufsize=0,
            )
        except FileNotFoundError:
            raise PlayerNotFoundError(argv[0])
        return cls(process, encoding=encoding)

    def _read_output(self) -> None:
        try:
            for raw in iter(self._stdout.readline, b""):
                text = raw.decode(self._encoding, errors="replace")
                for line in split_lines(text):
                    self._lines.put(line)
        except (OSError, ValueError):
            logger.debug(
                "Output pipe of pid %s failed", self._process.pid, exc_info=True
            )
        finally:
            self._lines.put(_EOF)

    def write(self, data: bytes) -> None:
        code = self.returncode
        if code is not None:
            raise BrokenPipeError(f"Player process exited with code {code}")
        self._stdin.write(data)
        self._stdin.flush()

    def readline(self, timeout: float | None = None) -> str | None:
        if self._eof:
            return None
        try:
            line = self._lines.get(timeout=timeout)
        except queue.Empty:
            raise TimeoutError(f"No output within {timeout} seconds")
        if line is _EOF:
            self._eof = True
        return line

    def close(self) -> None:
        """Close the player's input and reap the process once it exits.

        Output already read stays available to ``readline``. A process that
        keeps running after ``CLOSE_WAIT`` seconds is left to ``terminate``.
        """
        if not self._stdin.closed:
            try:
                self._stdin.close()
            except BrokenPipeError:
                # Unflushed data is lost when the process is already gone
                pass
        try:
            self._process.wait(timeout=CLOSE_WAIT)
        except subprocess.TimeoutExpired:
            logger.debug(
                "Process %s still running after its input was closed",
                self._process.pid,
            )
            return
        self._reader.join(timeout=CLOSE_WAIT)
        if not self._reader.is_alive():
            self._stdout.close()

    def wait(self, timeout: float | None = None) -> int:
        """Wait for the process to exit and return its exit code."""
        return self._process.wait(timeout=timeout)

    def terminate(self) -> None:
        """Terminate a process that does not exit on end-of-input."""
        if self._process.poll() is None:
            self._process.terminate()

    @property
    def returncode(self) -> int | None:
        """Exit code of the process, or None while it is running."""
        return self._process.poll()
