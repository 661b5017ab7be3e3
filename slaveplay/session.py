"""
Synchronous command/response client for MPlayer's slave-mode protocol.

A session writes one command line at a time to the player and, when the
caller expects a reply, reads output lines until one matches the expected
pattern. Lines that do not match are discarded. This means an unsolicited
status line arriving between a request and its reply is silently dropped,
and a matcher that is too loose will take such a line for the reply.
"""

import logging
import re
import threading
import time
from collections.abc import Callable
from typing import Literal, Self, overload

from slaveplay.constants import DEFAULT_TIMEOUT
from slaveplay.exceptions import (
    InvalidArgument,
    ProcessTerminated,
    ResponseTimeout,
    SessionClosed,
    WriteError,
)
from slaveplay.streams import LineStream

logger = logging.getLogger(__name__)

Matcher = str | re.Pattern[str]
PostProcess = Callable[[str], str]


class Session:
    """Live connection to one running player process."""

    def __init__(self, stream: LineStream, timeout: float = DEFAULT_TIMEOUT) -> None:
        if timeout <= 0:
            raise InvalidArgument(f"Timeout must be positive, got {timeout}")
        self._stream = stream
        self._timeout = timeout
        self._lock = threading.Lock()
        self._closed = False

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def timeout(self) -> float:
        """Default seconds to wait for a matching reply."""
        return self._timeout

    def is_open(self) -> bool:
        return not self._closed

    def close(self) -> None:
        """Close the player's input; the session cannot be reopened."""
        with self._lock:
            self._close()

    def _close(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.debug("Closing session")
        try:
            self._stream.close()
        except OSError:
            logger.debug("Error closing stream", exc_info=True)

    @overload
    def execute(
        self,
        command_text: str,
        matcher: None = None,
        post_process: None = None,
        timeout: float | None = None,
    ) -> Literal[True]: ...

    @overload
    def execute(
        self,
        command_text: str,
        matcher: Matcher,
        post_process: PostProcess | None = None,
        timeout: float | None = None,
    ) -> str: ...

    def execute(
        self,
        command_text: str,
        matcher: Matcher | None = None,
        post_process: PostProcess | None = None,
        timeout: float | None = None,
    ) -> str | Literal[True]:
        """Send a command and optionally wait for its reply.

        Args:
            command_text: Pre-formatted command line, without a newline.
                User data inside it must already be quoted.
            matcher: Pattern searched for in each output line. Without one
                the command is fire-and-forget.
            post_process: Transform applied to the matching line, usually
                to strip the reply prefix.
            timeout: Seconds to wait for the reply, defaults to the
                session timeout.

        Returns:
            True for fire-and-forget commands, otherwise the matching line
            (post-processed when ``post_process`` is given).

        Raises:
            InvalidArgument: If the command contains a line break or the
                timeout is not positive
            SessionClosed: If the session was closed before the call
            WriteError: If the command cannot be written
            ResponseTimeout: If no matching line arrives in time
            ProcessTerminated: If the player output ends first; the session
                is closed as a result
        """
        if "\n" in command_text or "\r" in command_text:
            raise InvalidArgument(f"Command contains a line break: {command_text!r}")
        pattern = re.compile(matcher) if matcher is not None else None
        wait = self._timeout if timeout is None else timeout
        if wait <= 0:
            raise InvalidArgument(f"Timeout must be positive, got {wait}")

        with self._lock:
            if self._closed:
                raise SessionClosed()

            self._write(command_text)
            if pattern is None:
                return True

            line = self._read_reply(command_text, pattern, wait)

        return post_process(line) if post_process is not None else line

    def _write(self, command_text: str) -> None:
        logger.debug("-> %s", command_text)
        try:
            self._stream.write(f"{command_text}\n".encode("utf-8"))
        except (OSError, ValueError) as e:
            raise WriteError(str(e), command=command_text)

    def _read_reply(
        self, command_text: str, pattern: re.Pattern[str], wait: float
    ) -> str:
        deadline = time.monotonic() + wait
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            try:
                line = self._stream.readline(remaining)
            except TimeoutError:
                break

            if line is None:
                logger.warning("Player output ended while waiting for %r", command_text)
                self._close()
                raise ProcessTerminated("player output ended", command=command_text)

            if pattern.search(line):
                logger.debug("<- %s", line.rstrip("\r\n"))
                return line

            logger.debug("Discarding %r", line)

        logger.warning("No reply to %r within %s seconds", command_text, wait)
        raise ResponseTimeout(
            f"no reply matching {pattern.pattern!r} within {wait} seconds",
            command=command_text,
        )
