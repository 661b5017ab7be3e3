"""
Slave-mode commands for a running MPlayer process.
"""

import os
import re
import shutil
from collections.abc import Sequence
from enum import StrEnum
from typing import Self, TypeVar

from slaveplay.config import get_executable, get_player_args, get_timeout
from slaveplay.constants import (
    SLAVE_ARGS,
    Field,
    LoopAction,
    SeekType,
    SpeedType,
    VolumeAction,
)
from slaveplay.exceptions import InvalidArgument, PlayerNotFoundError
from slaveplay.session import Session
from slaveplay.streams import ProcessStream

MAX_SPEED = 5

E = TypeVar("E", bound=StrEnum)

# Characters outside this set are backslash-escaped in command arguments
_UNSAFE_PATH_CHARS = re.compile(r"([^A-Za-z0-9_\-.,:/@])")


def quote_path(path: str) -> str:
    r"""Escape a file path for use as one command argument.

    Every character outside a small safe set is prefixed with a backslash.
    MPlayer's command parser drops each backslash and keeps the character
    after it, which restores the path. A trailing backslash cannot be
    expressed, because the parser would read it as escaping the separator
    after the argument.

    >>> quote_path("/music/it's here.ogg")
    "/music/it\\'s\\ here.ogg"
    """
    if path.endswith("\\"):
        raise InvalidArgument(f"Path cannot end with a backslash: {path}")
    return _UNSAFE_PATH_CHARS.sub(r"\\\1", path)


def _strip(line: str, *tokens: str) -> str:
    for token in tokens:
        line = line.replace(token, "")
    return line.strip()


def _option(enum_type: type[E], value: str, what: str) -> E:
    try:
        return enum_type(value)
    except ValueError:
        raise InvalidArgument(f"Invalid {what}: {value}")


class MPlayer:
    """MPlayer controlled over a slave-mode session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @classmethod
    def spawn(
        cls,
        path: str | None = None,
        executable: str | None = None,
        args: Sequence[str] | None = None,
        timeout: float | None = None,
    ) -> Self:
        """Start MPlayer in slave mode and connect to it.

        Args:
            path: File to play; when omitted the player is started idle
            executable: Player executable, defaults to the configured one
            args: Extra player arguments, default to the configured ones
            timeout: Reply timeout in seconds, defaults to the configured one

        Returns:
            A player connected to the new process

        Raises:
            PlayerNotFoundError: If the executable cannot be found
        """
        exe = get_executable(executable)
        exe_path = shutil.which(exe)
        if exe_path is None:
            raise PlayerNotFoundError(exe)

        argv = [exe_path, *SLAVE_ARGS]
        argv.extend(get_player_args() if args is None else args)
        if path is None:
            argv.append("-idle")
        else:
            argv.append(path)

        stream = ProcessStream.spawn(argv)
        return cls(Session(stream, timeout=get_timeout(timeout)))

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self.session.is_open():
            self.quit()

    def command(self, text: str) -> bool:
        """Send a command that has no reply."""
        return self.session.execute(text)

    def volume(self, action: VolumeAction | str, value: int = 30) -> str:
        """Increase, decrease or set the volume.

        ``up`` and ``down`` step the volume, ``set`` sets it to ``value``
        (0-100). Returns the volume reported by the player.
        """
        match _option(VolumeAction, action, "volume action"):
            case VolumeAction.UP:
                cmd = "volume 1"
            case VolumeAction.DOWN:
                cmd = "volume 0"
            case _:
                if not 0 <= value <= 100:
                    raise InvalidArgument(
                        f"Volume must be between 0 and 100, got {value}"
                    )
                cmd = f"volume {value} 1"
        return self.session.execute(
            cmd, "Volume", lambda line: _strip(line, "Volume: ", " %")
        )

    def seek(self, value: float, type: SeekType | str = SeekType.RELATIVE) -> str:
        """Seek in the current file.

        ``relative`` seeks +/- ``value`` seconds, ``percent`` to ``value`` %
        of the file and ``absolute`` to ``value`` seconds. Returns the
        position reported by the player.
        """
        seek_type = _option(SeekType, type, "seek type")
        return self.session.execute(
            f"seek {value} {seek_type.flag}",
            "Position",
            lambda line: _strip(line, "Position: ", " %"),
        )

    def speed(self, value: float, type: SpeedType | str = SpeedType.SET) -> str:
        """Adjust the playback speed by increment, multiplier or absolute value."""
        match _option(SpeedType, type, "speed type"):
            case SpeedType.INCREMENT:
                return self.speed_incr(value)
            case SpeedType.MULTIPLY:
                return self.speed_mult(value)
            case _:
                return self.speed_set(value)

    def speed_incr(self, value: float) -> str:
        """Add ``value`` to the current playback speed."""
        return self._speed_setting("speed_incr", value)

    def speed_mult(self, value: float) -> str:
        """Multiply the current playback speed by ``value``."""
        return self._speed_setting("speed_mult", value)

    def speed_set(self, value: float) -> str:
        """Set the playback speed to ``value``."""
        return self._speed_setting("speed_set", value)

    def _speed_setting(self, name: str, value: float) -> str:
        if value > MAX_SPEED:
            raise InvalidArgument(
                f"Speed value must not exceed {MAX_SPEED}, got {value}"
            )
        return self.session.execute(
            f"{name} {value}", "Speed", lambda line: _strip(line, "Speed: x")
        )

    def loop(
        self, action: LoopAction | str = LoopAction.FOREVER, value: int = 1
    ) -> bool:
        """Set how many times the file is looped."""
        match _option(LoopAction, action, "loop action"):
            case LoopAction.NONE:
                return self.command("loop -1")
            case LoopAction.SET:
                return self.command(f"loop {value}")
            case _:
                return self.command("loop 0")

    def pt_step(self, value: int, force: bool = False) -> bool:
        """Step through the playtree; the sign of ``value`` is the direction."""
        return self.command(f"pt_step {value} {int(force)}")

    def next(self, value: int = 1, force: bool = False) -> bool:
        return self.pt_step(abs(value), force)

    def back(self, value: int = 1, force: bool = False) -> bool:
        return self.pt_step(-abs(value), force)

    def pt_up_step(self, value: int, force: bool = False) -> bool:
        """Like pt_step but steps through the parent list."""
        return self.command(f"pt_up_step {value} {int(force)}")

    def alt_src_step(self, value: int) -> bool:
        """Select the next/previous alternative source (ASX playlists only)."""
        return self.command(f"alt_src_step {value}")

    def use_master(self) -> bool:
        """Switch volume control between master and PCM."""
        return self.command("use_master")

    def mute(self, value: bool | None = None) -> str:
        """Toggle muting, or set it when ``value`` is given."""
        cmd = "mute" if value is None else f"mute {int(value)}"
        return self.session.execute(cmd, "Mute", lambda line: _strip(line, "Mute: "))

    def balance(self, value: float) -> bool:
        if not -1 <= value <= 1:
            raise InvalidArgument(f"Balance must be between -1 and 1, got {value}")
        return self.command(f"balance {value}")

    def get(self, field: Field | str) -> str:
        """Query a property of the current file.

        ``field`` is a Field or its name, aliases such as ``title`` or
        ``filename`` included.
        """
        try:
            resolved = field if isinstance(field, Field) else Field.lookup(field)
        except ValueError:
            raise InvalidArgument(f"Unknown field: {field}")
        prefix = resolved.prefix
        return self.session.execute(
            f"get_{resolved.value}",
            prefix,
            lambda line: _strip(line, f"{prefix}=", "'"),
        )

    def load_file(self, path: str, append: bool = False) -> bool:
        """Load a file, replacing the playlist unless ``append`` is set."""
        return self._load("loadfile", path, append)

    def load_list(self, path: str, append: bool = False) -> bool:
        """Load a playlist, replacing the current one unless ``append`` is set."""
        return self._load("loadlist", path, append)

    def _load(self, name: str, path: str, append: bool) -> bool:
        if not os.path.exists(path):
            raise InvalidArgument(f"Invalid file: {path}")
        return self.command(f"{name} {quote_path(path)} {int(append)}")

    def frame_step(self) -> bool:
        """Play one frame, then pause again."""
        return self.command("frame_step")

    def edl_mark(self) -> bool:
        """Write the current position into the EDL file."""
        return self.command("edl_mark")

    def pause(self) -> bool:
        return self.command("pause")

    def quit(self) -> None:
        """Quit the player and close the session."""
        try:
            self.command("quit")
        finally:
            self.session.close()
