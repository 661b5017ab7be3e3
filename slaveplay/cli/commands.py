"""
CLI commands for slaveplay.
"""

import json
import shlex
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TextIO

from slaveplay.config import load_config, save_config
from slaveplay.constants import INFO_FIELDS, Field, VolumeAction
from slaveplay.exceptions import (
    ConfigError,
    InvalidArgument,
    PlayerNotFoundError,
    ProcessTerminated,
    SlavePlayError,
)
from slaveplay.player import MPlayer
from slaveplay.retry import retry_operation

# Attempts for idempotent queries that time out
QUERY_TRIES = 3


def spawn_with_error_handling(args: "PlayerCommandArgs") -> MPlayer:
    """Start the player with consistent error handling and messaging.

    Args:
        args: Command-line arguments

    Returns:
        MPlayer instance

    Raises:
        SystemExit: If the player cannot be started
    """
    try:
        return MPlayer.spawn(
            args.path or None, executable=args.executable, timeout=args.timeout
        )
    except PlayerNotFoundError as e:
        print(str(e), file=sys.stderr)
        print("\nTips:", file=sys.stderr)
        print("  • Make sure MPlayer is installed", file=sys.stderr)
        print(
            "  • Set the executable with 'slaveplay config --set-executable'",
            file=sys.stderr,
        )
        sys.exit(1)
    except ConfigError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


@dataclass
class CommandArgs:
    """Base class for command arguments."""

    executable: str | None = None
    timeout: float | None = None


@dataclass
class PlayerCommandArgs(CommandArgs):
    """Arguments for commands that start a player."""

    path: str = field(default="")


@dataclass
class InfoCommandArgs(PlayerCommandArgs):
    """Arguments for the info command."""

    fields: list[str] = field(default_factory=list)


@dataclass
class ConfigCommandArgs(CommandArgs):
    """Arguments for the config command."""

    set_executable: str | None = None
    set_timeout: float | None = None


def config_command(args: ConfigCommandArgs) -> None:
    """Manage configuration.

    Args:
        args: Command-line arguments
    """
    config = load_config()

    # With no arguments, print current config
    if args.set_executable is None and args.set_timeout is None:
        print(json.dumps(config, indent=2))
        return

    player = config.setdefault("player", {})
    if args.set_executable is not None:
        player["executable"] = args.set_executable
        print(f"Player executable set to {args.set_executable}")
    if args.set_timeout is not None:
        if args.set_timeout <= 0:
            print("Error: Timeout must be positive", file=sys.stderr)
            sys.exit(1)
        player["timeout"] = args.set_timeout
        print(f"Reply timeout set to {args.set_timeout} seconds")

    save_config(config)


def info_command(args: InfoCommandArgs) -> None:
    """Print metadata fields of a file.

    Args:
        args: Command-line arguments
    """
    names = args.fields or [f.value for f in INFO_FIELDS]
    fields: list[Field] = []
    for name in names:
        try:
            fields.append(Field.lookup(name))
        except ValueError:
            print(f"Error: Unknown field: {name}", file=sys.stderr)
            sys.exit(1)

    with spawn_with_error_handling(args) as player:
        try:
            for f in fields:
                value = retry_operation(player.get, f, max_tries=QUERY_TRIES)
                print(f"{f.value}: {value}")
        except SlavePlayError as e:
            print(f"Error reading {f.value}: {e}", file=sys.stderr)
            sys.exit(1)


def _number(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise InvalidArgument(f"Not a number: {text}")


def _integer(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise InvalidArgument(f"Not an integer: {text}")


def run_slave_line(player: MPlayer, line: str) -> str | None:
    """Run one interactive command line against the player.

    Args:
        player: Player to send the command to
        line: Command line, e.g. ``volume up`` or ``seek 50 percent``

    Returns:
        Text to show to the user, if any

    Raises:
        InvalidArgument: If the line cannot be parsed
        SlavePlayError: If the player command fails
    """
    try:
        words = shlex.split(line)
    except ValueError as e:
        raise InvalidArgument(f"Cannot parse command: {e}")
    if not words:
        return None

    match words:
        case ["pause"]:
            player.pause()
        case ["frame_step"]:
            player.frame_step()
        case ["next"]:
            player.next()
        case ["back"]:
            player.back()
        case ["volume", ("up" | "down") as action]:
            return f"Volume: {player.volume(action)}"
        case ["volume", value]:
            return f"Volume: {player.volume(VolumeAction.SET, _integer(value))}"
        case ["seek", value]:
            return f"Position: {player.seek(_number(value))}"
        case ["seek", value, mode]:
            return f"Position: {player.seek(_number(value), mode)}"
        case ["speed", value]:
            return f"Speed: {player.speed(_number(value))}"
        case ["speed", value, mode]:
            return f"Speed: {player.speed(_number(value), mode)}"
        case ["mute"]:
            return f"Mute: {player.mute()}"
        case ["mute", "on" | "off" as state]:
            return f"Mute: {player.mute(state == 'on')}"
        case ["loop"]:
            player.loop()
        case ["loop", "none" | "forever" as action]:
            player.loop(action)
        case ["loop", count]:
            player.loop("set", _integer(count))
        case ["get", name]:
            return retry_operation(player.get, name, max_tries=QUERY_TRIES)
        case ["quit"]:
            player.quit()
        case _:
            raise InvalidArgument(f"Unknown command: {line.strip()}")
    return None


def run_slave_lines(player: MPlayer, lines: Iterable[str], out: TextIO) -> int:
    """Run interactive command lines until input ends or the player quits.

    Returns:
        Number of commands that failed
    """
    failures = 0
    for line in lines:
        try:
            result = run_slave_line(player, line)
        except ProcessTerminated as e:
            print(f"Error: {e}", file=sys.stderr)
            return failures + 1
        except SlavePlayError as e:
            print(f"Error: {e}", file=sys.stderr)
            failures += 1
            continue
        if result is not None:
            print(result, file=out)
        if not player.session.is_open():
            break
    return failures


def play_command(args: PlayerCommandArgs) -> None:
    """Play a file, reading slave commands from stdin.

    Args:
        args: Command-line arguments
    """
    with spawn_with_error_handling(args) as player:
        failures = run_slave_lines(player, sys.stdin, sys.stdout)
    if failures:
        sys.exit(1)
