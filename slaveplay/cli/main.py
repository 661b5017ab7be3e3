"""
Main CLI entry point for slaveplay.
"""

import argparse
import logging
import sys

from slaveplay import __version__
from slaveplay.cli.commands import (
    ConfigCommandArgs,
    InfoCommandArgs,
    PlayerCommandArgs,
    config_command,
    info_command,
    play_command,
)


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser.

    Returns:
        The argument parser
    """
    parser = argparse.ArgumentParser(
        prog="slaveplay",
        description="Control MPlayer through its slave-mode protocol",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--executable",
        help="MPlayer executable (defaults to value in ~/.slaveplayrc)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for a reply (defaults to value in ~/.slaveplayrc)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log protocol traffic"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Config command
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument(
        "--set-executable", help="Set MPlayer executable in config"
    )
    config_parser.add_argument(
        "--set-timeout", type=float, help="Set reply timeout in seconds in config"
    )

    # Info command
    info_parser = subparsers.add_parser("info", help="Show metadata of a file")
    info_parser.add_argument("path", help="File to inspect")
    info_parser.add_argument(
        "--field",
        action="append",
        dest="fields",
        default=[],
        help="Field to show, e.g. meta_title or title (repeatable)",
    )

    # Play command
    play_parser = subparsers.add_parser(
        "play", help="Play a file, reading slave commands from stdin"
    )
    play_parser.add_argument("path", help="File to play")

    return parser


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = create_parser()
    return parser.parse_args(args)


def main(args: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parsed_args = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed_args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not parsed_args.command:
        print("Error: No command specified", file=sys.stderr)
        return 1

    executable = parsed_args.executable
    timeout = parsed_args.timeout

    if parsed_args.command == "config":
        config_command(
            ConfigCommandArgs(
                executable=executable,
                timeout=timeout,
                set_executable=parsed_args.set_executable,
                set_timeout=parsed_args.set_timeout,
            )
        )
    elif parsed_args.command == "info":
        info_command(
            InfoCommandArgs(
                executable=executable,
                timeout=timeout,
                path=parsed_args.path,
                fields=parsed_args.fields,
            )
        )
    elif parsed_args.command == "play":
        play_command(
            PlayerCommandArgs(
                executable=executable, timeout=timeout, path=parsed_args.path
            )
        )
    else:
        print(f"Error: Unknown command: {parsed_args.command}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
