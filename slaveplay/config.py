"""
Configuration module for slaveplay.
"""

import copy
import os
from typing import Any

import tomli
import tomli_w

from slaveplay.constants import DEFAULT_TIMEOUT
from slaveplay.exceptions import ConfigError

DEFAULT_CONFIG: dict[str, Any] = {
    "player": {"executable": "mplayer", "args": [], "timeout": DEFAULT_TIMEOUT}
}


def get_config_path() -> str:
    """Get path to the config file.

    Returns:
        Path to the config file
    """
    return os.path.expanduser("~/.slaveplayrc")


def load_config() -> dict[str, Any]:
    """Load configuration from config file.

    Returns:
        Configuration dictionary
    """
    config_path = get_config_path()

    if not os.path.exists(config_path):
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_path, "rb") as f:
            return tomli.load(f)
    except (OSError, tomli.TOMLDecodeError):
        return copy.deepcopy(DEFAULT_CONFIG)


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to config file.

    Args:
        config: Configuration dictionary to save
    """
    config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)


def _player_section() -> dict[str, Any]:
    section = load_config().get("player", {})
    return section if isinstance(section, dict) else {}


def get_executable(executable: str | None = None) -> str:
    """Get the player executable from config or provided value.

    Args:
        executable: Executable provided on command line

    Returns:
        Executable name or path to use
    """
    if executable:
        return executable

    value = _player_section().get("executable")
    if isinstance(value, str) and value:
        return value

    return DEFAULT_CONFIG["player"]["executable"]


def get_timeout(timeout: float | None = None) -> float:
    """Get the reply timeout from config or provided value.

    Args:
        timeout: Timeout in seconds provided on command line

    Returns:
        Timeout in seconds

    Raises:
        ConfigError: If an explicit timeout is not positive
    """
    if timeout is not None:
        if timeout <= 0:
            raise ConfigError(f"Timeout must be positive, got {timeout}")
        return float(timeout)

    value = _player_section().get("timeout")
    # bool is an int subclass, reject it explicitly
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return float(value)

    return DEFAULT_TIMEOUT


def get_player_args() -> list[str]:
    """Get extra player arguments from config.

    Returns:
        List of extra command line arguments for the player
    """
    value = _player_section().get("args")
    if isinstance(value, list) and all(isinstance(arg, str) for arg in value):
        return list(value)
    return []
