"""
Exception classes for slaveplay.
"""


class SlavePlayError(Exception):
    """Base class for slaveplay errors."""

    def __init__(self, message: str, code: int = 0) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        if self.code:
            return f"Error {self.code}: {self.message}"
        return self.message


class ProtocolError(SlavePlayError):
    """Base class for errors raised while exchanging a command with the player."""

    def __init__(self, message: str, command: str = "", code: int = 0):
        self.command = command
        error_msg = f"Command '{command}' failed: {message}" if command else message
        super().__init__(error_msg, code)


class WriteError(ProtocolError):
    """Raised when a command cannot be written to the player."""

    def __init__(self, message: str, command: str = "", code: int = 1):
        super().__init__(message, command, code)


class ResponseTimeout(ProtocolError):
    """Raised when no matching reply arrives before the deadline."""

    def __init__(self, message: str, command: str = "", code: int = 2):
        super().__init__(message, command, code)


class ProcessTerminated(ProtocolError):
    """Raised when the player's output ends before a matching reply."""

    def __init__(self, message: str, command: str = "", code: int = 3):
        super().__init__(message, command, code)


class SessionClosed(SlavePlayError):
    """Raised when a command is issued on a closed session."""

    def __init__(self, message: str = "Session is closed", code: int = 4):
        super().__init__(message, code)


class InvalidArgument(SlavePlayError):
    """Raised when a command argument fails validation."""

    def __init__(self, message: str, code: int = 5):
        super().__init__(message, code)


class ConfigError(SlavePlayError):
    """Raised when there's a configuration error."""

    def __init__(self, message: str, code: int = 6):
        super().__init__(message, code)


class PlayerNotFoundError(SlavePlayError):
    """Raised when the player executable cannot be found."""

    def __init__(self, executable: str = "", code: int = 7):
        message = (
            f"Player executable not found: {executable}"
            if executable
            else "Player executable not found"
        )
        super().__init__(message, code)
