"""Tests for the custom exceptions."""

from slaveplay.exceptions import (
    ConfigError,
    InvalidArgument,
    PlayerNotFoundError,
    ProcessTerminated,
    ProtocolError,
    ResponseTimeout,
    SessionClosed,
    SlavePlayError,
    WriteError,
)


class TestExceptions:
    """Tests for the exception classes."""

    def test_slaveplay_error_basic(self) -> None:
        """Test SlavePlayError with a simple message."""
        error = SlavePlayError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.code == 0

    def test_slaveplay_error_with_code(self) -> None:
        """Test SlavePlayError with a custom code."""
        error = SlavePlayError("Test error", code=42)
        assert str(error) == "Error 42: Test error"
        assert error.code == 42

    def test_write_error_with_command(self) -> None:
        """Test WriteError with the failed command."""
        error = WriteError("Broken pipe", command="pause")
        assert str(error) == "Error 1: Command 'pause' failed: Broken pipe"
        assert error.command == "pause"
        assert isinstance(error, ProtocolError)

    def test_response_timeout(self) -> None:
        """Test ResponseTimeout."""
        error = ResponseTimeout("no reply", command="get_time_pos")
        assert str(error) == "Error 2: Command 'get_time_pos' failed: no reply"
        assert error.code == 2

    def test_process_terminated_without_command(self) -> None:
        """Test ProcessTerminated without specifying a command."""
        error = ProcessTerminated("player output ended")
        assert str(error) == "Error 3: player output ended"
        assert error.command == ""

    def test_session_closed(self) -> None:
        """Test SessionClosed default message."""
        error = SessionClosed()
        assert str(error) == "Error 4: Session is closed"
        assert not isinstance(error, ProtocolError)

    def test_invalid_argument(self) -> None:
        """Test InvalidArgument."""
        error = InvalidArgument("Volume must be between 0 and 100", code=105)
        assert str(error) == "Error 105: Volume must be between 0 and 100"

    def test_config_error(self) -> None:
        """Test ConfigError."""
        assert ConfigError("Invalid configuration").code == 6

    def test_player_not_found(self) -> None:
        """Test PlayerNotFoundError with and without an executable."""
        assert str(PlayerNotFoundError()) == "Error 7: Player executable not found"
        error = PlayerNotFoundError("mplayer")
        assert error.message == "Player executable not found: mplayer"

    def test_all_derive_from_base(self) -> None:
        """Test that every error can be caught as SlavePlayError."""
        for error in (
            WriteError("x"),
            ResponseTimeout("x"),
            ProcessTerminated("x"),
            SessionClosed(),
            InvalidArgument("x"),
            ConfigError("x"),
            PlayerNotFoundError(),
        ):
            assert isinstance(error, SlavePlayError)
