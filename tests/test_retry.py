"""Tests for the retry module."""

from unittest.mock import Mock, patch

import pytest

from slaveplay.exceptions import (
    InvalidArgument,
    ProcessTerminated,
    ResponseTimeout,
    SessionClosed,
)
from slaveplay.retry import retry_operation


class TestRetryOperation:
    """Tests for the retry_operation function."""

    def test_successful_execution(self) -> None:
        """Test that the function is called once when it succeeds."""
        mock_func = Mock(return_value="12.5")
        assert retry_operation(mock_func, "time_pos") == "12.5"
        mock_func.assert_called_once_with("time_pos")

    def test_retry_on_timeout(self) -> None:
        """Test that timeouts are retried by default."""
        mock_func = Mock(side_effect=[ResponseTimeout("x"), ResponseTimeout("x"), "ok"])
        assert retry_operation(mock_func, max_tries=3) == "ok"
        assert mock_func.call_count == 3

    def test_max_tries_exceeded(self) -> None:
        """Test that the last exception is raised when max tries are exceeded."""
        mock_func = Mock(side_effect=ResponseTimeout("no reply"))
        with pytest.raises(ResponseTimeout, match="no reply"):
            retry_operation(mock_func, max_tries=2)
        assert mock_func.call_count == 2

    @pytest.mark.parametrize(
        "error", [ProcessTerminated("gone"), SessionClosed(), InvalidArgument("bad")]
    )
    def test_no_retry_on_fatal_errors(self, error: Exception) -> None:
        """Test that terminal and argument errors are not retried."""
        mock_func = Mock(side_effect=error)
        with pytest.raises(type(error)):
            retry_operation(mock_func, max_tries=3)
        mock_func.assert_called_once()

    def test_no_retry_takes_precedence(self) -> None:
        """Test that no_retry_exceptions wins over retry_exceptions."""
        mock_func = Mock(side_effect=ValueError("Do not retry"))
        with pytest.raises(ValueError):
            retry_operation(
                mock_func,
                retry_exceptions=(Exception,),
                no_retry_exceptions=(ValueError,),
            )
        mock_func.assert_called_once()

    def test_backoff(self) -> None:
        """Test that the delay grows with the backoff factor."""
        mock_func = Mock(side_effect=[ResponseTimeout("x"), ResponseTimeout("x"), "ok"])
        with patch("time.sleep") as mock_sleep:
            retry_operation(mock_func, max_tries=3, retry_delay=1.0, backoff_factor=2.0)
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]

    def test_no_delay_by_default(self) -> None:
        """Test that retries do not sleep without a delay."""
        mock_func = Mock(side_effect=[ResponseTimeout("x"), "ok"])
        with patch("time.sleep") as mock_sleep:
            retry_operation(mock_func)
        mock_sleep.assert_not_called()

    def test_invalid_max_tries(self) -> None:
        """Test that at least one attempt is required."""
        with pytest.raises(ValueError):
            retry_operation(Mock(), max_tries=0)
