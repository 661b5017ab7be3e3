"""
Caller-side retry logic for player commands.

Sessions never retry on their own: a failed exchange surfaces its error and
the caller decides whether repeating the command makes sense. This module is
the helper callers use once they have decided it does, typically for
ResponseTimeout on an idempotent query.
"""

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from slaveplay.exceptions import ProcessTerminated, ResponseTimeout, SessionClosed

logger = logging.getLogger(__name__)

T = TypeVar("T")


def retry_operation(
    func: Callable[..., T],
    *args: Any,
    max_tries: int = 3,
    retry_delay: float = 0.0,
    backoff_factor: float = 1.0,
    retry_exceptions: tuple[type[Exception], ...] = (ResponseTimeout,),
    no_retry_exceptions: tuple[type[Exception], ...] = (
        ProcessTerminated,
        SessionClosed,
    ),
) -> T:
    """Execute a function with retry logic.

    Args:
        func: Function to call
        *args: Arguments to pass to the function
        max_tries: Maximum number of attempts
        retry_delay: Initial delay between attempts in seconds
        backoff_factor: Multiplier for increasing delay between attempts
        retry_exceptions: Tuple of exception types to retry on
        no_retry_exceptions: Tuple of exception types to not retry on (takes precedence)

    Returns:
        Result of the function call if successful

    Raises:
        Exception: The last exception encountered if all attempts fail
    """
    if max_tries < 1:
        raise ValueError("max_tries must be at least 1")

    for attempt in range(max_tries):
        try:
            return func(*args)
        except Exception as e:
            if isinstance(e, no_retry_exceptions):
                raise
            if not isinstance(e, retry_exceptions):
                raise
            if attempt == max_tries - 1:
                raise

            logger.debug("Attempt %d/%d failed: %s", attempt + 1, max_tries, e)
            delay = retry_delay * (backoff_factor**attempt)
            if delay > 0:
                time.sleep(delay)

    # Unreachable: the last attempt either returns or raises
    raise RuntimeError("All retry attempts failed without a specific error")
