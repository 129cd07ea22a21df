r"""Exceptions raised by the retry engine.

Two terminal failures are kept apart on purpose:

- ``ExecutionError``: the retryer accepted an attempt that raised, the
  original exception is available as ``__cause__``.
- ``RetryError``: retrying ended (stop strategy or cancellation) while the
  last attempt was still rejected.
"""

from __future__ import annotations

__all__ = [
    "AttemptStateError",
    "AttemptTimeoutError",
    "ConfigurationError",
    "ExecutionError",
    "RetryCancelledError",
    "RetryError",
    "RetryingError",
]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aretry.attempt import Attempt


class RetryingError(Exception):
    """Base class of every exception raised by aretry."""


class ExecutionError(RetryingError):
    """Exception raised when an accepted attempt resulted in an exception.

    The original exception is stored in ``cause`` and chained as
    ``__cause__`` so tracebacks show both.

    Args:
        cause: The exception raised by the operation.

    Example:
        ```pycon
        >>> from aretry.exceptions import ExecutionError
        >>> error = ExecutionError(ValueError("boom"))
        >>> error.cause
        ValueError('boom')
        >>> error.__cause__ is error.cause
        True

        ```
    """

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.cause = cause
        self.__cause__ = cause


class RetryError(RetryingError):
    """Exception raised when none of the attempts succeeded.

    If the last attempt resulted in an exception, it is chained as
    ``__cause__``. Otherwise no cause is set and the rejected result is
    available through ``last_failed_attempt``.

    Args:
        last_failed_attempt: The attempt that was rejected when retrying
            ended.
        cancelled: ``True`` if retrying ended because the calling context
            was cancelled while waiting between attempts.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.exceptions import RetryError
        >>> error = RetryError(Attempt.from_result(None, attempt_number=3))
        >>> error.attempt_count
        3
        >>> str(error)
        'Retrying failed to complete successfully after 3 attempts.'

        ```
    """

    def __init__(self, last_failed_attempt: Attempt[Any], cancelled: bool = False) -> None:
        msg = (
            "Retrying failed to complete successfully after "
            f"{last_failed_attempt.attempt_number} attempts."
        )
        if cancelled:
            msg = f"{msg} (cancelled)"
        super().__init__(msg)
        self.last_failed_attempt = last_failed_attempt
        self.cancelled = cancelled
        if last_failed_attempt.has_exception():
            self.__cause__ = last_failed_attempt.get_exception_cause()

    @property
    def attempt_count(self) -> int:
        """The number of attempts made before retrying ended."""
        return self.last_failed_attempt.attempt_number


class AttemptTimeoutError(RetryingError, TimeoutError):
    """Exception raised when a single attempt exceeds its time limit."""

    def __init__(self, duration: float) -> None:
        super().__init__(f"Attempt did not complete within {duration}s")
        self.duration = duration


class RetryCancelledError(RetryingError):
    """Exception raised by a block strategy when its wait is cancelled."""


class ConfigurationError(RetryingError, ValueError):
    """Exception raised when a retryer is configured inconsistently."""


class AttemptStateError(RetryingError, RuntimeError):
    """Exception raised when reading the wrong variant of an attempt."""
