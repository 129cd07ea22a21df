r"""Unit tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from aretry.attempt import Attempt
from aretry.exceptions import (
    AttemptStateError,
    AttemptTimeoutError,
    ConfigurationError,
    ExecutionError,
    RetryCancelledError,
    RetryError,
    RetryingError,
)


@pytest.mark.parametrize(
    "error_type",
    [
        AttemptStateError,
        AttemptTimeoutError,
        ConfigurationError,
        ExecutionError,
        RetryCancelledError,
        RetryError,
    ],
)
def test_errors_share_base_class(error_type: type[Exception]) -> None:
    """Test that every error derives from RetryingError."""
    assert issubclass(error_type, RetryingError)


def test_execution_error_wraps_cause() -> None:
    """Test ExecutionError keeps the original exception."""
    cause = ValueError("bad value")
    error = ExecutionError(cause)
    assert error.cause is cause
    assert error.__cause__ is cause
    assert str(error) == "ValueError: bad value"


def test_retry_error_with_result_attempt() -> None:
    """Test RetryError when the last attempt returned a value."""
    attempt = Attempt.from_result(None, attempt_number=3)
    error = RetryError(attempt)
    assert error.last_failed_attempt is attempt
    assert error.attempt_count == 3
    assert error.__cause__ is None
    assert not error.cancelled
    assert str(error) == "Retrying failed to complete successfully after 3 attempts."


def test_retry_error_with_exception_attempt() -> None:
    """Test RetryError exposes the last exception as its cause."""
    cause = ConnectionError("refused")
    error = RetryError(Attempt.from_exception(cause, attempt_number=5))
    assert error.attempt_count == 5
    assert error.__cause__ is cause


def test_retry_error_cancelled() -> None:
    """Test the message of a RetryError caused by a cancellation."""
    error = RetryError(Attempt.from_result(None, attempt_number=2), cancelled=True)
    assert error.cancelled
    assert str(error).endswith("after 2 attempts. (cancelled)")


def test_attempt_timeout_error() -> None:
    """Test AttemptTimeoutError is a TimeoutError."""
    error = AttemptTimeoutError(1.5)
    assert isinstance(error, TimeoutError)
    assert error.duration == 1.5
    assert "1.5s" in str(error)


def test_configuration_error_is_value_error() -> None:
    """Test ConfigurationError is a ValueError."""
    assert issubclass(ConfigurationError, ValueError)
