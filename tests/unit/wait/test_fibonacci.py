r"""Unit tests for FibonacciWait."""

from __future__ import annotations

import pytest

from aretry.attempt import Attempt
from aretry.wait import FibonacciWait


def delays(wait: FibonacciWait, attempt_numbers: range) -> list[float]:
    return [wait.compute_sleep_time(Attempt.from_result(None, n)) for n in attempt_numbers]


def test_fibonacci_wait_default() -> None:
    """Test the delays follow the Fibonacci sequence."""
    assert delays(FibonacciWait(), range(1, 9)) == [1.0, 1.0, 2.0, 3.0, 5.0, 8.0, 13.0, 21.0]


def test_fibonacci_wait_multiplier() -> None:
    """Test the multiplier scales every delay."""
    assert delays(FibonacciWait(multiplier=2.0), range(1, 6)) == [2.0, 2.0, 4.0, 6.0, 10.0]


def test_fibonacci_wait_maximum() -> None:
    """Test the delay is capped once the maximum is reached."""
    wait = FibonacciWait(maximum=10.0)
    assert delays(wait, range(5, 10)) == [5.0, 8.0, 10.0, 10.0, 10.0]


def test_fibonacci_wait_large_attempt_number() -> None:
    """Test a large attempt number stops at the cap quickly."""
    wait = FibonacciWait(maximum=60.0)
    assert wait.compute_sleep_time(Attempt.from_result(None, attempt_number=10**9)) == 60.0


def test_fibonacci_wait_zero_multiplier() -> None:
    """Test a zero multiplier never waits."""
    wait = FibonacciWait(multiplier=0.0, maximum=5.0)
    assert wait.compute_sleep_time(Attempt.from_result(None, attempt_number=10**9)) == 0.0


def test_fibonacci_wait_negative_multiplier() -> None:
    """Test the multiplier must be non-negative."""
    with pytest.raises(ValueError, match=r"multiplier must be >= 0"):
        FibonacciWait(multiplier=-1.0)


@pytest.mark.parametrize("maximum", [0.0, -2.0])
def test_fibonacci_wait_incorrect_maximum(maximum: float) -> None:
    """Test the maximum must be positive."""
    with pytest.raises(ValueError, match=r"maximum must be > 0"):
        FibonacciWait(maximum=maximum)


def test_fibonacci_wait_repr() -> None:
    """Test the strategy representation."""
    assert repr(FibonacciWait()) == "FibonacciWait(multiplier=1.0, maximum=inf)"
