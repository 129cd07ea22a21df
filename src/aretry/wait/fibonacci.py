r"""Fibonacci wait strategy."""

from __future__ import annotations

__all__ = ["FibonacciWait"]

import math
from typing import TYPE_CHECKING, Any

from aretry.validation import check_non_negative, check_positive
from aretry.wait.base import WaitStrategy

if TYPE_CHECKING:
    from aretry.attempt import Attempt


class FibonacciWait(WaitStrategy):
    """Fibonacci wait strategy.

    Calculates delay as: multiplier * fibonacci(attempt_number), capped at
    ``maximum``.

    The Fibonacci sequence (1, 1, 2, 3, 5, 8, 13, ...) grows more gradually
    than powers of two. It is computed iteratively and the computation stops
    as soon as the cap is reached, so large attempt numbers are cheap.

    Args:
        multiplier: The multiplier applied to the Fibonacci number, in
            seconds (default: 1.0). Must be >= 0.
        maximum: The maximum delay in seconds (default: unbounded). Must
            be > 0.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.wait import FibonacciWait
        >>> wait = FibonacciWait()
        >>> [wait.compute_sleep_time(Attempt.from_result(None, n)) for n in range(1, 7)]
        [1.0, 1.0, 2.0, 3.0, 5.0, 8.0]
        >>> # With a maximum
        >>> wait = FibonacciWait(maximum=10.0)
        >>> wait.compute_sleep_time(Attempt.from_result(None, attempt_number=7))
        10.0

        ```
    """

    def __init__(self, multiplier: float = 1.0, maximum: float = math.inf) -> None:
        check_non_negative("multiplier", multiplier)
        check_positive("maximum", maximum)
        self.multiplier = float(multiplier)
        self.maximum = maximum

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(multiplier={self.multiplier}, "
            f"maximum={self.maximum})"
        )

    def compute_sleep_time(self, attempt: Attempt[Any]) -> float:
        if self.multiplier == 0:
            return 0.0
        a, b = 0, 1
        try:
            for _ in range(attempt.attempt_number - 1):
                a, b = b, a + b
                if self.multiplier * b >= self.maximum:
                    return self.maximum
            return min(self.multiplier * b, self.maximum)
        except OverflowError:
            return self.maximum
