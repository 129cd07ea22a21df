r"""Exponential wait strategy."""

from __future__ import annotations

__all__ = ["ExponentialWait"]

import math
from typing import TYPE_CHECKING, Any

from aretry.validation import check_non_negative, check_positive
from aretry.wait.base import WaitStrategy

if TYPE_CHECKING:
    from aretry.attempt import Attempt


class ExponentialWait(WaitStrategy):
    """Exponential wait strategy.

    Calculates delay as: multiplier * (2 ** attempt_number), capped at
    ``maximum``. Attempt numbers large enough to overflow a float saturate
    to ``maximum``.

    Args:
        multiplier: The multiplier applied to the power of two, in seconds
            (default: 1.0). Must be >= 0.
        maximum: The maximum delay in seconds (default: unbounded). Must
            be > 0.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.wait import ExponentialWait
        >>> wait = ExponentialWait()
        >>> [wait.compute_sleep_time(Attempt.from_result(None, n)) for n in range(1, 5)]
        [2.0, 4.0, 8.0, 16.0]
        >>> # With a maximum
        >>> wait = ExponentialWait(maximum=40.0)
        >>> wait.compute_sleep_time(Attempt.from_result(None, attempt_number=6))
        40.0

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
        try:
            delay = math.ldexp(self.multiplier, attempt.attempt_number)
        except OverflowError:
            return self.maximum
        return min(delay, self.maximum)
