r"""Incrementing (linear) wait strategy."""

from __future__ import annotations

__all__ = ["IncrementingWait"]

from typing import TYPE_CHECKING, Any

from aretry.validation import check_non_negative
from aretry.wait.base import WaitStrategy

if TYPE_CHECKING:
    from aretry.attempt import Attempt


class IncrementingWait(WaitStrategy):
    """Wait strategy increasing the delay by a fixed step.

    Calculates delay as: initial + increment * (attempt_number - 1). A
    negative ``increment`` makes the delay shrink, and the result never
    goes below 0.

    Args:
        initial: The delay after the first attempt, in seconds. Must be
            >= 0.
        increment: The step added after each further attempt, in seconds.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.wait import IncrementingWait
        >>> wait = IncrementingWait(initial=1.0, increment=0.5)
        >>> wait.compute_sleep_time(Attempt.from_result(None, attempt_number=1))
        1.0
        >>> wait.compute_sleep_time(Attempt.from_result(None, attempt_number=3))
        2.0

        ```
    """

    def __init__(self, initial: float, increment: float) -> None:
        check_non_negative("initial", initial)
        self.initial = initial
        self.increment = increment

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(initial={self.initial}, "
            f"increment={self.increment})"
        )

    def compute_sleep_time(self, attempt: Attempt[Any]) -> float:
        delay = self.initial + self.increment * (attempt.attempt_number - 1)
        return max(delay, 0.0)
