r"""Constant wait strategies."""

from __future__ import annotations

__all__ = ["FixedWait", "NoWait"]

from typing import TYPE_CHECKING, Any

from aretry.validation import check_non_negative
from aretry.wait.base import WaitStrategy

if TYPE_CHECKING:
    from aretry.attempt import Attempt


class FixedWait(WaitStrategy):
    """Wait strategy returning the same delay after every attempt.

    Args:
        sleep_time: The delay in seconds. Must be >= 0.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.wait import FixedWait
        >>> wait = FixedWait(2.5)
        >>> wait.compute_sleep_time(Attempt.from_result(None, attempt_number=1))
        2.5
        >>> wait.compute_sleep_time(Attempt.from_result(None, attempt_number=10))
        2.5

        ```
    """

    def __init__(self, sleep_time: float) -> None:
        check_non_negative("sleep_time", sleep_time)
        self.sleep_time = sleep_time

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(sleep_time={self.sleep_time})"

    def compute_sleep_time(self, attempt: Attempt[Any]) -> float:  # noqa: ARG002
        return self.sleep_time


class NoWait(FixedWait):
    """Wait strategy retrying immediately."""

    def __init__(self) -> None:
        super().__init__(0.0)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"
