r"""Abstract base class for wait strategies."""

from __future__ import annotations

__all__ = ["WaitStrategy"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aretry.attempt import Attempt
    from aretry.wait.join import JoinWait


class WaitStrategy(ABC):
    """Abstract base class for wait strategies.

    A wait strategy determines how long to wait before the next attempt,
    based on the last rejected attempt. Strategies can be summed with
    ``+``, which builds a ``JoinWait``.
    """

    def __add__(self, other: WaitStrategy) -> JoinWait:
        from aretry.wait.join import JoinWait  # noqa: PLC0415

        if not isinstance(other, WaitStrategy):
            return NotImplemented
        return JoinWait(self, other)

    @abstractmethod
    def compute_sleep_time(self, attempt: Attempt[Any]) -> float:
        """Compute the delay before the next attempt.

        Args:
            attempt: The last rejected attempt. ``attempt.attempt_number``
                is 1 after the first attempt.

        Returns:
            The delay in seconds, never negative.
        """
