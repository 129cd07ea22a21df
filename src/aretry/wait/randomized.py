r"""Random wait strategy."""

from __future__ import annotations

__all__ = ["RandomWait"]

import random
from typing import TYPE_CHECKING, Any

from aretry.validation import check_non_negative
from aretry.wait.base import WaitStrategy

if TYPE_CHECKING:
    from aretry.attempt import Attempt


class RandomWait(WaitStrategy):
    """Wait strategy sampling a uniformly random delay.

    A new delay is drawn every time, in ``[minimum, maximum]``. Spreading
    retries this way keeps concurrent callers from retrying in lockstep.

    Args:
        maximum: The maximum delay in seconds.
        minimum: The minimum delay in seconds (default: 0). Must be >= 0
            and lower than ``maximum``.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.wait import RandomWait
        >>> wait = RandomWait(maximum=2.0, minimum=1.0)
        >>> 1.0 <= wait.compute_sleep_time(Attempt.from_result(None, 1)) <= 2.0
        True

        ```
    """

    def __init__(self, maximum: float, minimum: float = 0.0) -> None:
        check_non_negative("minimum", minimum)
        if maximum <= minimum:
            msg = f"maximum must be > minimum ({minimum}), got {maximum}"
            raise ValueError(msg)
        self.minimum = minimum
        self.maximum = maximum

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(maximum={self.maximum}, "
            f"minimum={self.minimum})"
        )

    def compute_sleep_time(self, attempt: Attempt[Any]) -> float:  # noqa: ARG002
        return random.uniform(self.minimum, self.maximum)  # noqa: S311
