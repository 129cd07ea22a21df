r"""Wait strategy summing several wait strategies."""

from __future__ import annotations

__all__ = ["JoinWait"]

from typing import TYPE_CHECKING, Any

from aretry.wait.base import WaitStrategy

if TYPE_CHECKING:
    from aretry.attempt import Attempt


class JoinWait(WaitStrategy):
    """Wait strategy returning the sum of its components' delays.

    Args:
        *strategies: The wait strategies to sum. At least one is required
            and none may be ``None``.

    Raises:
        ValueError: If no strategy is given or one of them is ``None``.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.wait import FibonacciWait, FixedWait, JoinWait
        >>> wait = JoinWait(FixedWait(0.5), FibonacciWait(multiplier=0.25))
        >>> wait.compute_sleep_time(Attempt.from_result(None, attempt_number=4))
        1.25
        >>> (FixedWait(1.0) + FixedWait(2.0)).compute_sleep_time(
        ...     Attempt.from_result(None, attempt_number=1)
        ... )
        3.0

        ```
    """

    def __init__(self, *strategies: WaitStrategy) -> None:
        if not strategies:
            msg = "Must have at least one wait strategy"
            raise ValueError(msg)
        if any(strategy is None for strategy in strategies):
            msg = f"Cannot have a None wait strategy in {list(strategies)}"
            raise ValueError(msg)
        self.strategies = strategies

    def __repr__(self) -> str:
        inner = ", ".join(repr(strategy) for strategy in self.strategies)
        return f"{self.__class__.__qualname__}({inner})"

    def compute_sleep_time(self, attempt: Attempt[Any]) -> float:
        return sum(strategy.compute_sleep_time(attempt) for strategy in self.strategies)
