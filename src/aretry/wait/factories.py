r"""Factory functions for the wait strategies."""

from __future__ import annotations

__all__ = [
    "exception_wait",
    "exponential_wait",
    "fibonacci_wait",
    "fixed_wait",
    "incrementing_wait",
    "join",
    "no_wait",
    "random_wait",
]

import math
from typing import TYPE_CHECKING

from aretry.wait.exception import ExceptionWait
from aretry.wait.exponential import ExponentialWait
from aretry.wait.fibonacci import FibonacciWait
from aretry.wait.fixed import FixedWait, NoWait
from aretry.wait.incrementing import IncrementingWait
from aretry.wait.join import JoinWait
from aretry.wait.randomized import RandomWait

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.wait.base import WaitStrategy


def no_wait() -> WaitStrategy:
    """Return a wait strategy that doesn't sleep between attempts."""
    return NoWait()


def fixed_wait(sleep_time: float) -> WaitStrategy:
    """Return a wait strategy sleeping ``sleep_time`` seconds."""
    return FixedWait(sleep_time)


def random_wait(maximum: float, minimum: float = 0.0) -> WaitStrategy:
    """Return a wait strategy sleeping a random time in
    ``[minimum, maximum]``."""
    return RandomWait(maximum=maximum, minimum=minimum)


def incrementing_wait(initial: float, increment: float) -> WaitStrategy:
    """Return a wait strategy sleeping ``initial`` seconds after the first
    attempt and ``increment`` more after each further one."""
    return IncrementingWait(initial=initial, increment=increment)


def exponential_wait(multiplier: float = 1.0, maximum: float = math.inf) -> WaitStrategy:
    """Return a wait strategy sleeping ``multiplier * 2 ** attempt_number``
    seconds, capped at ``maximum``."""
    return ExponentialWait(multiplier=multiplier, maximum=maximum)


def fibonacci_wait(multiplier: float = 1.0, maximum: float = math.inf) -> WaitStrategy:
    """Return a wait strategy sleeping ``multiplier * fibonacci(attempt_number)``
    seconds, capped at ``maximum``."""
    return FibonacciWait(multiplier=multiplier, maximum=maximum)


def exception_wait(
    exception_type: type[BaseException], function: Callable[[BaseException], float]
) -> WaitStrategy:
    """Return a wait strategy computing the delay from the raised
    exception."""
    return ExceptionWait(exception_type, function)


def join(*strategies: WaitStrategy) -> WaitStrategy:
    """Return a wait strategy summing the delays of ``strategies``.

    Raises:
        ValueError: If one of the strategies is ``None``.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.wait import fixed_wait, incrementing_wait, join
        >>> wait = join(fixed_wait(1.0), incrementing_wait(1.0, 1.0))
        >>> wait.compute_sleep_time(Attempt.from_result(None, attempt_number=2))
        3.0

        ```
    """
    return JoinWait(*strategies)
