r"""Attempt time limiters bounding how long a single attempt may run.

``FixedAttemptTimeLimit`` runs the operation on a worker thread and stops
waiting for it once the limit elapses. Python threads cannot be killed, so
an operation that ignores cancellation keeps running on its worker after
the attempt has been reported as timed out. Operations that may hang
should therefore bound themselves (socket timeouts, ``httpx`` timeouts,
...) or check a cancellation flag of their own.

The shared pool holds at most ``DEFAULT_MAX_WORKERS`` threads, so hung
operations cannot make it grow without bound. When all of its workers are
pinned, a new attempt waits in the queue, times out there and is
cancelled before it ever starts. Pass a dedicated ``executor`` to isolate
limiters from each other.
"""

from __future__ import annotations

__all__ = [
    "AttemptTimeLimiter",
    "FixedAttemptTimeLimit",
    "NoAttemptTimeLimit",
    "fixed_time_limit",
    "no_time_limit",
]

import logging
from abc import ABC, abstractmethod
from concurrent.futures import wait
from typing import TYPE_CHECKING, TypeVar

from aretry.exceptions import AttemptTimeoutError
from aretry.pool import get_default_pool
from aretry.validation import check_positive

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Executor

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class AttemptTimeLimiter(ABC):
    """Abstract base class for attempt time limiters."""

    @abstractmethod
    def call(self, operation: Callable[[], T]) -> T:
        """Invoke ``operation`` within the time limit.

        Args:
            operation: The zero-argument callable to invoke.

        Returns:
            The value returned by ``operation``.

        Raises:
            AttemptTimeoutError: If the time limit elapsed first.
            Exception: Any exception raised by ``operation``.
        """


class NoAttemptTimeLimit(AttemptTimeLimiter):
    """Time limiter invoking the operation directly, without any bound."""

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def call(self, operation: Callable[[], T]) -> T:
        return operation()


class FixedAttemptTimeLimit(AttemptTimeLimiter):
    r"""Time limiter giving every attempt the same time budget.

    Args:
        duration: The number of seconds an attempt may run. Must be > 0.
        executor: The executor running the operation. Defaults to the
            process-wide ``CachedThreadPool``, which reuses idle workers
            across calls, retires them after a minute without work and
            never holds more than ``DEFAULT_MAX_WORKERS`` threads.

    Raises:
        ValueError: If ``duration`` is not positive.

    Example:
        ```pycon
        >>> from aretry.limiter import FixedAttemptTimeLimit
        >>> limiter = FixedAttemptTimeLimit(duration=1.0)
        >>> limiter.call(lambda: "done")
        'done'

        ```
    """

    def __init__(self, duration: float, executor: Executor | None = None) -> None:
        check_positive("duration", duration)
        self.duration = duration
        self.executor = executor

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(duration={self.duration})"

    def call(self, operation: Callable[[], T]) -> T:
        executor = self.executor if self.executor is not None else get_default_pool()
        future = executor.submit(operation)
        # Waiting separately keeps a TimeoutError raised by the operation
        # itself apart from the time limit
        done, _ = wait([future], timeout=self.duration)
        if not done:
            if not future.cancel():
                logger.warning(
                    f"Attempt exceeded its {self.duration}s time limit; the operation "
                    "is still running on its worker thread and will be abandoned"
                )
            raise AttemptTimeoutError(self.duration)
        return future.result()


def no_time_limit() -> AttemptTimeLimiter:
    """Return a time limiter without any time limit."""
    return NoAttemptTimeLimit()


def fixed_time_limit(duration: float, executor: Executor | None = None) -> AttemptTimeLimiter:
    """Return a time limiter with a fixed time limit for each attempt.

    Args:
        duration: The number of seconds an attempt may run.
        executor: Optional executor used to enforce the time limit.

    Returns:
        The configured time limiter.
    """
    return FixedAttemptTimeLimit(duration=duration, executor=executor)
