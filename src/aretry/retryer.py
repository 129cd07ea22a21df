r"""Retryer executing an operation until it succeeds or retrying stops.

This module implements the retry loop using a composition of strategy
objects: a time limiter runs each attempt, listeners observe it, a
rejection predicate decides whether it must be retried, and the stop,
wait and block strategies decide whether, how long and how to wait
before the next one.
"""

from __future__ import annotations

__all__ = ["Retryer", "RetryerCallable"]

import logging
import time
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from aretry.attempt import Attempt
from aretry.block import SleepBlockStrategy
from aretry.cancellation import CancellationToken
from aretry.exceptions import RetryCancelledError
from aretry.limiter import NoAttemptTimeLimit
from aretry.listeners import ListenerManager
from aretry.outcome import Exhausted, OperationFailed, Success
from aretry.predicates import AnyAttemptPredicate
from aretry.stop import NeverStop
from aretry.wait.fixed import NoWait

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from aretry.block import BlockStrategy
    from aretry.limiter import AttemptTimeLimiter
    from aretry.outcome import RetryOutcome
    from aretry.stop import StopStrategy
    from aretry.wait.base import WaitStrategy

logger: logging.Logger = logging.getLogger(__name__)

V = TypeVar("V")


class Retryer(Generic[V]):
    r"""Executes an operation, retrying it until it is accepted or a stop
    strategy decides to stop.

    A retryer is immutable and keeps no state between calls, so one
    instance can be used concurrently from several threads provided the
    strategies, predicate and listeners given to it are themselves safe to
    share. There is no implicit limit on the number of attempts: with the
    default ``NeverStop`` strategy, an operation that is always rejected is
    retried until the call is cancelled.

    Args:
        attempt_time_limiter: Bounds the duration of each attempt.
            Defaults to no time limit.
        stop_strategy: Decides when to stop retrying. Defaults to never
            stopping.
        wait_strategy: Computes the delay between attempts. Defaults to no
            delay.
        block_strategy: Performs the delay. Defaults to sleeping on the
            cancellation token.
        rejection_predicate: Returns ``True`` for attempts that must be
            retried. Defaults to rejecting nothing, so the first attempt
            is always accepted.
        listeners: Callables notified of every attempt, in order. A
            listener raising an exception is logged and skipped.

    Example:
        ```pycon
        >>> from aretry import Retryer
        >>> from aretry.predicates import ExceptionTypePredicate
        >>> from aretry.stop import StopAfterAttempt
        >>> calls = []
        >>> def flaky():
        ...     calls.append(1)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("not yet")
        ...     return "ok"
        ...
        >>> retryer = Retryer(
        ...     stop_strategy=StopAfterAttempt(5),
        ...     rejection_predicate=ExceptionTypePredicate(ConnectionError),
        ... )
        >>> retryer.call(flaky)
        'ok'
        >>> len(calls)
        3

        ```
    """

    def __init__(
        self,
        attempt_time_limiter: AttemptTimeLimiter | None = None,
        stop_strategy: StopStrategy | None = None,
        wait_strategy: WaitStrategy | None = None,
        block_strategy: BlockStrategy | None = None,
        rejection_predicate: Callable[[Attempt[Any]], bool] | None = None,
        listeners: Iterable[Callable[[Attempt[Any]], None]] = (),
    ) -> None:
        self._attempt_time_limiter = (
            attempt_time_limiter if attempt_time_limiter is not None else NoAttemptTimeLimit()
        )
        self._stop_strategy = stop_strategy if stop_strategy is not None else NeverStop()
        self._wait_strategy = wait_strategy if wait_strategy is not None else NoWait()
        self._block_strategy = (
            block_strategy if block_strategy is not None else SleepBlockStrategy()
        )
        self._rejection_predicate = (
            rejection_predicate if rejection_predicate is not None else AnyAttemptPredicate()
        )
        self._listeners = ListenerManager(listeners)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}("
            f"attempt_time_limiter={self._attempt_time_limiter!r}, "
            f"stop_strategy={self._stop_strategy!r}, "
            f"wait_strategy={self._wait_strategy!r}, "
            f"block_strategy={self._block_strategy!r}, "
            f"rejection_predicate={self._rejection_predicate!r}, "
            f"listeners={len(self._listeners)})"
        )

    @property
    def attempt_time_limiter(self) -> AttemptTimeLimiter:
        return self._attempt_time_limiter

    @property
    def stop_strategy(self) -> StopStrategy:
        return self._stop_strategy

    @property
    def wait_strategy(self) -> WaitStrategy:
        return self._wait_strategy

    @property
    def block_strategy(self) -> BlockStrategy:
        return self._block_strategy

    @property
    def rejection_predicate(self) -> Callable[[Attempt[Any]], bool]:
        return self._rejection_predicate

    @property
    def listeners(self) -> tuple[Callable[[Attempt[Any]], None], ...]:
        return self._listeners.listeners

    def run(
        self,
        operation: Callable[[], V],
        *,
        cancellation: CancellationToken | None = None,
    ) -> RetryOutcome[V]:
        """Execute ``operation`` with retries and return how it ended.

        Unlike ``call``, this method does not raise when the operation
        fails or when retrying is exhausted.

        Args:
            operation: The zero-argument callable to execute. It may be
                invoked many times.
            cancellation: Token that aborts the loop when cancelled while
                waiting between attempts. It is left cancelled.

        Returns:
            ``Success`` with the value of the accepted attempt,
            ``OperationFailed`` if the accepted attempt raised, or
            ``Exhausted`` with the last rejected attempt.
        """
        if cancellation is None:
            cancellation = CancellationToken()
        start_time = time.monotonic()
        attempt_number = 1
        while True:
            attempt = self._make_attempt(operation, attempt_number, start_time)
            self._listeners.notify(attempt)

            if not self._rejection_predicate(attempt):
                logger.debug(f"Attempt {attempt_number} accepted")
                if attempt.has_exception():
                    return OperationFailed(cause=attempt.get_exception_cause(), attempt=attempt)
                return Success(value=attempt.get_result(), attempt=attempt)

            if self._stop_strategy.should_stop(attempt):
                logger.debug(
                    f"Attempt {attempt_number} rejected, stop strategy "
                    f"{self._stop_strategy!r} ends retrying"
                )
                return Exhausted(attempt=attempt)

            sleep_time = self._wait_strategy.compute_sleep_time(attempt)
            logger.debug(
                f"Attempt {attempt_number} rejected, waiting {sleep_time:.3f}s before "
                f"attempt {attempt_number + 1}"
            )
            try:
                self._block_strategy.block(sleep_time, cancellation)
            except RetryCancelledError:
                logger.debug(f"Retrying cancelled after attempt {attempt_number}")
                return Exhausted(attempt=attempt, cancelled=True)
            attempt_number += 1

    def call(
        self,
        operation: Callable[[], V],
        *,
        cancellation: CancellationToken | None = None,
    ) -> V:
        """Execute ``operation`` with retries and return its value.

        Args:
            operation: The zero-argument callable to execute. It may be
                invoked many times.
            cancellation: Token that aborts the loop when cancelled while
                waiting between attempts. It is left cancelled.

        Returns:
            The value of the accepted attempt.

        Raises:
            ExecutionError: If the accepted attempt raised an exception.
                The original exception is chained as ``__cause__``.
            RetryError: If the stop strategy ended retrying, or the token
                was cancelled, while the last attempt was still rejected.
        """
        return self.run(operation, cancellation=cancellation).unwrap()

    def wrap(self, operation: Callable[[], V]) -> RetryerCallable[V]:
        """Wrap ``operation`` into a callable retried by this retryer.

        The returned callable can be handed to an executor.

        Args:
            operation: The zero-argument callable to wrap.

        Returns:
            A zero-argument callable performing ``self.call(operation)``.
        """
        return RetryerCallable(self, operation)

    def _make_attempt(
        self, operation: Callable[[], V], attempt_number: int, start_time: float
    ) -> Attempt[V]:
        try:
            result = self._attempt_time_limiter.call(operation)
        except Exception as exc:  # noqa: BLE001
            return Attempt.from_exception(
                exc,
                attempt_number=attempt_number,
                delay_since_first_attempt=time.monotonic() - start_time,
            )
        return Attempt.from_result(
            result,
            attempt_number=attempt_number,
            delay_since_first_attempt=time.monotonic() - start_time,
        )


class RetryerCallable(Generic[V]):
    """Zero-argument callable executing an operation through a retryer.

    Args:
        retryer: The retryer executing the operation.
        operation: The wrapped operation.
    """

    def __init__(self, retryer: Retryer[V], operation: Callable[[], V]) -> None:
        self.retryer = retryer
        self.operation = operation

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({self.operation!r})"

    def __call__(self) -> V:
        return self.retryer.call(self.operation)
