r"""Fluent builder assembling a ``Retryer``.

The builder holds exactly one time limiter, stop, wait and block strategy.
Setting one of them twice raises ``ConfigurationError`` instead of
silently replacing the first value; combine wait strategies explicitly
with ``aretry.wait.join``. Rejection predicates and listeners accumulate
in the order they are added.

Example:
    ```pycon
    >>> from aretry import RetryerBuilder
    >>> from aretry.stop import stop_after_attempt
    >>> from aretry.wait import fixed_wait
    >>> retryer = (
    ...     RetryerBuilder()
    ...     .retry_if_result(lambda value: value is None)
    ...     .retry_if_exception_of_type(OSError)
    ...     .with_stop_strategy(stop_after_attempt(3))
    ...     .with_wait_strategy(fixed_wait(0.01))
    ...     .build()
    ... )
    >>> retryer.call(lambda: "ready")
    'ready'

    ```
"""

from __future__ import annotations

__all__ = ["RetryerBuilder"]

from typing import TYPE_CHECKING, Any

from aretry.exceptions import ConfigurationError
from aretry.predicates import (
    AnyAttemptPredicate,
    ExceptionPredicate,
    ExceptionTypePredicate,
    ResultPredicate,
)
from aretry.retryer import Retryer
from aretry.validation import check_not_none

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.attempt import Attempt
    from aretry.block import BlockStrategy
    from aretry.limiter import AttemptTimeLimiter
    from aretry.stop import StopStrategy
    from aretry.wait.base import WaitStrategy


class RetryerBuilder:
    """Builder used to configure and create a ``Retryer``.

    Every method returns the builder itself so calls can be chained.
    Unset strategies default to no time limit, never stopping, no wait and
    sleeping between attempts; with no retry condition the first attempt
    is always accepted.
    """

    def __init__(self) -> None:
        self._attempt_time_limiter: AttemptTimeLimiter | None = None
        self._stop_strategy: StopStrategy | None = None
        self._wait_strategy: WaitStrategy | None = None
        self._block_strategy: BlockStrategy | None = None
        self._predicates: list[Callable[[Attempt[Any]], bool]] = []
        self._listeners: list[Callable[[Attempt[Any]], None]] = []

    def retry_if_exception(
        self, predicate: Callable[[BaseException], bool] | None = None
    ) -> RetryerBuilder:
        """Retry if the operation raises an exception.

        Args:
            predicate: Optional filter on the exception. Without it, any
                ``Exception`` causes a retry.
        """
        if predicate is None:
            self._predicates.append(ExceptionTypePredicate(Exception))
        else:
            self._predicates.append(ExceptionPredicate(predicate))
        return self

    def retry_if_exception_of_type(
        self, *exception_types: type[BaseException]
    ) -> RetryerBuilder:
        """Retry if the operation raises one of ``exception_types`` or a
        subclass of them."""
        for exception_type in exception_types:
            check_not_none("exception_type", exception_type)
        self._predicates.append(ExceptionTypePredicate(*exception_types))
        return self

    def retry_if_result(
        self,
        predicate: Callable[[Any], bool],
        result_type: type | tuple[type, ...] | None = None,
    ) -> RetryerBuilder:
        """Retry if the returned value satisfies ``predicate``.

        Args:
            predicate: Called with the returned value.
            result_type: Optional type the predicate applies to. Values of
                another type never cause a retry.
        """
        check_not_none("predicate", predicate)
        self._predicates.append(ResultPredicate(predicate, result_type=result_type))
        return self

    def with_attempt_time_limiter(
        self, attempt_time_limiter: AttemptTimeLimiter
    ) -> RetryerBuilder:
        """Set the time limiter bounding each attempt.

        Raises:
            ConfigurationError: If a time limiter has already been set.
        """
        check_not_none("attempt_time_limiter", attempt_time_limiter)
        self._check_unset("an attempt time limiter", self._attempt_time_limiter)
        self._attempt_time_limiter = attempt_time_limiter
        return self

    def with_stop_strategy(self, stop_strategy: StopStrategy) -> RetryerBuilder:
        """Set the strategy deciding when to stop retrying.

        Raises:
            ConfigurationError: If a stop strategy has already been set.
        """
        check_not_none("stop_strategy", stop_strategy)
        self._check_unset("a stop strategy", self._stop_strategy)
        self._stop_strategy = stop_strategy
        return self

    def with_wait_strategy(self, wait_strategy: WaitStrategy) -> RetryerBuilder:
        """Set the strategy computing the delay between attempts.

        Raises:
            ConfigurationError: If a wait strategy has already been set.
        """
        check_not_none("wait_strategy", wait_strategy)
        self._check_unset("a wait strategy", self._wait_strategy)
        self._wait_strategy = wait_strategy
        return self

    def with_block_strategy(self, block_strategy: BlockStrategy) -> RetryerBuilder:
        """Set the strategy performing the delay between attempts.

        Raises:
            ConfigurationError: If a block strategy has already been set.
        """
        check_not_none("block_strategy", block_strategy)
        self._check_unset("a block strategy", self._block_strategy)
        self._block_strategy = block_strategy
        return self

    def with_retry_listener(
        self, listener: Callable[[Attempt[Any]], None]
    ) -> RetryerBuilder:
        """Add a listener notified of every attempt."""
        check_not_none("listener", listener)
        self._listeners.append(listener)
        return self

    def build(self) -> Retryer[Any]:
        """Build the retryer."""
        return Retryer(
            attempt_time_limiter=self._attempt_time_limiter,
            stop_strategy=self._stop_strategy,
            wait_strategy=self._wait_strategy,
            block_strategy=self._block_strategy,
            rejection_predicate=AnyAttemptPredicate(self._predicates),
            listeners=self._listeners,
        )

    @staticmethod
    def _check_unset(name: str, current: Any) -> None:
        if current is not None:
            msg = f"{name} has already been set: {current!r}"
            raise ConfigurationError(msg)
