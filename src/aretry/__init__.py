r"""aretry - Retry any callable with composable strategies.

This package executes a zero-argument callable repeatedly until it
succeeds or a stop strategy decides to give up, waiting between attempts.
Every decision of the retry loop is a small strategy object, so behaviours
are assembled rather than hand-coded.

Key Features:
    - Rejection predicates on exception types, exceptions and results
    - Stop strategies: never, after a number of attempts, after a delay
    - Wait strategies: fixed, random, incrementing, exponential,
      Fibonacci, exception-driven, and their sum
    - Per-attempt time limits on a reusable worker thread pool
    - Cancellable waits between attempts
    - Listeners notified of every attempt
    - Tagged outcomes (``Retryer.run``) or exceptions (``Retryer.call``)

Example:
    ```pycon
    >>> from aretry import RetryerBuilder
    >>> from aretry.stop import stop_after_attempt
    >>> from aretry.wait import exponential_wait
    >>> retryer = (
    ...     RetryerBuilder()
    ...     .retry_if_exception_of_type(ConnectionError)
    ...     .with_wait_strategy(exponential_wait(multiplier=0.1, maximum=5.0))
    ...     .with_stop_strategy(stop_after_attempt(5))
    ...     .build()
    ... )
    >>> retryer.call(lambda: "hello")
    'hello'

    ```
"""

from __future__ import annotations

__all__ = [
    "Attempt",
    "AttemptTimeoutError",
    "CancellationToken",
    "ConfigurationError",
    "ExecutionError",
    "Exhausted",
    "OperationFailed",
    "RetryError",
    "RetryListener",
    "Retryer",
    "RetryerBuilder",
    "RetryingError",
    "Success",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.attempt import Attempt
from aretry.builder import RetryerBuilder
from aretry.cancellation import CancellationToken
from aretry.exceptions import (
    AttemptTimeoutError,
    ConfigurationError,
    ExecutionError,
    RetryError,
    RetryingError,
)
from aretry.listeners import RetryListener
from aretry.outcome import Exhausted, OperationFailed, Success
from aretry.retryer import Retryer

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
