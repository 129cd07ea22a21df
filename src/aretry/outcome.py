r"""Tagged outcome of a retry loop.

``Retryer.run`` returns one of three variants so callers can branch on the
way the loop ended without relying on exception types:

- ``Success``: an attempt returning a value was accepted.
- ``OperationFailed``: an attempt raising an exception was accepted.
- ``Exhausted``: retrying ended while the last attempt was still rejected.

Example:
    ```pycon
    >>> from aretry.attempt import Attempt
    >>> from aretry.outcome import Exhausted, OperationFailed, Success
    >>> outcome = Success(value=3, attempt=Attempt.from_result(3, attempt_number=2))
    >>> match outcome:
    ...     case Success(value=value):
    ...         print(f"got {value}")
    ...     case OperationFailed(cause=cause):
    ...         print(f"failed with {cause!r}")
    ...     case Exhausted(attempt=attempt):
    ...         print(f"gave up after {attempt.attempt_number}")
    ...
    got 3

    ```
"""

from __future__ import annotations

__all__ = ["Exhausted", "OperationFailed", "RetryOutcome", "Success"]

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from aretry.attempt import Attempt
from aretry.exceptions import ExecutionError, RetryError

V = TypeVar("V")


@dataclass(frozen=True)
class Success(Generic[V]):
    """The loop accepted an attempt returning ``value``."""

    value: V
    attempt: Attempt[V]

    def unwrap(self) -> V:
        """Return the value."""
        return self.value


@dataclass(frozen=True)
class OperationFailed:
    """The loop accepted an attempt raising ``cause``."""

    cause: BaseException
    attempt: Attempt[Any]

    def unwrap(self) -> Any:
        """Raise ``ExecutionError`` chained to the cause."""
        raise ExecutionError(self.cause)


@dataclass(frozen=True)
class Exhausted:
    """Retrying ended while ``attempt`` was still rejected.

    ``cancelled`` is ``True`` when the loop ended because the calling
    context was cancelled rather than because the stop strategy said so.
    """

    attempt: Attempt[Any]
    cancelled: bool = False

    @property
    def attempt_count(self) -> int:
        """The number of attempts made."""
        return self.attempt.attempt_number

    def unwrap(self) -> Any:
        """Raise ``RetryError`` carrying the last attempt."""
        raise RetryError(self.attempt, cancelled=self.cancelled)


RetryOutcome = Union[Success[V], OperationFailed, Exhausted]
