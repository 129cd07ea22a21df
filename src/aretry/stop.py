r"""Stop strategies deciding when to give up retrying."""

from __future__ import annotations

__all__ = [
    "NeverStop",
    "StopAfterAttempt",
    "StopAfterDelay",
    "StopStrategy",
    "never_stop",
    "stop_after_attempt",
    "stop_after_delay",
]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from aretry.validation import check_non_negative

if TYPE_CHECKING:
    from aretry.attempt import Attempt


class StopStrategy(ABC):
    """Abstract base class for stop strategies.

    A stop strategy only looks at the attempt it is given and keeps no
    state between calls, so one instance can be shared by retryers running
    concurrently.
    """

    @abstractmethod
    def should_stop(self, attempt: Attempt[Any]) -> bool:
        """Return ``True`` if retrying must stop after ``attempt``.

        Args:
            attempt: The last rejected attempt.
        """


class NeverStop(StopStrategy):
    """Stop strategy which never stops."""

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def should_stop(self, attempt: Attempt[Any]) -> bool:  # noqa: ARG002
        return False


class StopAfterAttempt(StopStrategy):
    r"""Stop strategy which stops once a number of attempts has been made.

    Args:
        max_attempt_number: The maximum number of attempts. Must be >= 1.

    Raises:
        ValueError: If ``max_attempt_number`` is lower than 1.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.stop import StopAfterAttempt
        >>> stop = StopAfterAttempt(3)
        >>> stop.should_stop(Attempt.from_result(None, attempt_number=2))
        False
        >>> stop.should_stop(Attempt.from_result(None, attempt_number=3))
        True

        ```
    """

    def __init__(self, max_attempt_number: int) -> None:
        if max_attempt_number < 1:
            msg = f"max_attempt_number must be >= 1, got {max_attempt_number}"
            raise ValueError(msg)
        self.max_attempt_number = max_attempt_number

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_attempt_number={self.max_attempt_number})"

    def should_stop(self, attempt: Attempt[Any]) -> bool:
        return attempt.attempt_number >= self.max_attempt_number


class StopAfterDelay(StopStrategy):
    r"""Stop strategy which stops once a time budget has been used.

    Args:
        max_delay: The number of seconds after the first attempt started
            past which no new attempt is made. Must be >= 0.

    Raises:
        ValueError: If ``max_delay`` is negative.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.stop import StopAfterDelay
        >>> stop = StopAfterDelay(1.0)
        >>> stop.should_stop(Attempt.from_result(None, 1, delay_since_first_attempt=0.5))
        False
        >>> stop.should_stop(Attempt.from_result(None, 4, delay_since_first_attempt=1.0))
        True

        ```
    """

    def __init__(self, max_delay: float) -> None:
        check_non_negative("max_delay", max_delay)
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_delay={self.max_delay})"

    def should_stop(self, attempt: Attempt[Any]) -> bool:
        return attempt.delay_since_first_attempt >= self.max_delay


def never_stop() -> StopStrategy:
    """Return a stop strategy which never stops."""
    return NeverStop()


def stop_after_attempt(max_attempt_number: int) -> StopStrategy:
    """Return a stop strategy which stops after ``max_attempt_number``
    attempts."""
    return StopAfterAttempt(max_attempt_number)


def stop_after_delay(max_delay: float) -> StopStrategy:
    """Return a stop strategy which stops after ``max_delay`` seconds."""
    return StopAfterDelay(max_delay)
