r"""Immutable record of one execution of a retried operation."""

from __future__ import annotations

__all__ = ["Attempt"]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from aretry.exceptions import AttemptStateError, ExecutionError

if TYPE_CHECKING:
    from collections.abc import Callable

V = TypeVar("V")
T = TypeVar("T")


@dataclass(frozen=True)
class Attempt(Generic[V]):
    """Outcome of one attempt: either a result or an exception.

    An attempt is a two-variant value. The exception variant is the one
    whose ``exception`` is set; every other attempt holds a result, which
    may legitimately be ``None``. Use ``from_result`` and
    ``from_exception`` to build one.

    Args:
        result: The value returned by the operation.
        exception: The exception raised by the operation.
        attempt_number: The 1-indexed number of this attempt within one
            call.
        delay_since_first_attempt: Seconds elapsed between the start of
            the first attempt of the call and the end of this one.

    Raises:
        ValueError: If both a result and an exception are given, or if
            ``attempt_number`` or ``delay_since_first_attempt`` are
            out of range.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> attempt = Attempt.from_result(42, attempt_number=1)
        >>> attempt.has_result()
        True
        >>> attempt.get()
        42
        >>> failed = Attempt.from_exception(OSError("down"), attempt_number=2)
        >>> failed.get_exception_cause()
        OSError('down')

        ```
    """

    result: V | None = None
    exception: BaseException | None = None
    attempt_number: int = 1
    delay_since_first_attempt: float = field(default=0.0)

    def __post_init__(self) -> None:
        if self.exception is not None and self.result is not None:
            msg = "An attempt cannot hold both a result and an exception"
            raise ValueError(msg)
        if self.attempt_number < 1:
            msg = f"attempt_number must be >= 1, got {self.attempt_number}"
            raise ValueError(msg)
        if self.delay_since_first_attempt < 0:
            msg = (
                "delay_since_first_attempt must be >= 0, "
                f"got {self.delay_since_first_attempt}"
            )
            raise ValueError(msg)

    @classmethod
    def from_result(
        cls, result: V, attempt_number: int, delay_since_first_attempt: float = 0.0
    ) -> Attempt[V]:
        """Create an attempt that returned ``result``."""
        return cls(
            result=result,
            attempt_number=attempt_number,
            delay_since_first_attempt=delay_since_first_attempt,
        )

    @classmethod
    def from_exception(
        cls,
        exception: BaseException,
        attempt_number: int,
        delay_since_first_attempt: float = 0.0,
    ) -> Attempt[Any]:
        """Create an attempt that raised ``exception``."""
        if exception is None:
            msg = "exception may not be None"
            raise ValueError(msg)
        return cls(
            exception=exception,
            attempt_number=attempt_number,
            delay_since_first_attempt=delay_since_first_attempt,
        )

    def has_result(self) -> bool:
        """Return ``True`` if the operation returned a value."""
        return self.exception is None

    def has_exception(self) -> bool:
        """Return ``True`` if the operation raised an exception."""
        return self.exception is not None

    def get(self) -> V | None:
        """Return the result, or raise the exception wrapped.

        Raises:
            ExecutionError: If this attempt resulted in an exception. The
                original exception is chained as ``__cause__``.
        """
        if self.exception is not None:
            raise ExecutionError(self.exception)
        return self.result

    def get_result(self) -> V | None:
        """Return the result of this attempt.

        Raises:
            AttemptStateError: If this attempt resulted in an exception.
        """
        if self.exception is not None:
            msg = "The attempt resulted in an exception, not in a result"
            raise AttemptStateError(msg)
        return self.result

    def get_exception_cause(self) -> BaseException:
        """Return the exception raised by this attempt.

        Raises:
            AttemptStateError: If this attempt resulted in a result.
        """
        if self.exception is None:
            msg = "The attempt resulted in a result, not in an exception"
            raise AttemptStateError(msg)
        return self.exception

    def match(
        self,
        on_result: Callable[[V | None], T],
        on_exception: Callable[[BaseException], T],
    ) -> T:
        """Dispatch on the variant of this attempt.

        Args:
            on_result: Called with the result if this attempt holds one.
            on_exception: Called with the exception otherwise.

        Returns:
            The value returned by the selected function.

        Example:
            ```pycon
            >>> from aretry.attempt import Attempt
            >>> attempt = Attempt.from_exception(KeyError("k"), attempt_number=1)
            >>> attempt.match(lambda r: "result", lambda e: type(e).__name__)
            'KeyError'

            ```
        """
        if self.exception is not None:
            return on_exception(self.exception)
        return on_result(self.result)
