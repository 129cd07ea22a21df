r"""Wait strategy computed from the exception of the last attempt."""

from __future__ import annotations

__all__ = ["ExceptionWait"]

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from aretry.wait.base import WaitStrategy

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.attempt import Attempt

E = TypeVar("E", bound=BaseException)


class ExceptionWait(WaitStrategy, Generic[E]):
    """Wait strategy delegating to a function of the raised exception.

    The function is only called when the last attempt raised an instance of
    ``exception_type`` (or of a subclass). Any other attempt gets no delay.
    Useful when the error itself says how long to back off, like a
    rate-limit error carrying a retry-after value.

    Args:
        exception_type: The exception type the function applies to.
        function: Computes the delay in seconds from the exception.
            Negative values are treated as 0.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.wait import ExceptionWait
        >>> wait = ExceptionWait(TimeoutError, lambda exc: 5.0)
        >>> wait.compute_sleep_time(Attempt.from_exception(TimeoutError(), 1))
        5.0
        >>> wait.compute_sleep_time(Attempt.from_exception(KeyError(), 1))
        0.0

        ```
    """

    def __init__(self, exception_type: type[E], function: Callable[[E], float]) -> None:
        if exception_type is None:
            msg = "exception_type may not be None"
            raise ValueError(msg)
        if function is None:
            msg = "function may not be None"
            raise ValueError(msg)
        self.exception_type = exception_type
        self.function = function

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}({self.exception_type.__name__}, "
            f"{self.function!r})"
        )

    def compute_sleep_time(self, attempt: Attempt[Any]) -> float:
        if attempt.has_exception():
            cause = attempt.get_exception_cause()
            if isinstance(cause, self.exception_type):
                return max(float(self.function(cause)), 0.0)
        return 0.0
