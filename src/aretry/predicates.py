r"""Rejection predicates deciding whether an attempt should be retried.

A predicate returns ``True`` when the attempt must be rejected, i.e.
retried. Sub-predicates are combined with a logical OR by
``AnyAttemptPredicate``; with no sub-predicate nothing is ever rejected.
"""

from __future__ import annotations

__all__ = [
    "AnyAttemptPredicate",
    "AttemptPredicate",
    "ExceptionPredicate",
    "ExceptionTypePredicate",
    "ResultPredicate",
]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from aretry.attempt import Attempt

logger: logging.Logger = logging.getLogger(__name__)


class AttemptPredicate(ABC):
    """Abstract base class for predicates over attempts."""

    def __call__(self, attempt: Attempt[Any]) -> bool:
        return self.test(attempt)

    @abstractmethod
    def test(self, attempt: Attempt[Any]) -> bool:
        """Return ``True`` if ``attempt`` should be retried.

        Args:
            attempt: The attempt to evaluate.
        """


class ExceptionTypePredicate(AttemptPredicate):
    r"""Predicate matching attempts that raised one of the given types.

    Subclasses of the given types match too. Result attempts never match.

    Args:
        *exception_types: The exception types causing a retry.

    Raises:
        ValueError: If no exception type is given.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.predicates import ExceptionTypePredicate
        >>> predicate = ExceptionTypePredicate(OSError)
        >>> predicate.test(Attempt.from_exception(ConnectionError(), attempt_number=1))
        True
        >>> predicate.test(Attempt.from_exception(KeyError(), attempt_number=1))
        False
        >>> predicate.test(Attempt.from_result(None, attempt_number=1))
        False

        ```
    """

    def __init__(self, *exception_types: type[BaseException]) -> None:
        if not exception_types:
            msg = "At least one exception type is required"
            raise ValueError(msg)
        self.exception_types = exception_types

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t in self.exception_types)
        return f"{self.__class__.__qualname__}({names})"

    def test(self, attempt: Attempt[Any]) -> bool:
        return attempt.has_exception() and isinstance(
            attempt.get_exception_cause(), self.exception_types
        )


class ExceptionPredicate(AttemptPredicate):
    """Predicate delegating to a function of the raised exception.

    Args:
        predicate: Called with the exception of exception attempts.
            Result attempts never match.
    """

    def __init__(self, predicate: Callable[[BaseException], bool]) -> None:
        self.predicate = predicate

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({self.predicate!r})"

    def test(self, attempt: Attempt[Any]) -> bool:
        return attempt.has_exception() and bool(
            self.predicate(attempt.get_exception_cause())
        )


class ResultPredicate(AttemptPredicate):
    r"""Predicate delegating to a function of the returned value.

    Exception attempts never match. A result that does not fit the
    predicate is treated as a non-match rather than an error: when
    ``result_type`` is given, results of another type are skipped, and a
    ``TypeError`` or ``AttributeError`` raised by the predicate, like
    ``lambda response: response.status_code == 503`` applied to a string,
    evaluates to ``False``.

    Args:
        predicate: Called with the result of result attempts.
        result_type: Optional type (or tuple of types) the predicate
            expects.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.predicates import ResultPredicate
        >>> predicate = ResultPredicate(lambda value: value < 0)
        >>> predicate.test(Attempt.from_result(-1, attempt_number=1))
        True
        >>> predicate.test(Attempt.from_result("text", attempt_number=1))
        False

        ```
    """

    def __init__(
        self,
        predicate: Callable[[Any], bool],
        result_type: type | tuple[type, ...] | None = None,
    ) -> None:
        self.predicate = predicate
        self.result_type = result_type

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}({self.predicate!r}, "
            f"result_type={self.result_type!r})"
        )

    def test(self, attempt: Attempt[Any]) -> bool:
        if not attempt.has_result():
            return False
        result = attempt.get_result()
        if self.result_type is not None and not isinstance(result, self.result_type):
            return False
        try:
            return bool(self.predicate(result))
        except (TypeError, AttributeError) as exc:
            logger.debug(
                f"Result predicate does not apply to {type(result).__name__} "
                f"result ({exc}), treating it as a non-match"
            )
            return False


class AnyAttemptPredicate(AttemptPredicate):
    r"""Logical OR of several predicates.

    Evaluation stops at the first matching predicate. With no predicate,
    no attempt is ever rejected.

    Args:
        predicates: The predicates to combine. Plain callables taking an
            attempt are accepted too.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.predicates import (
        ...     AnyAttemptPredicate,
        ...     ExceptionTypePredicate,
        ...     ResultPredicate,
        ... )
        >>> predicate = AnyAttemptPredicate(
        ...     [ResultPredicate(lambda value: value is None), ExceptionTypePredicate(OSError)]
        ... )
        >>> predicate.test(Attempt.from_result(None, attempt_number=1))
        True
        >>> predicate.test(Attempt.from_result(1, attempt_number=1))
        False
        >>> AnyAttemptPredicate().test(Attempt.from_result(None, attempt_number=1))
        False

        ```
    """

    def __init__(
        self, predicates: Iterable[Callable[[Attempt[Any]], bool]] = ()
    ) -> None:
        self.predicates = tuple(predicates)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({list(self.predicates)!r})"

    def test(self, attempt: Attempt[Any]) -> bool:
        return any(predicate(attempt) for predicate in self.predicates)
