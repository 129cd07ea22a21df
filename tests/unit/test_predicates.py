r"""Unit tests for the rejection predicates."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from aretry.attempt import Attempt
from aretry.predicates import (
    AnyAttemptPredicate,
    ExceptionPredicate,
    ExceptionTypePredicate,
    ResultPredicate,
)


def result_attempt(value: object) -> Attempt:
    return Attempt.from_result(value, attempt_number=1)


def exception_attempt(exc: BaseException) -> Attempt:
    return Attempt.from_exception(exc, attempt_number=1)


############################################
#     Tests for ExceptionTypePredicate     #
############################################


def test_exception_type_predicate_matches_type() -> None:
    """Test an exception of the given type matches."""
    assert ExceptionTypePredicate(OSError).test(exception_attempt(OSError()))


def test_exception_type_predicate_matches_subclass() -> None:
    """Test a subclass of the given type matches."""
    assert ExceptionTypePredicate(OSError).test(exception_attempt(ConnectionResetError()))


def test_exception_type_predicate_multiple_types() -> None:
    """Test any of several types matches."""
    predicate = ExceptionTypePredicate(KeyError, ValueError)
    assert predicate.test(exception_attempt(ValueError()))
    assert predicate.test(exception_attempt(KeyError()))
    assert not predicate.test(exception_attempt(OSError()))


def test_exception_type_predicate_ignores_results() -> None:
    """Test result attempts never match."""
    assert not ExceptionTypePredicate(Exception).test(result_attempt(None))


def test_exception_type_predicate_requires_type() -> None:
    """Test at least one exception type is required."""
    with pytest.raises(ValueError, match=r"At least one exception type"):
        ExceptionTypePredicate()


def test_exception_type_predicate_callable() -> None:
    """Test predicates can be called directly."""
    assert ExceptionTypePredicate(OSError)(exception_attempt(OSError()))


def test_exception_type_predicate_repr() -> None:
    """Test the predicate representation."""
    predicate = ExceptionTypePredicate(OSError, KeyError)
    assert repr(predicate) == "ExceptionTypePredicate(OSError, KeyError)"


#########################################
#     Tests for ExceptionPredicate     #
#########################################


def test_exception_predicate_delegates() -> None:
    """Test the function receives the exception."""
    error = OSError(5, "io")
    function = Mock(return_value=True)
    assert ExceptionPredicate(function).test(exception_attempt(error))
    function.assert_called_once_with(error)


def test_exception_predicate_false() -> None:
    """Test the function can reject a retry."""
    predicate = ExceptionPredicate(lambda exc: "transient" in str(exc))
    assert not predicate.test(exception_attempt(RuntimeError("fatal")))
    assert predicate.test(exception_attempt(RuntimeError("transient")))


def test_exception_predicate_ignores_results() -> None:
    """Test result attempts never reach the function."""
    function = Mock(return_value=True)
    assert not ExceptionPredicate(function).test(result_attempt(1))
    function.assert_not_called()


######################################
#     Tests for ResultPredicate     #
######################################


def test_result_predicate_delegates() -> None:
    """Test the function receives the result."""
    function = Mock(return_value=True)
    assert ResultPredicate(function).test(result_attempt("value"))
    function.assert_called_once_with("value")


def test_result_predicate_none_result() -> None:
    """Test a None result can be rejected."""
    assert ResultPredicate(lambda value: value is None).test(result_attempt(None))


def test_result_predicate_ignores_exceptions() -> None:
    """Test exception attempts never reach the function."""
    function = Mock(return_value=True)
    assert not ResultPredicate(function).test(exception_attempt(OSError()))
    function.assert_not_called()


def test_result_predicate_result_type_mismatch() -> None:
    """Test results of another type are not matched."""
    function = Mock(return_value=True)
    predicate = ResultPredicate(function, result_type=bool)
    assert not predicate.test(result_attempt("text"))
    function.assert_not_called()
    assert predicate.test(result_attempt(True))


def test_result_predicate_type_error_is_non_match() -> None:
    """Test a predicate that does not apply to the result is False."""
    assert not ResultPredicate(lambda value: value < 0).test(result_attempt("text"))


@pytest.mark.parametrize("result", ["plain string", None, 42])
def test_result_predicate_attribute_error_is_non_match(result: object) -> None:
    """Test a predicate reading a missing attribute is False."""
    predicate = ResultPredicate(lambda response: response.status_code == 503)
    assert not predicate.test(result_attempt(result))


def test_result_predicate_attribute_matches() -> None:
    """Test a predicate reading an attribute of a fitting result."""
    predicate = ResultPredicate(lambda response: response.status_code == 503)
    assert predicate.test(result_attempt(Mock(status_code=503)))
    assert not predicate.test(result_attempt(Mock(status_code=200)))


def test_result_predicate_propagates_other_errors() -> None:
    """Test errors other than TypeError propagate."""
    predicate = ResultPredicate(Mock(side_effect=ZeroDivisionError))
    with pytest.raises(ZeroDivisionError):
        predicate.test(result_attempt(1))


#########################################
#     Tests for AnyAttemptPredicate     #
#########################################


def test_any_predicate_empty_never_rejects() -> None:
    """Test that no predicate means no retry."""
    predicate = AnyAttemptPredicate()
    assert not predicate.test(result_attempt(None))
    assert not predicate.test(exception_attempt(OSError()))


def test_any_predicate_or() -> None:
    """Test the predicates are combined with a logical OR."""
    predicate = AnyAttemptPredicate(
        [ResultPredicate(lambda value: value is None), ExceptionTypePredicate(OSError)]
    )
    assert predicate.test(result_attempt(None))
    assert predicate.test(exception_attempt(OSError()))
    assert not predicate.test(result_attempt(1))
    assert not predicate.test(exception_attempt(KeyError()))


def test_any_predicate_short_circuit() -> None:
    """Test evaluation stops at the first matching predicate."""
    second = Mock(return_value=True)
    assert AnyAttemptPredicate([Mock(return_value=True), second]).test(result_attempt(1))
    second.assert_not_called()


def test_any_predicate_accepts_callables() -> None:
    """Test plain callables are accepted as sub-predicates."""
    predicate = AnyAttemptPredicate([lambda attempt: attempt.attempt_number < 3])
    assert predicate.test(Attempt.from_result(None, attempt_number=2))
    assert not predicate.test(Attempt.from_result(None, attempt_number=3))
