r"""Unit tests for the httpx retry helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from unittest.mock import Mock

import httpx
import pytest

from aretry.attempt import Attempt
from aretry.builder import RetryerBuilder
from aretry.exceptions import ExecutionError
from aretry.http import (
    RETRY_STATUS_CODES,
    is_transient_http_error,
    parse_retry_after,
    retry_after_wait,
    transient_http_error_predicate,
)
from aretry.wait import fixed_wait, join

TEST_URL = "https://api.example.com/data"


@pytest.fixture
def request_() -> httpx.Request:
    return httpx.Request("GET", TEST_URL)


def status_error(
    request: httpx.Request, status_code: int, headers: dict[str, str] | None = None
) -> httpx.HTTPStatusError:
    response = httpx.Response(status_code, request=request, headers=headers)
    return httpx.HTTPStatusError(f"HTTP {status_code}", request=request, response=response)


def test_retry_status_codes() -> None:
    assert RETRY_STATUS_CODES == (429, 500, 502, 503, 504)


##############################################
#     Tests for is_transient_http_error     #
##############################################


@pytest.mark.parametrize("status_code", RETRY_STATUS_CODES)
def test_is_transient_http_error_retryable_status(
    request_: httpx.Request, status_code: int
) -> None:
    """Test retryable status codes are transient."""
    assert is_transient_http_error(status_error(request_, status_code))


@pytest.mark.parametrize("status_code", [400, 401, 403, 404, 422])
def test_is_transient_http_error_client_status(request_: httpx.Request, status_code: int) -> None:
    """Test client errors are not transient."""
    assert not is_transient_http_error(status_error(request_, status_code))


def test_is_transient_http_error_custom_forcelist(request_: httpx.Request) -> None:
    """Test a custom list of retryable status codes."""
    assert is_transient_http_error(status_error(request_, 404), status_forcelist=(404,))
    assert not is_transient_http_error(status_error(request_, 503), status_forcelist=(404,))


@pytest.mark.parametrize(
    "error_type", [httpx.ConnectTimeout, httpx.ReadTimeout, httpx.ConnectError, httpx.ReadError]
)
def test_is_transient_http_error_transport(
    request_: httpx.Request, error_type: type[httpx.TransportError]
) -> None:
    """Test timeouts and network errors are transient."""
    assert is_transient_http_error(error_type("failure", request=request_))


def test_is_transient_http_error_other_exception() -> None:
    """Test unrelated exceptions are not transient."""
    assert not is_transient_http_error(ValueError("bad"))


def test_transient_http_error_predicate(request_: httpx.Request) -> None:
    """Test the predicate evaluates exception attempts."""
    predicate = transient_http_error_predicate()
    assert predicate.test(Attempt.from_exception(status_error(request_, 503), 1))
    assert not predicate.test(Attempt.from_exception(status_error(request_, 404), 1))
    assert not predicate.test(Attempt.from_result(httpx.Response(200), 1))


########################################
#     Tests for parse_retry_after     #
########################################


def test_parse_retry_after_none() -> None:
    assert parse_retry_after(None) is None


@pytest.mark.parametrize(("header", "expected"), [("120", 120.0), ("0", 0.0), ("1.5", 1.5)])
def test_parse_retry_after_seconds(header: str, expected: float) -> None:
    """Test numeric values are parsed as seconds."""
    assert parse_retry_after(header) == expected


def test_parse_retry_after_negative_seconds() -> None:
    """Test negative values are clamped to 0."""
    assert parse_retry_after("-5") == 0.0


def test_parse_retry_after_http_date() -> None:
    """Test an HTTP-date in the future gives the remaining seconds."""
    future = datetime.now(timezone.utc) + timedelta(seconds=60)
    delay = parse_retry_after(format_datetime(future, usegmt=True))
    assert delay is not None
    assert 50.0 <= delay <= 61.0


def test_parse_retry_after_past_http_date() -> None:
    """Test an HTTP-date in the past gives 0."""
    assert parse_retry_after("Wed, 21 Oct 2015 07:28:00 GMT") == 0.0


@pytest.mark.parametrize(
    ("header", "expected"), [("120", 30.0), ("99999999999", 30.0), ("10", 10.0)]
)
def test_parse_retry_after_maximum(header: str, expected: float) -> None:
    """Test the delay is clamped to the maximum."""
    assert parse_retry_after(header, maximum=30.0) == expected


def test_parse_retry_after_strips_whitespace() -> None:
    assert parse_retry_after(" 7 ") == 7.0


@pytest.mark.parametrize("header", ["nan", "inf", "-inf", "1e400"])
def test_parse_retry_after_not_finite(header: str) -> None:
    """Test non-finite values are rejected."""
    assert parse_retry_after(header) is None


def test_parse_retry_after_http_date_without_zone() -> None:
    """Test an HTTP-date with a -0000 zone is read as UTC."""
    future = datetime.now(timezone.utc) + timedelta(seconds=60)
    header = future.strftime("%a, %d %b %Y %H:%M:%S -0000")
    delay = parse_retry_after(header)
    assert delay is not None
    assert 50.0 <= delay <= 61.0


@pytest.mark.parametrize("header", ["invalid", "", "tomorrow"])
def test_parse_retry_after_invalid(header: str) -> None:
    """Test unparsable values give None."""
    assert parse_retry_after(header) is None


#######################################
#     Tests for retry_after_wait     #
#######################################


def test_retry_after_wait_uses_header(request_: httpx.Request) -> None:
    """Test the delay is read from the Retry-After header."""
    wait = retry_after_wait()
    error = status_error(request_, 429, headers={"Retry-After": "3"})
    assert wait.compute_sleep_time(Attempt.from_exception(error, 1)) == 3.0


def test_retry_after_wait_default(request_: httpx.Request) -> None:
    """Test the default delay without a Retry-After header."""
    wait = retry_after_wait(default=0.5)
    assert wait.compute_sleep_time(Attempt.from_exception(status_error(request_, 503), 1)) == 0.5


def test_retry_after_wait_maximum(request_: httpx.Request) -> None:
    """Test a huge Retry-After value is clamped to the maximum."""
    wait = retry_after_wait(maximum=60.0)
    error = status_error(request_, 503, headers={"Retry-After": "99999999999"})
    assert wait.compute_sleep_time(Attempt.from_exception(error, 1)) == 60.0


def test_retry_after_wait_default_clamped(request_: httpx.Request) -> None:
    """Test the default delay never exceeds the maximum."""
    wait = retry_after_wait(default=120.0, maximum=60.0)
    assert wait.compute_sleep_time(Attempt.from_exception(status_error(request_, 503), 1)) == 60.0


def test_retry_after_wait_incorrect_default() -> None:
    with pytest.raises(ValueError, match=r"default must be >= 0"):
        retry_after_wait(default=-1.0)


@pytest.mark.parametrize("maximum", [0.0, -1.0])
def test_retry_after_wait_incorrect_maximum(maximum: float) -> None:
    with pytest.raises(ValueError, match=r"maximum must be > 0"):
        retry_after_wait(maximum=maximum)


def test_retry_after_wait_other_exception(request_: httpx.Request) -> None:
    """Test other exceptions give no delay."""
    wait = retry_after_wait(default=0.5)
    attempt = Attempt.from_exception(httpx.ConnectError("refused", request=request_), 1)
    assert wait.compute_sleep_time(attempt) == 0.0


def test_retryer_with_http_helpers(request_: httpx.Request) -> None:
    """Test a retryer honouring Retry-After on transient HTTP errors."""
    response = httpx.Response(200, request=request_, json={"ok": True})
    operation = Mock(
        side_effect=[
            status_error(request_, 503, headers={"Retry-After": "2"}),
            httpx.ConnectError("refused", request=request_),
            response,
        ]
    )
    block_strategy = Mock()
    retryer = (
        RetryerBuilder()
        .retry_if_exception(transient_http_error_predicate())
        .with_wait_strategy(join(fixed_wait(0.5), retry_after_wait()))
        .with_block_strategy(block_strategy)
        .build()
    )
    assert retryer.call(operation).json() == {"ok": True}
    assert [c.args[0] for c in block_strategy.block.call_args_list] == [2.5, 0.5]


def test_retryer_with_http_helpers_client_error(request_: httpx.Request) -> None:
    """Test client errors are not retried."""
    operation = Mock(side_effect=status_error(request_, 404))
    retryer = RetryerBuilder().retry_if_exception(transient_http_error_predicate()).build()
    with pytest.raises(ExecutionError) as exc_info:
        retryer.call(operation)
    assert isinstance(exc_info.value.cause, httpx.HTTPStatusError)
    operation.assert_called_once_with()
