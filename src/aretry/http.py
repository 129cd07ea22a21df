r"""Retry conditions and wait strategies for ``httpx`` operations.

Example:
    ```pycon
    >>> import httpx
    >>> from aretry import RetryerBuilder
    >>> from aretry.http import retry_after_wait, transient_http_error_predicate
    >>> from aretry.stop import stop_after_attempt
    >>> from aretry.wait import exponential_wait, join
    >>> retryer = (
    ...     RetryerBuilder()
    ...     .retry_if_exception(transient_http_error_predicate())
    ...     .with_wait_strategy(join(exponential_wait(0.3, maximum=30.0), retry_after_wait()))
    ...     .with_stop_strategy(stop_after_attempt(5))
    ...     .build()
    ... )
    >>> def fetch():
    ...     response = httpx.get("https://api.example.com/data")
    ...     response.raise_for_status()
    ...     return response.json()
    ...
    >>> data = retryer.call(fetch)  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "RETRY_STATUS_CODES",
    "is_transient_http_error",
    "parse_retry_after",
    "retry_after_wait",
    "transient_http_error_predicate",
]

import logging
import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

import httpx

from aretry.predicates import ExceptionPredicate
from aretry.validation import check_non_negative, check_positive
from aretry.wait.exception import ExceptionWait

logger: logging.Logger = logging.getLogger(__name__)

# HTTP status codes worth retrying
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


def is_transient_http_error(
    exception: BaseException, status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES
) -> bool:
    """Return ``True`` if ``exception`` is an HTTP failure worth retrying.

    Timeouts and network errors are transient, as are
    ``httpx.HTTPStatusError`` whose status code is in ``status_forcelist``.

    Args:
        exception: The exception raised by the operation.
        status_forcelist: The retryable HTTP status codes.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretry.http import is_transient_http_error
        >>> request = httpx.Request("GET", "https://example.com")
        >>> is_transient_http_error(httpx.ConnectTimeout("timed out", request=request))
        True
        >>> response = httpx.Response(404, request=request)
        >>> is_transient_http_error(
        ...     httpx.HTTPStatusError("not found", request=request, response=response)
        ... )
        False

        ```
    """
    if isinstance(exception, (httpx.TimeoutException, httpx.NetworkError)):
        return True
    if isinstance(exception, httpx.HTTPStatusError):
        return exception.response.status_code in status_forcelist
    return False


def transient_http_error_predicate(
    status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES,
) -> ExceptionPredicate:
    """Return a rejection predicate retrying transient HTTP failures.

    Args:
        status_forcelist: The retryable HTTP status codes.
    """
    return ExceptionPredicate(
        lambda exception: is_transient_http_error(exception, status_forcelist)
    )


def _seconds_until(http_date: str) -> float | None:
    """Return the number of seconds from now until ``http_date``, or
    ``None`` if it is not an RFC 5322 date."""
    try:
        when = parsedate_to_datetime(http_date)
    except (ValueError, TypeError, OverflowError):
        return None
    if when.tzinfo is None:
        # A "-0000" zone parses to a naive datetime, read it as UTC
        when = when.replace(tzinfo=timezone.utc)
    return (when - datetime.now(timezone.utc)).total_seconds()


def parse_retry_after(value: str | None, maximum: float = math.inf) -> float | None:
    """Turn a Retry-After header into a delay for the next attempt.

    RFC 7231 allows a number of seconds (``"120"``) or an HTTP-date
    (``"Wed, 21 Oct 2015 07:28:00 GMT"``). The delay is clamped to
    ``[0, maximum]``, so dates in the past give 0.0 and a server cannot
    ask for an arbitrarily long wait.

    Args:
        value: The header value, or ``None`` if the response had none.
        maximum: The longest delay to return, in seconds.

    Returns:
        The delay in seconds, or ``None`` if the header is absent, is not
        a number or a date, or is not finite (``"nan"``, ``"inf"``).

    Example:
        ```pycon
        >>> from aretry.http import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after("120", maximum=30.0)
        30.0
        >>> parse_retry_after("Wed, 21 Oct 2015 07:28:00 GMT")
        0.0
        >>> parse_retry_after("soon") is None
        True

        ```
    """
    if value is None:
        return None
    value = value.strip()
    try:
        delay: float | None = float(value)
    except ValueError:
        delay = _seconds_until(value)
    if delay is None or not math.isfinite(delay):
        logger.debug(f"Ignoring unusable Retry-After header: {value!r}")
        return None
    return min(max(delay, 0.0), maximum)


def retry_after_wait(
    default: float = 0.0, maximum: float = math.inf
) -> ExceptionWait[httpx.HTTPStatusError]:
    """Return a wait strategy honouring the server's Retry-After header.

    The strategy only applies to attempts that raised
    ``httpx.HTTPStatusError``. Join it with a backoff strategy to get a
    delay for the other failures.

    Args:
        default: The delay in seconds when the response has no usable
            Retry-After header. Must be >= 0.
        maximum: The longest delay honoured, in seconds. Longer requests
            are clamped to it. Must be > 0.

    Raises:
        ValueError: If ``default`` or ``maximum`` are invalid.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretry.attempt import Attempt
        >>> from aretry.http import retry_after_wait
        >>> request = httpx.Request("GET", "https://example.com")
        >>> response = httpx.Response(429, request=request, headers={"Retry-After": "600"})
        >>> error = httpx.HTTPStatusError("busy", request=request, response=response)
        >>> retry_after_wait(maximum=60.0).compute_sleep_time(Attempt.from_exception(error, 1))
        60.0

        ```
    """
    check_non_negative("default", default)
    check_positive("maximum", maximum)

    def _delay(exception: httpx.HTTPStatusError) -> float:
        delay = parse_retry_after(exception.response.headers.get("Retry-After"), maximum)
        return min(default, maximum) if delay is None else delay

    return ExceptionWait(httpx.HTTPStatusError, _delay)
