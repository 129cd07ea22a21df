r"""Parameter validation helpers shared by the strategies."""

from __future__ import annotations

__all__ = ["check_non_negative", "check_not_none", "check_positive"]

from typing import Any


def check_non_negative(name: str, value: float) -> None:
    """Check that a numeric parameter is non-negative.

    Args:
        name: The parameter name, used in the error message.
        value: The value to check.

    Raises:
        ValueError: If ``value`` is negative.

    Example:
        ```pycon
        >>> from aretry.validation import check_non_negative
        >>> check_non_negative("sleep_time", 1.5)
        >>> check_non_negative("sleep_time", -1)
        Traceback (most recent call last):
            ...
        ValueError: sleep_time must be >= 0, got -1

        ```
    """
    if value < 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ValueError(msg)


def check_positive(name: str, value: float) -> None:
    """Check that a numeric parameter is strictly positive.

    Args:
        name: The parameter name, used in the error message.
        value: The value to check.

    Raises:
        ValueError: If ``value`` is zero or negative.

    Example:
        ```pycon
        >>> from aretry.validation import check_positive
        >>> check_positive("duration", 0.5)
        >>> check_positive("duration", 0)
        Traceback (most recent call last):
            ...
        ValueError: duration must be > 0, got 0

        ```
    """
    if value <= 0:
        msg = f"{name} must be > 0, got {value}"
        raise ValueError(msg)


def check_not_none(name: str, value: Any) -> None:
    """Check that a collaborator was provided.

    Raises:
        ValueError: If ``value`` is ``None``.
    """
    if value is None:
        msg = f"{name} may not be None"
        raise ValueError(msg)
