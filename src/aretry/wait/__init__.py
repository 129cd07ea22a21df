r"""Wait strategies computing the delay between two attempts.

This package provides fixed, random, incrementing, exponential,
Fibonacci and exception-driven wait strategies, and ``JoinWait`` to sum
several of them.
"""

from __future__ import annotations

__all__ = [
    "ExceptionWait",
    "ExponentialWait",
    "FibonacciWait",
    "FixedWait",
    "IncrementingWait",
    "JoinWait",
    "NoWait",
    "RandomWait",
    "WaitStrategy",
    "exception_wait",
    "exponential_wait",
    "fibonacci_wait",
    "fixed_wait",
    "incrementing_wait",
    "join",
    "no_wait",
    "random_wait",
]

from aretry.wait.base import WaitStrategy
from aretry.wait.exception import ExceptionWait
from aretry.wait.exponential import ExponentialWait
from aretry.wait.factories import (
    exception_wait,
    exponential_wait,
    fibonacci_wait,
    fixed_wait,
    incrementing_wait,
    join,
    no_wait,
    random_wait,
)
from aretry.wait.fibonacci import FibonacciWait
from aretry.wait.fixed import FixedWait, NoWait
from aretry.wait.incrementing import IncrementingWait
from aretry.wait.join import JoinWait
from aretry.wait.randomized import RandomWait
