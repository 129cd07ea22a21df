from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from aretry.block import BlockStrategy

if TYPE_CHECKING:
    from collections.abc import Callable


class SequenceOperation:
    """Operation replaying a scripted sequence of outcomes.

    Each item is returned, or raised if it is an exception instance. The
    last item is repeated once the sequence is exhausted.
    """

    def __init__(self, *outcomes: object) -> None:
        self.outcomes = outcomes
        self.calls = 0

    def __call__(self) -> object:
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def sequence_operation() -> Callable[..., SequenceOperation]:
    """Return a factory of scripted operations."""
    return SequenceOperation


@pytest.fixture
def mock_block_strategy() -> Mock:
    """Create a block strategy recording the delays without sleeping."""
    return Mock(spec=BlockStrategy)


@pytest.fixture
def mock_listener() -> Mock:
    """Create a mock retry listener."""
    return Mock()
