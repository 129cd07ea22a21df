r"""Block strategies performing the delay between two attempts."""

from __future__ import annotations

__all__ = ["MAX_WAIT_CHUNK", "BlockStrategy", "SleepBlockStrategy", "sleep_block_strategy"]

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from aretry.exceptions import RetryCancelledError

if TYPE_CHECKING:
    from aretry.cancellation import CancellationToken

logger: logging.Logger = logging.getLogger(__name__)

# Longest single wait on the token, longer delays are waited in chunks
MAX_WAIT_CHUNK = min(86400.0, threading.TIMEOUT_MAX)


class BlockStrategy(ABC):
    """Abstract base class for block strategies.

    Implementations must return promptly when ``cancellation`` is
    cancelled, by raising ``RetryCancelledError``.
    """

    @abstractmethod
    def block(self, sleep_time: float, cancellation: CancellationToken) -> None:
        """Block the current thread for ``sleep_time`` seconds.

        Args:
            sleep_time: The number of seconds to block.
            cancellation: The token of the calling context.

        Raises:
            RetryCancelledError: If the token is cancelled before the
                delay is over.
        """


class SleepBlockStrategy(BlockStrategy):
    r"""Block strategy sleeping on the cancellation token.

    Long delays, up to ``math.inf``, are waited in chunks of at most
    ``MAX_WAIT_CHUNK`` seconds until the deadline, so an infinite delay
    only ends when the token is cancelled.

    Example:
        ```pycon
        >>> from aretry.block import SleepBlockStrategy
        >>> from aretry.cancellation import CancellationToken
        >>> SleepBlockStrategy().block(0.01, CancellationToken())

        ```
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def block(self, sleep_time: float, cancellation: CancellationToken) -> None:
        cancellation.raise_if_cancelled()
        if sleep_time <= 0:
            return
        deadline = time.monotonic() + sleep_time
        remaining = sleep_time
        while remaining > 0:
            if cancellation.wait(min(remaining, MAX_WAIT_CHUNK)):
                logger.debug(f"Sleep of {sleep_time:.3f}s cancelled")
                msg = f"Sleep of {sleep_time}s was cancelled"
                raise RetryCancelledError(msg)
            remaining = deadline - time.monotonic()


def sleep_block_strategy() -> BlockStrategy:
    """Return the default block strategy."""
    return SleepBlockStrategy()
