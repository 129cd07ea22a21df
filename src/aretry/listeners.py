r"""Retry listeners observing every attempt.

Listeners are notified once per attempt, in registration order, before the
attempt is tested against the rejection predicate. A listener raising an
exception does not abort retrying: the error is logged with its traceback
and the remaining listeners are still notified.
"""

from __future__ import annotations

__all__ = ["ListenerManager", "RetryListener"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from aretry.attempt import Attempt

logger: logging.Logger = logging.getLogger(__name__)


class RetryListener(ABC):
    """Abstract base class for retry listeners.

    Plain callables taking an attempt can be registered as well.
    """

    def __call__(self, attempt: Attempt[Any]) -> None:
        self.on_retry(attempt)

    @abstractmethod
    def on_retry(self, attempt: Attempt[Any]) -> None:
        """Called after each attempt.

        Args:
            attempt: The attempt that was just made.
        """


class ListenerManager:
    r"""Notifies an ordered collection of listeners.

    Args:
        listeners: The listeners to notify, in order.

    Attributes:
        listeners: The registered listeners.

    Example:
        ```pycon
        >>> from aretry.attempt import Attempt
        >>> from aretry.listeners import ListenerManager
        >>> seen = []
        >>> manager = ListenerManager([lambda attempt: seen.append(attempt.attempt_number)])
        >>> manager.notify(Attempt.from_result(None, attempt_number=1))
        >>> seen
        [1]

        ```
    """

    def __init__(self, listeners: Iterable[Callable[[Attempt[Any]], None]] = ()) -> None:
        self.listeners: tuple[Callable[[Attempt[Any]], None], ...] = tuple(listeners)

    def __len__(self) -> int:
        return len(self.listeners)

    def notify(self, attempt: Attempt[Any]) -> None:
        """Notify every listener of ``attempt``.

        Args:
            attempt: The attempt that was just made.
        """
        for listener in self.listeners:
            try:
                listener(attempt)
            except Exception:  # noqa: BLE001
                logger.warning(
                    f"Error in retry listener {listener!r} for attempt "
                    f"{attempt.attempt_number}",
                    exc_info=True,
                )
