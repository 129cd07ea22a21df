r"""Cancellation signal observed by blocking waits.

A ``CancellationToken`` plays the role of a thread interrupt flag: any
thread may cancel it, and every suspension point of the retry loop
observes it. Once cancelled, a token stays cancelled.
"""

from __future__ import annotations

__all__ = ["CancellationToken"]

import threading

from aretry.exceptions import RetryCancelledError


class CancellationToken:
    r"""Thread-safe, one-way cancellation flag.

    Example:
        ```pycon
        >>> from aretry.cancellation import CancellationToken
        >>> token = CancellationToken()
        >>> token.cancelled
        False
        >>> token.wait(0.01)
        False
        >>> token.cancel()
        >>> token.cancelled
        True
        >>> token.wait(10.0)
        True

        ```
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(cancelled={self.cancelled})"

    @property
    def cancelled(self) -> bool:
        """``True`` once ``cancel`` has been called."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Cancel the token and wake up every thread waiting on it."""
        self._event.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the token is cancelled or ``timeout`` elapses.

        Args:
            timeout: Maximum number of seconds to wait, or ``None`` to
                wait until cancelled.

        Returns:
            ``True`` if the token was cancelled, ``False`` on timeout.
        """
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        """Raise ``RetryCancelledError`` if the token is cancelled."""
        if self.cancelled:
            msg = "Operation was cancelled"
            raise RetryCancelledError(msg)
