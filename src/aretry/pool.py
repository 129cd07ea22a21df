r"""Thread pool reusing idle workers and retiring them after a while.

``concurrent.futures.ThreadPoolExecutor`` keeps its workers alive until
shutdown. The time limiter submits one short task per attempt from
arbitrary many retryers, so its pool instead grows on demand, hands new
tasks to idle workers first and lets workers exit after ``keep_alive``
idle seconds.
"""

from __future__ import annotations

__all__ = ["DEFAULT_KEEP_ALIVE", "DEFAULT_MAX_WORKERS", "CachedThreadPool", "get_default_pool"]

import itertools
import logging
import queue
import threading
from concurrent.futures import Executor, Future
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)

# Seconds an idle worker waits for a new task before exiting
DEFAULT_KEEP_ALIVE = 60.0

# Upper bound on the workers of the pool shared by the time limiters
DEFAULT_MAX_WORKERS = 32

_default_pool: CachedThreadPool | None = None
_default_pool_lock = threading.Lock()


class _WorkItem:
    def __init__(
        self, future: Future, fn: Callable[..., Any], args: tuple, kwargs: dict
    ) -> None:
        self.future = future
        self.fn = fn
        self.args = args
        self.kwargs = kwargs

    def run(self) -> None:
        if not self.future.set_running_or_notify_cancel():
            return
        try:
            result = self.fn(*self.args, **self.kwargs)
        except BaseException as exc:  # noqa: BLE001
            self.future.set_exception(exc)
        else:
            self.future.set_result(result)


class CachedThreadPool(Executor):
    r"""Executor that reuses idle threads and reclaims them when unused.

    A submitted task is handed to an idle worker if there is one, otherwise
    a new worker is started, unless ``max_workers`` workers already exist,
    in which case the task waits in the queue. Workers are daemon threads.

    Args:
        max_workers: Optional upper bound on the number of workers.
            ``None`` means unbounded. Must be > 0 if provided.
        keep_alive: Seconds an idle worker waits for work before exiting.
            Must be > 0.
        thread_name_prefix: Prefix of the worker thread names.

    Raises:
        ValueError: If ``max_workers`` or ``keep_alive`` are invalid.

    Example:
        ```pycon
        >>> from aretry.pool import CachedThreadPool
        >>> with CachedThreadPool(keep_alive=5.0) as pool:
        ...     pool.submit(sum, [1, 2, 3]).result()
        ...
        6

        ```
    """

    def __init__(
        self,
        max_workers: int | None = None,
        keep_alive: float = DEFAULT_KEEP_ALIVE,
        thread_name_prefix: str = "aretry-worker",
    ) -> None:
        if max_workers is not None and max_workers <= 0:
            msg = f"max_workers must be > 0, got {max_workers}"
            raise ValueError(msg)
        if keep_alive <= 0:
            msg = f"keep_alive must be > 0, got {keep_alive}"
            raise ValueError(msg)

        self._max_workers = max_workers
        self._keep_alive = keep_alive
        self._thread_name_prefix = thread_name_prefix
        self._counter = itertools.count(1)

        # State protected by lock. Every worker waiting on the queue is
        # either counted in _idle_workers or matched with one queued task.
        self._work_queue: queue.SimpleQueue[_WorkItem | None] = queue.SimpleQueue()
        self._threads: set[threading.Thread] = set()
        self._idle_workers = 0
        self._backlog = 0
        self._shutdown = False
        self._lock = threading.Lock()

    @property
    def max_workers(self) -> int | None:
        """The upper bound on the number of workers, ``None`` if unbounded."""
        return self._max_workers

    @property
    def worker_count(self) -> int:
        """The number of live worker threads."""
        with self._lock:
            return len(self._threads)

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        """Schedule ``fn(*args, **kwargs)`` and return its future.

        Raises:
            RuntimeError: If the pool has been shut down.
        """
        with self._lock:
            if self._shutdown:
                msg = "cannot schedule new futures after shutdown"
                raise RuntimeError(msg)
            future: Future = Future()
            self._work_queue.put(_WorkItem(future, fn, args, kwargs))
            if self._idle_workers > 0:
                self._idle_workers -= 1
            elif self._max_workers is None or len(self._threads) < self._max_workers:
                self._start_worker()
            else:
                self._backlog += 1
            return future

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        """Stop accepting work and let the workers exit.

        Args:
            wait: If ``True``, block until every worker has exited.
            cancel_futures: If ``True``, cancel the queued tasks that have
                not started yet.
        """
        with self._lock:
            self._shutdown = True
            if cancel_futures:
                while True:
                    try:
                        item = self._work_queue.get_nowait()
                    except queue.Empty:
                        break
                    if item is not None:
                        item.future.cancel()
            threads = list(self._threads)
            for _ in threads:
                self._work_queue.put(None)
        if wait:
            for thread in threads:
                thread.join()

    def _start_worker(self) -> None:
        """Start a new worker thread. Must be called with the lock held."""
        thread = threading.Thread(
            target=self._worker,
            name=f"{self._thread_name_prefix}-{next(self._counter)}",
            daemon=True,
        )
        self._threads.add(thread)
        thread.start()
        logger.debug(f"Started worker thread {thread.name} ({len(self._threads)} alive)")

    def _worker(self) -> None:
        current = threading.current_thread()
        while True:
            try:
                item = self._work_queue.get(timeout=self._keep_alive)
            except queue.Empty:
                with self._lock:
                    # No unmatched idle worker means a task was handed to
                    # this one after the timeout fired
                    if self._idle_workers == 0:
                        continue
                    self._idle_workers -= 1
                    self._threads.discard(current)
                logger.debug(f"Worker thread {current.name} retired after being idle")
                return
            if item is None:
                with self._lock:
                    self._threads.discard(current)
                return
            item.run()
            del item
            with self._lock:
                if self._backlog > 0:
                    self._backlog -= 1
                else:
                    self._idle_workers += 1


def get_default_pool() -> CachedThreadPool:
    """Return the process-wide pool shared by the time limiters.

    The pool is created on first use with at most ``DEFAULT_MAX_WORKERS``
    workers. Once every worker is busy, new tasks wait in its queue.
    """
    global _default_pool  # noqa: PLW0603
    with _default_pool_lock:
        if _default_pool is None:
            _default_pool = CachedThreadPool(max_workers=DEFAULT_MAX_WORKERS)
        return _default_pool
