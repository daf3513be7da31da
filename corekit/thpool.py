"""A fixed-size pool of worker threads fed from a first-in, first-out queue."""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable
from typing import Any

__all__ = ["ThreadPool"]

_log = logging.getLogger(__name__)

Job = tuple[Callable[[Any], Any], Any]


class ThreadPool:
    """Runs ``function(arg)`` jobs on a fixed number of worker threads.

    Jobs are taken in the order they were added. A negative thread count is
    treated as zero. Workers are named ``thpool-<n>``. An exception raised by
    a job is logged and does not stop its worker.
    """

    def __init__(self, num_threads: int) -> None:
        count = max(0, int(num_threads))
        self._lock = threading.Lock()
        self._has_jobs = threading.Condition(self._lock)
        self._all_idle = threading.Condition(self._lock)
        self._alive_changed = threading.Condition(self._lock)
        self._jobs: deque[Job] = deque()
        self._keepalive = True
        self._on_hold = False
        self._working = 0
        self._alive = 0
        self._threads = [
            threading.Thread(target=self._worker, name=f"thpool-{n}", daemon=True)
            for n in range(count)
        ]
        for thread in self._threads:
            thread.start()
        with self._lock:
            while self._alive != count:
                self._alive_changed.wait()

    @property
    def num_threads_alive(self) -> int:
        """Number of worker threads currently running."""
        with self._lock:
            return self._alive

    def _worker(self) -> None:
        with self._lock:
            self._alive += 1
            self._alive_changed.notify_all()
        try:
            while True:
                with self._lock:
                    while self._keepalive and (not self._jobs or self._on_hold):
                        self._has_jobs.wait()
                    if not self._keepalive:
                        return
                    function, arg = self._jobs.popleft()
                    self._working += 1
                try:
                    function(arg)
                except Exception:
                    _log.exception("job %r failed", function)
                finally:
                    with self._lock:
                        self._working -= 1
                        if not self._working:
                            self._all_idle.notify_all()
        finally:
            with self._lock:
                self._alive -= 1
                self._alive_changed.notify_all()

    def add_work(self, function: Callable[[Any], Any], arg: Any = None) -> None:
        """Queue ``function(arg)`` to run on a worker.

        Raises ``ValueError`` if ``function`` is not callable and
        ``RuntimeError`` if the pool has been destroyed.
        """
        if function is None or not callable(function):
            raise ValueError("function must be callable")
        with self._lock:
            if not self._keepalive:
                raise RuntimeError("thread pool has been destroyed")
            self._jobs.append((function, arg))
            self._has_jobs.notify()

    def wait(self) -> None:
        """Block until the queue is empty and no worker is running a job."""
        with self._lock:
            while self._jobs or self._working:
                self._all_idle.wait()

    def pause(self) -> None:
        """Stop workers from starting new jobs until :meth:`resume`."""
        with self._lock:
            self._on_hold = True

    def resume(self) -> None:
        """Let paused workers take jobs again."""
        with self._lock:
            self._on_hold = False
            self._has_jobs.notify_all()

    def destroy(self) -> None:
        """Stop every worker and drop jobs that have not started.

        Jobs already running are allowed to finish. Destroying twice is
        harmless.
        """
        with self._lock:
            if not self._keepalive:
                return
            self._keepalive = False
            self._has_jobs.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()
        with self._lock:
            self._jobs.clear()
            self._all_idle.notify_all()

    def num_threads_working(self) -> int:
        """Return the number of workers currently running a job."""
        with self._lock:
            return self._working

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, *args: object) -> None:
        self.destroy()