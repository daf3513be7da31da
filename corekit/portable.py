"""A thread that runs one function on one argument and hands back its result."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

__all__ = ["PortableThread", "current_thread_id"]


def current_thread_id() -> int:
    """Return the operating-system id of the calling thread."""
    return threading.get_native_id()


class PortableThread:
    """Runs ``target(arg)`` on a new thread.

    The thread is started with :meth:`start` and joined with :meth:`join`,
    which returns the target's result. An exception raised by the target is
    raised again from :meth:`join`.
    """

    def __init__(
        self,
        target: Callable[[Any], Any],
        arg: Any = None,
        name: str | None = None,
    ) -> None:
        if target is None or not callable(target):
            raise ValueError("target must be callable")
        self._target = target
        self._arg = arg
        self._name = name or None
        self._thread: threading.Thread | None = None
        self._joined = False
        self._result: Any = None
        self._error: BaseException | None = None

    @property
    def name(self) -> str | None:
        if self._thread is not None:
            return self._thread.name
        return self._name

    @property
    def native_id(self) -> int | None:
        return self._thread.native_id if self._thread is not None else None

    def _run(self) -> None:
        try:
            self._result = self._target(self._arg)
        except BaseException as exc:  # handed back to the joining thread
            self._error = exc

    def start(self) -> PortableThread:
        """Start the thread; ``RuntimeError`` if it was already started."""
        if self._thread is not None:
            raise RuntimeError("thread already started")
        thread = threading.Thread(target=self._run, name=self._name)
        thread.start()
        self._thread = thread
        return self

    def join(self) -> Any:
        """Wait for the thread to finish and return the target's result.

        Raises ``RuntimeError`` if the thread was never started or has
        already been joined.
        """
        if self._thread is None:
            raise RuntimeError("thread not started")
        if self._joined:
            raise RuntimeError("thread already joined")
        self._thread.join()
        self._joined = True
        if self._error is not None:
            raise self._error
        return self._result