"""Counting semaphores, unnamed or shared between holders by name."""

from __future__ import annotations

import threading
import time

__all__ = [
    "SEM_VALUE_MAX",
    "MAX_NAME_LENGTH",
    "Semaphore",
    "open_semaphore",
    "unlink_semaphore",
]

SEM_VALUE_MAX = 0x7FFFFFFF

# Longest accepted semaphore name.
MAX_NAME_LENGTH = 504

# Relative timeouts of this many milliseconds or more are treated as zero.
_MAX_WAIT_MS = 4294967295


class _Counter:
    """The shared state behind one or more :class:`Semaphore` handles."""

    def __init__(self, value: int) -> None:
        self.value = value
        self.cond = threading.Condition(threading.Lock())

    def acquire(self, timeout: float | None) -> bool:
        with self.cond:
            if timeout is None:
                while self.value == 0:
                    self.cond.wait()
            elif not self.cond.wait_for(lambda: self.value > 0, timeout):
                return False
            self.value -= 1
            return True

    def release(self) -> None:
        with self.cond:
            if self.value >= SEM_VALUE_MAX:
                raise OverflowError("semaphore value would exceed SEM_VALUE_MAX")
            self.value += 1
            self.cond.notify()


_registry_lock = threading.Lock()
# name -> [counter, number of open handles]
_registry: dict[str, list] = {}


def _check_value(value: int) -> None:
    if value < 0 or value > SEM_VALUE_MAX:
        raise ValueError(f"semaphore value must be in 0..{SEM_VALUE_MAX}")


class Semaphore:
    """A counting semaphore.

    ``Semaphore(value)`` creates an unnamed semaphore; named ones come from
    :func:`open_semaphore`. Any operation on a closed semaphore raises
    ``ValueError``.
    """

    def __init__(self, value: int = 0) -> None:
        _check_value(value)
        self._counter: _Counter | None = _Counter(value)
        self._name: str | None = None

    @classmethod
    def _shared(cls, counter: _Counter, name: str) -> Semaphore:
        sem = cls.__new__(cls)
        sem._counter = counter
        sem._name = name
        return sem

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def closed(self) -> bool:
        return self._counter is None

    def _live(self) -> _Counter:
        if self._counter is None:
            raise ValueError("operation on a closed semaphore")
        return self._counter

    def wait(self) -> None:
        """Block until the value is positive, then decrement it."""
        self._live().acquire(None)

    def try_wait(self) -> bool:
        """Decrement the value if it is positive; return whether it was."""
        return self._live().acquire(0)

    def timed_wait(self, abs_timeout: float) -> bool:
        """Wait until ``abs_timeout`` (seconds since the epoch) at the latest.

        Returns whether the semaphore was taken. A deadline in the past, or
        too far in the future, makes this a single non-blocking attempt.
        """
        counter = self._live()
        remaining_ms = int(abs_timeout * 1000) - int(time.time() * 1000)
        if remaining_ms < 0 or remaining_ms >= _MAX_WAIT_MS:
            remaining_ms = 0
        return counter.acquire(remaining_ms / 1000)

    def post(self) -> None:
        """Increment the value, waking one waiter.

        Raises ``OverflowError`` when the value is already ``SEM_VALUE_MAX``.
        """
        self._live().release()

    def value(self) -> int:
        """Return the current value."""
        counter = self._live()
        with counter.cond:
            return counter.value

    def close(self) -> None:
        """Close this handle; closing twice raises ``ValueError``.

        A named semaphore disappears once every handle to it is closed.
        """
        counter = self._live()
        self._counter = None
        if self._name is None:
            return
        with _registry_lock:
            record = _registry.get(self._name)
            if record is not None and record[0] is counter:
                record[1] -= 1
                if record[1] == 0:
                    del _registry[self._name]


def open_semaphore(
    name: str, create: bool = False, exclusive: bool = False, value: int = 0
) -> Semaphore:
    """Open the semaphore called ``name``, creating it if asked to.

    ``value`` is the initial value of a newly created semaphore. Raises
    ``ValueError`` for an empty or over-long name or a bad value,
    ``FileExistsError`` when ``create`` and ``exclusive`` are set and the
    semaphore exists, and ``FileNotFoundError`` when it does not exist and
    ``create`` is not set.
    """
    _check_value(value)
    if not name or len(name) > MAX_NAME_LENGTH:
        raise ValueError(f"semaphore name must be 1..{MAX_NAME_LENGTH} characters")
    with _registry_lock:
        record = _registry.get(name)
        if record is not None:
            if create and exclusive:
                raise FileExistsError(f"semaphore {name!r} already exists")
            record[1] += 1
            return Semaphore._shared(record[0], name)
        if not create:
            raise FileNotFoundError(f"semaphore {name!r} does not exist")
        counter = _Counter(value)
        _registry[name] = [counter, 1]
        return Semaphore._shared(counter, name)


def unlink_semaphore(name: str) -> None:
    """Remove a semaphore's name.

    Nothing needs doing: a named semaphore goes away when its last handle
    is closed.
    """
    del name