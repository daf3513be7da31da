"""Directory streams with position hashes, rewinding and seeking."""

from __future__ import annotations

import os
import stat
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

__all__ = [
    "DT_UNKNOWN",
    "DT_REG",
    "DT_DIR",
    "DT_CHR",
    "DT_FIFO",
    "END_OF_STREAM",
    "MAX_PATH",
    "DirEntry",
    "DirStream",
    "name_hash",
    "scandir",
]

DT_UNKNOWN = 0
DT_REG = stat.S_IFREG
DT_DIR = stat.S_IFDIR
DT_CHR = stat.S_IFCHR
DT_FIFO = stat.S_IFIFO

# Position reported once the stream has no further entries.
END_OF_STREAM = 0x7FFFFFFF

# Only this many leading characters of a name take part in its hash.
MAX_PATH = 260

_HASH_SEED = 5381
_WORD_MASK = 0xFFFFFFFF


def name_hash(name: str) -> int:
    """Return the 31-bit djb2 hash of ``name`` used as a stream position."""
    value = _HASH_SEED
    for ch in name[:MAX_PATH]:
        if ch == "\0":
            break
        value = ((value << 5) + value + ord(ch)) & _WORD_MASK
    return value & END_OF_STREAM


@dataclass(frozen=True)
class DirEntry:
    """One entry read from a :class:`DirStream`.

    ``off`` is the position of the entry that follows this one, suitable for
    :meth:`DirStream.seek`, or :data:`END_OF_STREAM` after the last entry.
    """

    name: str
    type: int
    off: int
    ino: int = 0

    @property
    def namlen(self) -> int:
        return len(self.name)


def _entry_type(entry: os.DirEntry) -> int:
    try:
        mode = entry.stat(follow_symlinks=False).st_mode
    except OSError:
        return DT_DIR if entry.is_dir() else DT_REG
    if stat.S_ISCHR(mode):
        return DT_CHR
    if stat.S_ISDIR(mode):
        return DT_DIR
    return DT_REG


class DirStream:
    """A readable, rewindable and seekable listing of one directory.

    Opening raises ``OSError`` (``FileNotFoundError``,
    ``NotADirectoryError``, ``PermissionError``) when the directory cannot be
    read. Reading, telling or seeking on a closed stream raises ``ValueError``.
    """

    def __init__(self, dirname: str | os.PathLike[str]) -> None:
        path = os.fspath(dirname)
        if not path:
            raise FileNotFoundError("empty directory name")
        # Absolute, so that rewinding works after a change of directory.
        self._path = os.path.abspath(path)
        self._iter: Any = None
        self._pending: os.DirEntry | None = None
        self._invalid = False
        self._closed = False
        self._open_listing()

    # -- internal helpers -------------------------------------------------

    def _open_listing(self) -> None:
        self._close_listing()
        self._pending = None
        try:
            self._iter = os.scandir(self._path)
        except OSError:
            self._invalid = True
            raise
        self._pending = next(self._iter, None)

    def _close_listing(self) -> None:
        if self._iter is not None:
            self._iter.close()
            self._iter = None

    def _next(self) -> os.DirEntry | None:
        if self._invalid or self._iter is None:
            return None
        if self._pending is not None:
            entry, self._pending = self._pending, None
            return entry
        return next(self._iter, None)

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("operation on a closed directory stream")

    # -- public interface -------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self) -> DirEntry | None:
        """Return the next entry, or ``None`` at the end of the stream."""
        self._check_open()
        entry = self._next()
        if entry is None:
            return None
        kind = _entry_type(entry)
        following = self._next()
        if following is not None:
            off = name_hash(following.name)
            self._pending = following
        else:
            off = END_OF_STREAM
        return DirEntry(name=entry.name[:MAX_PATH], type=kind, off=off)

    def rewind(self) -> None:
        """Restart the stream so that the first entry is read again."""
        if self._closed:
            return
        self._invalid = False
        try:
            self._open_listing()
        except OSError:
            self._invalid = True

    def tell(self) -> int:
        """Return the position of the next entry to be read."""
        self._check_open()
        following = self._next()
        if following is None:
            return END_OF_STREAM
        self._pending = following
        return name_hash(following.name)

    def seek(self, loc: int) -> None:
        """Move to the entry whose position is ``loc``.

        If no such entry exists, or ``loc`` is negative, the stream is left
        at its end so that :meth:`read` returns ``None``.
        """
        self._check_open()
        if loc < 0:
            self._invalid = True
            return
        self._invalid = False
        try:
            self._open_listing()
        except OSError:
            self._invalid = True
            return
        while True:
            entry = self._next()
            if entry is None:
                self._invalid = True
                return
            if name_hash(entry.name) == loc:
                self._pending = entry
                return

    def close(self) -> None:
        """Release the stream; closing twice is harmless."""
        self._close_listing()
        self._pending = None
        self._closed = True

    def __iter__(self) -> Iterator[DirEntry]:
        while True:
            entry = self.read()
            if entry is None:
                return
            yield entry

    def __enter__(self) -> DirStream:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def scandir(
    dirname: str | os.PathLike[str],
    filter: Callable[[DirEntry], bool] | None = None,
    key: Callable[[DirEntry], Any] | None = None,
) -> list[DirEntry]:
    """Read every entry of ``dirname`` into a sorted list.

    Entries for which ``filter`` returns false are left out. The list is
    sorted by ``key``, or by name when no key is given.
    """
    with DirStream(dirname) as stream:
        entries = [e for e in stream if filter is None or filter(e)]
    entries.sort(key=key if key is not None else (lambda e: e.name))
    return entries