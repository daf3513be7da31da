"""Small helpers for paths, directories and whole-file reads."""

from __future__ import annotations

import io
import os
from collections.abc import Iterator
from typing import BinaryIO, IO

__all__ = [
    "append_slash",
    "exists",
    "mkdirs",
    "get_size",
    "get_stream_size",
    "read_lines",
    "read_all",
]

_SLASHES = ("/", "\\")


def append_slash(path: str) -> str:
    """Return ``path`` ending with a path separator, adding one if needed."""
    if path.endswith(_SLASHES):
        return path
    return path + os.sep


def exists(path: str | os.PathLike[str]) -> bool:
    """Return whether ``path`` exists."""
    return os.access(path, os.F_OK)


def mkdirs(folder_path: str | os.PathLike[str]) -> None:
    """Create ``folder_path`` and any missing parents.

    Existing directories are left alone; an ``OSError`` is raised when the
    directory cannot be created.
    """
    os.makedirs(folder_path, exist_ok=True)


def get_size(file_path: str | os.PathLike[str]) -> int:
    """Return the size of the file at ``file_path`` in bytes."""
    return os.path.getsize(file_path)


def get_stream_size(stream: IO) -> int:
    """Return the size of a seekable stream; the position is left at 0."""
    size = stream.seek(0, io.SEEK_END)
    stream.seek(0, io.SEEK_SET)
    return size


def read_lines(file_path: str | os.PathLike[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, text)`` for each line, numbered from 1.

    Line endings are stripped from the text.
    """
    with open(file_path, encoding="utf-8", newline=None) as handle:
        for number, line in enumerate(handle, start=1):
            yield number, line.rstrip("\r\n")


def read_all(file_path: str | os.PathLike[str]) -> bytes:
    """Return the whole content of the file at ``file_path``."""
    with open(file_path, "rb") as handle:
        data: bytes = handle.read()
    return data


def _is_binary(stream: IO) -> bool:
    return isinstance(stream, (io.RawIOBase, io.BufferedIOBase, BinaryIO))