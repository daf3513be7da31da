"""Version-aware and locale-aware comparison of file names."""

from __future__ import annotations

import functools
import locale
from collections.abc import Iterable

__all__ = ["strverscmp", "versionsort", "alphasort"]


def _char(text: str, index: int) -> str:
    """Return the character at ``index``, or NUL past the end of ``text``."""
    return text[index] if index < len(text) else "\0"


def _isdigit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _digit_run_end(text: str, start: int) -> int:
    end = start
    while _isdigit(_char(text, end)):
        end += 1
    return end


def strverscmp(a: str, b: str) -> int:
    """Compare two strings, ordering embedded numbers by value.

    Returns a negative number, zero or a positive number when ``a`` sorts
    before, equal to or after ``b``. Runs of digits with more digits are
    larger (``999 < 1000``); runs with leading zeros are treated as
    fractional parts, so the one with more digits is smaller (``002 < 01``).
    """
    i = 0
    while _char(a, i) == _char(b, i):
        if _char(a, i) == "\0":
            return 0
        i += 1

    # Step back to the leftmost digit of the number containing the difference.
    j = i
    while j > 0 and _isdigit(a[j - 1]):
        j -= 1

    if _char(a, j) == "0" or _char(b, j) == "0":
        while _char(a, j) == "0" and _char(a, j) == _char(b, j):
            j += 1
        if _isdigit(_char(a, j)):
            if not _isdigit(_char(b, j)):
                return -1
        elif _isdigit(_char(b, j)):
            return 1
    elif _isdigit(_char(a, j)) and _isdigit(_char(b, j)):
        k1 = _digit_run_end(a, j)
        k2 = _digit_run_end(b, j)
        if k1 < k2:
            return -1
        if k1 > k2:
            return 1

    return ord(_char(a, i)) - ord(_char(b, i))


def versionsort(names: Iterable[str]) -> list[str]:
    """Return ``names`` sorted with :func:`strverscmp`."""
    return sorted(names, key=functools.cmp_to_key(strverscmp))


def alphasort(names: Iterable[str]) -> list[str]:
    """Return ``names`` sorted by the current locale's collation order."""
    return sorted(names, key=functools.cmp_to_key(locale.strcoll))