"""A small INI parser that reports every ``name = value`` pair to a handler.

Sections are written ``[section]``; pairs may use ``=`` or ``:``; whitespace
around names and values is stripped; lines starting with one of the comment
prefixes are ignored. Pairs that appear before any section heading belong to
the section ``""``.
"""

from __future__ import annotations

import io
import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TextIO

__all__ = ["IniOptions", "IniParseError", "parse_stream", "parse_string", "parse_file"]

_WHITESPACE = " \t\n\v\f\r"
_BOM = "\ufeff"

Handler = Callable[..., Any]


@dataclass(frozen=True)
class IniOptions:
    """Settings that change how INI text is parsed.

    allow_multiline: an indented line continues the previous name; the
        handler is called again with the same name.
    allow_bom: a UTF-8 byte order mark at the start of the first line is skipped.
    start_comment_prefixes: characters that start a whole-line comment.
    allow_inline_comments: a comment prefix preceded by whitespace ends a value.
    inline_comment_prefixes: characters that start an inline comment.
    max_line: size of the line buffer; longer lines are read in pieces of
        ``max_line - 1`` characters, each counted as a line of its own.
    stop_on_first_error: stop parsing at the first error.
    call_handler_on_new_section: call the handler with name and value ``None``
        at each section heading.
    allow_no_value: a line without ``=`` or ``:`` gives its name with value
        ``None``; otherwise such a line is an error.
    handler_lineno: pass the line number to the handler as a fourth argument.
    """

    allow_multiline: bool = True
    allow_bom: bool = True
    start_comment_prefixes: str = ";#"
    allow_inline_comments: bool = True
    inline_comment_prefixes: str = ";"
    max_line: int = 200
    stop_on_first_error: bool = False
    call_handler_on_new_section: bool = False
    allow_no_value: bool = True
    handler_lineno: bool = False

    def __post_init__(self) -> None:
        if self.max_line < 2:
            raise ValueError("max_line must be at least 2")


class IniParseError(ValueError):
    """Raised when parsing failed; ``lineno`` is the first line in error."""

    def __init__(self, lineno: int) -> None:
        super().__init__(f"INI parse error on line {lineno}")
        self.lineno = lineno


def _find_chars_or_comment(text: str, chars: str | None, options: IniOptions) -> int:
    """Index of the first character in ``chars`` or of an inline comment."""
    was_space = False
    for index, ch in enumerate(text):
        if chars and ch in chars:
            return index
        if (
            options.allow_inline_comments
            and was_space
            and ch in options.inline_comment_prefixes
        ):
            return index
        was_space = ch in _WHITESPACE
    return len(text)


def parse_stream(
    stream: TextIO, handler: Handler, options: IniOptions | None = None
) -> None:
    """Parse INI text read line by line from ``stream``.

    ``handler(section, name, value)`` is called for each pair and must return
    a true value on success. Parsing goes on after an error unless
    ``stop_on_first_error`` is set; at the end an :class:`IniParseError`
    naming the first line in error is raised.
    """
    opts = options if options is not None else IniOptions()

    section = ""
    prev_name = ""
    error = 0
    lineno = 0

    def call(name: str | None, value: str | None) -> bool:
        if opts.handler_lineno:
            return bool(handler(section, name, value, lineno))
        return bool(handler(section, name, value))

    while True:
        line = stream.readline(opts.max_line - 1)
        if not line:
            break
        lineno += 1

        offset = 0
        if opts.allow_bom and lineno == 1 and line.startswith(_BOM):
            offset = len(_BOM)
        body = line[offset:].rstrip(_WHITESPACE)
        start = body.lstrip(_WHITESPACE)
        indented = offset > 0 or len(start) < len(body)

        if not start or start[0] in opts.start_comment_prefixes:
            pass
        elif opts.allow_multiline and prev_name and indented:
            end = _find_chars_or_comment(start, None, opts)
            value = start[:end].rstrip(_WHITESPACE)
            if not call(prev_name, value) and not error:
                error = lineno
        elif start[0] == "[":
            end = _find_chars_or_comment(start[1:], "]", opts) + 1
            if end < len(start) and start[end] == "]":
                section = start[1:end]
                prev_name = ""
                if opts.call_handler_on_new_section and not call(None, None) and not error:
                    error = lineno
            elif not error:
                error = lineno
        else:
            end = _find_chars_or_comment(start, "=:", opts)
            if end < len(start) and start[end] in "=:":
                name = start[:end].rstrip(_WHITESPACE)
                rest = start[end + 1 :]
                value_end = _find_chars_or_comment(rest, None, opts)
                value = rest[:value_end].strip(_WHITESPACE)
                prev_name = name
                if not call(name, value) and not error:
                    error = lineno
            elif not error:
                if opts.allow_no_value:
                    name = start[:end].rstrip(_WHITESPACE)
                    if not call(name, None) and not error:
                        error = lineno
                else:
                    error = lineno

        if opts.stop_on_first_error and error:
            break

    if error:
        raise IniParseError(error)


def parse_string(text: str, handler: Handler, options: IniOptions | None = None) -> None:
    """Parse INI data held in ``text``; see :func:`parse_stream`."""
    parse_stream(io.StringIO(text, newline=""), handler, options)


def parse_file(
    path: str | os.PathLike[str], handler: Handler, options: IniOptions | None = None
) -> None:
    """Parse the INI file at ``path``; ``OSError`` if it cannot be opened."""
    with open(path, encoding="utf-8", newline="") as stream:
        parse_stream(stream, handler, options)