"""Tokenizer and renderer for the dotted/bracket path syntax.

Canonical text form:
- ``$`` is the root.
- ``.name`` selects an object member whose key is an identifier
  (``[A-Za-z_$][A-Za-z0-9_$]*``).
- ``["any key"]`` selects an object member by a JSON string literal.
- ``[3]`` selects an array element.

The parser also accepts paths without the leading ``$`` (``user.tags[2]``)
and single-quoted bracket keys (``['a.b']``, no escapes).  Bracketed digits
are always array indices and dotted names are always object keys, so
``parse(to_text(path)) == path`` holds for every path.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable

from jsonscope.errors import MalformedPathError
from jsonscope.path.segments import Index, Key, Path, Segment

__all__ = ["as_path", "format_segment", "parse", "to_text"]

_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*\Z")
_DIGITS = re.compile(r"[0-9]+")

# Characters that terminate a dotted name
_NAME_STOP = frozenset(".[]")


def format_segment(segment: Segment) -> str:
    """Render one segment in canonical form (``.key``, ``["key"]`` or ``[n]``)."""
    if isinstance(segment, Index):
        return f"[{segment.position}]"
    if _IDENTIFIER.match(segment.name):
        return f".{segment.name}"
    return f"[{json.dumps(segment.name, ensure_ascii=False)}]"


def to_text(path: Iterable[Segment]) -> str:
    """Render a path in canonical text form, e.g. ``$.user.tags[2]``."""
    return "$" + "".join(format_segment(segment) for segment in path)


def parse(text: str) -> Path:
    """Parse path text into a tuple of typed segments.

    Raises:
        MalformedPathError: If the text is empty, brackets or string literals
            are unbalanced, a dotted name is empty, or an index is not a
            non-negative integer literal without leading zeros.
    """
    return _PathTokenizer(text).tokenize()


def as_path(path: str | Iterable[Segment]) -> Path:
    """Accept either path text or a segment sequence and return a ``Path``."""
    if isinstance(path, str):
        return parse(path)
    return tuple(path)


class _PathTokenizer:
    """Single-pass, character-level tokenizer for one path string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def tokenize(self) -> Path:
        text = self._text
        if not text:
            raise self._error("Empty path")

        segments: list[Segment] = []
        if text[0] == "$":
            self._pos = 1
        elif text[0] not in _NAME_STOP:
            # Relative form: the first segment is a bare key
            segments.append(self._read_name())

        while self._pos < len(text):
            ch = text[self._pos]
            if ch == ".":
                self._pos += 1
                segments.append(self._read_name())
            elif ch == "[":
                segments.append(self._read_bracket())
            elif ch == "]":
                raise self._error("Unbalanced ']'")
            else:
                raise self._error(f"Unexpected character {ch!r}")

        return tuple(segments)

    # ------------------------------------------------------------------
    # Segment readers
    # ------------------------------------------------------------------

    def _read_name(self) -> Key:
        text = self._text
        start = self._pos
        while self._pos < len(text) and text[self._pos] not in _NAME_STOP:
            self._pos += 1
        if self._pos == start:
            raise self._error("Empty key name")
        return Key(text[start : self._pos])

    def _read_bracket(self) -> Segment:
        text = self._text
        self._pos += 1  # consume "["
        if self._pos >= len(text):
            raise self._error("Unterminated '['")

        ch = text[self._pos]
        segment: Segment
        if ch in "\"'":
            segment = Key(self._read_quoted(ch))
        else:
            segment = Index(self._read_index())

        if self._pos >= len(text):
            raise self._error("Unterminated '['")
        if text[self._pos] != "]":
            raise self._error(f"Expected ']' but found {text[self._pos]!r}")
        self._pos += 1
        return segment

    def _read_index(self) -> int:
        text = self._text
        match = _DIGITS.match(text, self._pos)
        if match is None:
            ch = text[self._pos]
            if ch == "-":
                raise self._error("Negative array index")
            if ch == "[":
                raise self._error("Nested '['")
            raise self._error("Array index must be a non-negative integer")
        digits = match.group()
        if len(digits) > 1 and digits[0] == "0":
            raise self._error("Array index has leading zeros")
        self._pos = match.end()
        return int(digits)

    def _read_quoted(self, quote: str) -> str:
        text = self._text
        start = self._pos

        if quote == "'":
            end = text.find("'", start + 1)
            if end == -1:
                raise self._error("Unterminated string literal")
            self._pos = end + 1
            return text[start + 1 : end]

        end = start + 1
        while end < len(text):
            ch = text[end]
            if ch == "\\":
                end += 2
                continue
            if ch == '"':
                break
            end += 1
        if end >= len(text):
            raise self._error("Unterminated string literal")

        try:
            name: str = json.loads(text[start : end + 1])
        except json.JSONDecodeError as exc:
            raise self._error(f"Invalid string literal: {exc.msg}") from exc
        self._pos = end + 1
        return name

    def _error(self, message: str) -> MalformedPathError:
        return MalformedPathError(message, path=self._text, position=self._pos)
