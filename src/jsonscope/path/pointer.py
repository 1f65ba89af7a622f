"""JSON Pointer (RFC 6901) bridge for paths.

The source map and the schema projection key their positions by JSON
Pointer, while the rest of the package works with typed paths.  A pointer
token is ambiguous on its own (``/0`` may be an array index or an object key
named ``"0"``), so ``from_pointer`` decides each token against the document
it points into.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from jsonscope.errors import MalformedPathError, PathNotFoundError
from jsonscope.path.parser import to_text
from jsonscope.path.segments import Index, Key, Path, Segment

__all__ = ["escape_token", "from_pointer", "to_pointer", "unescape_token"]


def escape_token(token: str) -> str:
    """Escape ``~`` as ``~0`` and ``/`` as ``~1``."""
    return token.replace("~", "~0").replace("/", "~1")


def unescape_token(token: str, pointer: str = "") -> str:
    """Reverse ``escape_token``.

    Raises:
        MalformedPathError: If ``~`` is followed by anything but ``0`` or ``1``.
    """
    if "~" not in token:
        return token
    parts: list[str] = []
    i = 0
    while i < len(token):
        ch = token[i]
        if ch == "~":
            nxt = token[i + 1 : i + 2]
            if nxt == "0":
                parts.append("~")
            elif nxt == "1":
                parts.append("/")
            else:
                raise MalformedPathError(
                    "Invalid '~' escape in JSON Pointer", pointer, i
                )
            i += 2
            continue
        parts.append(ch)
        i += 1
    return "".join(parts)


def to_pointer(path: Iterable[Segment]) -> str:
    """Render a path as a JSON Pointer; the root is ``""``."""
    return "".join(
        f"/{segment.position}"
        if isinstance(segment, Index)
        else f"/{escape_token(segment.name)}"
        for segment in path
    )


def from_pointer(pointer: str, root: Any) -> Path:
    """Convert a JSON Pointer into a typed path by walking *root*.

    A token applied to an array must be a decimal index; applied to an object
    it is always a key, even when it looks numeric.

    Raises:
        MalformedPathError: If the pointer is non-empty and does not start with
            ``/``, or contains an invalid escape.
        PathNotFoundError: If a token does not address a node in *root*.
    """
    if pointer == "":
        return ()
    if not pointer.startswith("/"):
        raise MalformedPathError("JSON Pointer must start with '/'", pointer, 0)

    segments: list[Segment] = []
    current = root
    for raw in pointer[1:].split("/"):
        token = unescape_token(raw, pointer)
        depth = len(segments)
        if isinstance(current, dict):
            if token not in current:
                raise _not_found(pointer, segments, Key(token), depth)
            segments.append(Key(token))
            current = current[token]
        elif isinstance(current, list):
            if not token.isascii() or not token.isdigit() or (
                len(token) > 1 and token[0] == "0"
            ):
                raise _not_found(pointer, segments, Key(token), depth)
            position = int(token)
            if position >= len(current):
                raise _not_found(pointer, segments, Index(position), depth)
            segments.append(Index(position))
            current = current[position]
        else:
            raise _not_found(pointer, segments, Key(token), depth)
    return tuple(segments)


def _not_found(
    pointer: str, segments: list[Segment], failed: Segment, depth: int
) -> PathNotFoundError:
    failed_at = to_text([*segments, failed])
    return PathNotFoundError(
        f"Pointer {pointer!r} not found at {failed_at}", pointer, depth
    )
