"""Reading and writing JSON values by path.

``resolve`` and ``write`` work directly on the caller's tree; ``write``
expects the caller to pass a copy it owns.  ``replace`` is the
copy-on-write variant: it returns a new root and copies only the
containers along the path, leaving the input untouched.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from jsonscope.errors import PathNotFoundError, RootWriteError
from jsonscope.path.parser import as_path, to_text
from jsonscope.path.segments import Index, Key, Path, Segment

__all__ = ["exists", "replace", "resolve", "write"]


def resolve(path: str | Iterable[Segment], root: Any) -> Any:
    """Return the value addressed by *path* inside *root*.

    Args:
        path: Path text (``$.user.tags[2]``) or a segment sequence.
        root: The JSON document to read from.

    Returns:
        The addressed value (not a copy).

    Raises:
        MalformedPathError: If *path* is text that cannot be parsed.
        PathNotFoundError: If a key is missing, an index is out of range, or a
            segment dereferences into a primitive or the wrong container kind.
    """
    segments = as_path(path)
    return _walk(segments, root, len(segments))


def exists(path: str | Iterable[Segment], root: Any) -> bool:
    """Return True if *path* addresses a node inside *root*."""
    try:
        resolve(path, root)
    except PathNotFoundError:
        return False
    return True


def write(path: str | Iterable[Segment], root: Any, new_value: Any) -> None:
    """Assign *new_value* at *path*, mutating *root* in place.

    The parent container of the last segment is located with the same rules
    as ``resolve``.  An object parent receives the key (created if absent);
    an array parent must already hold the index.

    Raises:
        RootWriteError: If *path* is the root, which has no parent container.
        PathNotFoundError: If the parent cannot be resolved or the last
            segment does not fit the parent container.
    """
    segments = as_path(path)
    if not segments:
        raise RootWriteError("Cannot write to the root path in place", "$")

    parent = _walk(segments, root, len(segments) - 1)
    _assign(parent, segments, new_value)


def replace(root: Any, path: str | Iterable[Segment], new_value: Any) -> Any:
    """Return a new document with *new_value* placed at *path*.

    Only the containers along the path are copied; untouched siblings are
    shared with *root*.  Replacing the root path returns *new_value*.

    Raises:
        PathNotFoundError: Under the same conditions as ``write``.
    """
    segments = as_path(path)
    if not segments:
        return new_value
    return _replace_from(root, segments, 0, new_value)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _step(container: Any, segment: Segment, segments: Path, depth: int) -> Any:
    """Dereference one segment, raising PathNotFoundError on any mismatch."""
    if isinstance(segment, Key):
        if isinstance(container, dict) and segment.name in container:
            return container[segment.name]
    elif isinstance(container, list) and segment.position < len(container):
        return container[segment.position]
    raise _not_found(segments, depth)


def _walk(segments: Path, root: Any, count: int) -> Any:
    current = root
    for depth in range(count):
        current = _step(current, segments[depth], segments, depth)
    return current


def _assign(parent: Any, segments: Path, new_value: Any) -> None:
    last = segments[-1]
    depth = len(segments) - 1
    if isinstance(last, Key):
        if not isinstance(parent, dict):
            raise _not_found(segments, depth)
        parent[last.name] = new_value
        return
    if not isinstance(parent, list) or last.position >= len(parent):
        raise _not_found(segments, depth)
    parent[last.position] = new_value


def _replace_from(node: Any, segments: Path, depth: int, new_value: Any) -> Any:
    segment = segments[depth]
    is_last = depth == len(segments) - 1

    if isinstance(segment, Key):
        if not isinstance(node, dict) or (
            not is_last and segment.name not in node
        ):
            raise _not_found(segments, depth)
        copied_obj = dict(node)
        copied_obj[segment.name] = (
            new_value
            if is_last
            else _replace_from(node[segment.name], segments, depth + 1, new_value)
        )
        return copied_obj

    if not isinstance(node, list) or segment.position >= len(node):
        raise _not_found(segments, depth)
    copied_arr = list(node)
    copied_arr[segment.position] = (
        new_value
        if is_last
        else _replace_from(node[segment.position], segments, depth + 1, new_value)
    )
    return copied_arr


def _not_found(segments: Path, depth: int) -> PathNotFoundError:
    text = to_text(segments)
    failed_at = to_text(segments[: depth + 1])
    return PathNotFoundError(f"Path not found: {failed_at}", text, depth)
