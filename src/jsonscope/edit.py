"""Inline node editing: text shown in an editor and typed conversion back.

The editor only edits primitive nodes.  The typed text is converted
according to the type the node currently holds, and the document is updated
copy-on-write so the caller's tree is never mutated.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Iterable
from typing import Any

from jsonscope.path.address import replace, resolve
from jsonscope.path.parser import as_path
from jsonscope.path.segments import Segment
from jsonscope.result import EditResult
from jsonscope.tree.values import kind_of

__all__ = ["apply_edit", "coerce_edit", "editable_text"]

_INTEGER = re.compile(r"[+-]?[0-9]+")

_INVALID = EditResult(valid=False)


def editable_text(root: Any, path: str | Iterable[Segment]) -> str | None:
    """Return the editor text for the primitive node at *path*.

    Returns None for objects and arrays, which are not edited inline.

    Raises:
        PathNotFoundError: If *path* does not address a node.
    """
    value = resolve(path, root)
    kind = kind_of(value)
    if kind == "string":
        return str(value)
    if kind in ("boolean", "null", "number"):
        return json.dumps(value)
    return None


def coerce_edit(current: Any, text: str) -> EditResult:
    """Convert editor *text* to a value of the same kind as *current*.

    - null: ``"null"`` stays null; other text is parsed as JSON, falling back
      to the raw string when it is not valid JSON.
    - string: the text as is.
    - number: an integer or finite float literal; blank text is invalid.
    - boolean: ``true`` or ``false``, case-insensitive.
    - object/array: always invalid.
    """
    kind = kind_of(current)
    if kind == "null":
        if text == "null":
            return EditResult(valid=True, value=None)
        try:
            return EditResult(valid=True, value=json.loads(text))
        except json.JSONDecodeError:
            return EditResult(valid=True, value=text)

    if kind == "boolean":
        lowered = text.strip().lower()
        if lowered not in ("true", "false"):
            return _INVALID
        return EditResult(valid=True, value=lowered == "true")

    if kind == "string":
        return EditResult(valid=True, value=text)

    if kind == "number":
        stripped = text.strip()
        # float() also accepts digit separators and non-ASCII digits
        if not stripped.isascii() or "_" in stripped:
            return _INVALID
        if _INTEGER.fullmatch(stripped):
            return EditResult(valid=True, value=int(stripped))
        try:
            number = float(stripped)
        except ValueError:
            return _INVALID
        if not math.isfinite(number):
            return _INVALID
        return EditResult(valid=True, value=number)

    return _INVALID


def apply_edit(root: Any, path: str | Iterable[Segment], text: str) -> EditResult:
    """Validate *text* for the node at *path* and return the updated document.

    Returns:
        An ``EditResult`` whose ``document`` is a new tree with the converted
        value in place (only the containers on the path are copied).  Invalid
        edits return ``valid=False`` and leave ``document`` as None.

    Raises:
        PathNotFoundError: If *path* does not address a node.
    """
    segments = as_path(path)
    outcome = coerce_edit(resolve(segments, root), text)
    if not outcome.valid:
        return outcome
    return EditResult(
        valid=True,
        value=outcome.value,
        document=replace(root, segments, outcome.value),
    )
