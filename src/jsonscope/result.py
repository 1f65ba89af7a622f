"""Result dataclasses returned by the jsonscope view and edit operations.

This module provides the derived-view types: source-map spans, serialized
documents, schema projections and inline edit outcomes.  All of them are
recomputed wholesale whenever the source document changes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np

__all__ = [
    "EditResult",
    "PositionSpan",
    "PropertyPosition",
    "SchemaProjection",
    "SerializedDocument",
]


@dataclass(frozen=True, slots=True)
class PositionSpan:
    """Where one JSON node sits in serialized text.

    Offsets and columns are measured in UTF-16 code units from the start of
    the text, which is what browser editors index by.

    Attributes:
        start: Offset of the first character of the value.
        end: Offset just past the last character of the value.
        line: 1-based line on which the value starts.
        column: 0-based column at which the value starts.
        key_start: Offset of the opening quote of the member key, for object
            members; None otherwise.
        key_end: Offset just past the closing quote of the member key.
    """

    start: int
    end: int
    line: int
    column: int
    key_start: int | None = None
    key_end: int | None = None

    @property
    def selection(self) -> tuple[int, int]:
        """Range to highlight for this node: from its key (if any) to its end."""
        if self.key_start is not None:
            return self.key_start, self.end
        return self.start, self.end


@dataclass(frozen=True, slots=True)
class SerializedDocument:
    """Pretty-printed JSON text plus its bidirectional position map.

    Attributes:
        text: The formatted JSON text.
        pointers: JSON Pointer of every node (root is ``""``) to its span, in
            document order.
        lines: 1-based line number to the pointer of the value starting there.
        diagnostics: Messages for nodes that had to be degraded to ``null``.
        line_starts: UTF-16 offset at which each line starts (line 1 first).

    Documents built by the serializer hold read-only views (``pointers`` and
    ``lines`` are ``MappingProxyType``, ``line_starts`` is not writeable), so
    one document can be shared between callers.
    """

    text: str
    pointers: Mapping[str, PositionSpan]
    lines: Mapping[int, str]
    diagnostics: tuple[str, ...] = ()
    line_starts: np.ndarray = field(
        default_factory=lambda: np.zeros(1, dtype=np.int64),
        compare=False,
        repr=False,
    )

    @property
    def ok(self) -> bool:
        """True when no node had to be degraded."""
        return not self.diagnostics

    def span_for(self, pointer: str) -> PositionSpan | None:
        """Return the span of the node at *pointer*, or None."""
        return self.pointers.get(pointer)

    def pointer_for_line(self, line: int) -> str | None:
        """Return the pointer of the value starting on 1-based *line*, or None."""
        return self.lines.get(line)

    def line_for_offset(self, offset: int) -> int:
        """Return the 1-based line containing UTF-16 *offset*."""
        return int(np.searchsorted(self.line_starts, offset, side="right"))

    def pointer_for_offset(self, offset: int) -> str | None:
        """Map a cursor offset to the pointer of the value starting on its line."""
        return self.pointer_for_line(self.line_for_offset(offset))


@dataclass(frozen=True, slots=True)
class PropertyPosition:
    """One generated property of a schema projection.

    Attributes:
        path: JSON Pointer of the property in the source document.
        line: 1-based line of the property's declaration in the description.
    """

    path: str
    line: int


@dataclass(frozen=True, slots=True)
class SchemaProjection:
    """Structural type description derived from a JSON value.

    Attributes:
        description: The rendered interface (or type alias) text, or an inline
            error comment when projection failed.
        property_positions: One entry per emitted property, in emission order.
        error: The failure message, or None on success.
    """

    description: str
    property_positions: tuple[PropertyPosition, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of validating (and optionally applying) an inline edit.

    Attributes:
        valid: Whether the text could be converted for the node's type.
        value: The converted value; None when invalid.
        document: The updated document returned by ``apply_edit``; None for
            ``coerce_edit`` and for invalid edits.
    """

    valid: bool
    value: Any = None
    document: Any = None
