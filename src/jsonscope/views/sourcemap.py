"""SourceMapSerializer: pretty-prints JSON while mapping nodes to positions.

The output text matches a standard indented pretty-printer: one member or
element per line, ``": "`` after keys, ``[]``/``{}`` for empty containers and
object members in insertion order, so serializing an unchanged value always
yields identical text and spans.

Every node reachable from the root gets a ``PositionSpan`` keyed by its JSON
Pointer; object members also carry the span of their key token.  The editor
uses ``pointers`` to highlight a selected node and ``lines`` to map the cursor
line back to a node.

Nodes that are not valid JSON (NaN, infinities, unsupported types) degrade to
``null`` with a diagnostic, unless ``SerializerConfig.strict`` is set.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any

import numpy as np

from jsonscope.config import SerializerConfig
from jsonscope.errors import SerializationError
from jsonscope.path.pointer import escape_token
from jsonscope.result import PositionSpan, SerializedDocument

__all__ = ["SourceMapSerializer", "serialize"]

logger = logging.getLogger(__name__)


def _utf16_len(text: str) -> int:
    """Length of *text* in UTF-16 code units (astral characters count twice)."""
    if text.isascii():
        return len(text)
    return len(text) + sum(1 for ch in text if ord(ch) > 0xFFFF)


class SourceMapSerializer:
    """Serializes JSON values to text with a node position map.

    Example::

        serializer = SourceMapSerializer()
        doc = serializer.serialize({"a": [1, 2]})
        doc.text                      # '{\\n  "a": [\\n    1,\\n    2\\n  ]\\n}'
        doc.pointers["/a/1"].line     # 4
        doc.pointer_for_line(2)       # "/a"

    Raises:
        TypeError: If *config* is not a ``SerializerConfig``.
    """

    def __init__(self, config: SerializerConfig | None = None) -> None:
        if config is not None and not isinstance(config, SerializerConfig):
            msg = (
                f"config must be a SerializerConfig, got {type(config).__name__}; "
                "pass indent=... to set the indent alone"
            )
            raise TypeError(msg)
        self._config: SerializerConfig = (
            config if config is not None else SerializerConfig()
        )

    def serialize(self, value: Any) -> SerializedDocument:
        """Serialize *value* and record the span of every node.

        Nesting depth is not limited by the interpreter's recursion limit.

        Raises:
            SerializationError: In strict mode when a node is not valid JSON.
        """
        run = _SerializationRun(self._config)
        run.write_document(value)
        return run.finish()


@dataclass(slots=True)
class _Pending:
    """A node still to be written, with what precedes it in its container."""

    value: Any
    pointer: str
    depth: int
    key: str | None = None
    comma: bool = False


@dataclass(slots=True)
class _Closer:
    """The closing bracket of an open container and its recorded start."""

    bracket: str
    ident: int
    pointer: str
    depth: int
    start: int
    line: int
    column: int
    key_start: int | None
    key_end: int | None


class _SerializationRun:
    """Mutable state for a single ``serialize`` call."""

    def __init__(self, config: SerializerConfig) -> None:
        self._config = config
        self._chunks: list[str] = []
        self._offset = 0
        self._line = 1
        self._column = 0
        self._line_starts: list[int] = [0]
        self._order: list[str] = []
        self._spans: dict[str, PositionSpan] = {}
        self._lines: dict[int, str] = {}
        self._diagnostics: list[str] = []
        # ids of the containers still open, for cycle detection
        self._open: set[int] = set()

    def finish(self) -> SerializedDocument:
        line_starts = np.asarray(self._line_starts, dtype=np.int64)
        line_starts.flags.writeable = False
        return SerializedDocument(
            text="".join(self._chunks),
            pointers=MappingProxyType(
                {pointer: self._spans[pointer] for pointer in self._order}
            ),
            lines=MappingProxyType(self._lines),
            diagnostics=tuple(self._diagnostics),
            line_starts=line_starts,
        )

    # ------------------------------------------------------------------
    # Output tracking
    # ------------------------------------------------------------------

    def _emit(self, chunk: str) -> None:
        self._chunks.append(chunk)
        if "\n" not in chunk:
            size = _utf16_len(chunk)
            self._offset += size
            self._column += size
            return

        start = 0
        while (idx := chunk.find("\n", start)) != -1:
            self._offset += _utf16_len(chunk[start : idx + 1])
            self._line += 1
            self._line_starts.append(self._offset)
            start = idx + 1
        tail = _utf16_len(chunk[start:])
        self._offset += tail
        self._column = tail

    def _newline(self, depth: int) -> None:
        self._emit("\n" + " " * (self._config.indent * depth))

    # ------------------------------------------------------------------
    # Node writers
    # ------------------------------------------------------------------

    def write_document(self, value: Any) -> None:
        """Write *value* with an explicit stack of pending nodes and closers."""
        stack: list[_Pending | _Closer] = [_Pending(value, "", 0)]
        while stack:
            task = stack.pop()
            if isinstance(task, _Closer):
                self._open.discard(task.ident)
                self._newline(task.depth)
                self._emit(task.bracket)
                self._record(
                    task.pointer,
                    task.start,
                    task.line,
                    task.column,
                    task.key_start,
                    task.key_end,
                )
            else:
                self._write_pending(task, stack)

    def _write_pending(
        self, task: _Pending, stack: list[_Pending | _Closer]
    ) -> None:
        if task.comma:
            self._emit(",")
        if task.depth:
            self._newline(task.depth)
        key_start: int | None = None
        key_end: int | None = None
        if task.key is not None:
            key_start = self._offset
            self._emit(json.dumps(task.key, ensure_ascii=False))
            key_end = self._offset
            self._emit(": ")

        value, pointer, depth = task.value, task.pointer, task.depth
        start, line, column = self._offset, self._line, self._column
        self._order.append(pointer)
        self._lines[line] = pointer

        # CRITICAL: bool MUST be checked before int (bool subclasses int)
        if isinstance(value, bool):
            self._emit("true" if value else "false")
        elif value is None:
            self._emit("null")
        elif isinstance(value, str):
            self._emit(json.dumps(value, ensure_ascii=False))
        elif isinstance(value, int):
            self._emit(int.__repr__(value))
        elif isinstance(value, float):
            if math.isfinite(value):
                self._emit(float.__repr__(value))
            else:
                self._degrade(pointer, f"non-finite number {value!r}")
        elif isinstance(value, (dict, list)) and id(value) in self._open:
            self._degrade(pointer, "circular reference")
        elif isinstance(value, (dict, list)):
            children: list[_Pending]
            if isinstance(value, dict):
                opener, closer = "{", "}"
                children = [
                    _Pending(item, f"{pointer}/{escape_token(key)}", depth + 1, key)
                    for key, item in self._members(value, pointer)
                ]
            else:
                opener, closer = "[", "]"
                children = [
                    _Pending(item, f"{pointer}/{idx}", depth + 1)
                    for idx, item in enumerate(value)
                ]
            if not children:
                self._emit(opener + closer)
            else:
                self._emit(opener)
                self._open.add(id(value))
                stack.append(
                    _Closer(
                        closer,
                        id(value),
                        pointer,
                        depth,
                        start,
                        line,
                        column,
                        key_start,
                        key_end,
                    )
                )
                for child in children[1:]:
                    child.comma = True
                stack.extend(reversed(children))
                return
        else:
            self._degrade(pointer, f"unsupported type {type(value).__name__}")

        self._record(pointer, start, line, column, key_start, key_end)

    def _record(
        self,
        pointer: str,
        start: int,
        line: int,
        column: int,
        key_start: int | None,
        key_end: int | None,
    ) -> None:
        self._spans[pointer] = PositionSpan(
            start=start,
            end=self._offset,
            line=line,
            column=column,
            key_start=key_start,
            key_end=key_end,
        )

    # ------------------------------------------------------------------
    # Degradation
    # ------------------------------------------------------------------

    def _members(self, obj: dict[Any, Any], pointer: str) -> list[tuple[str, Any]]:
        """Object members with coerced keys; a key emitted twice is skipped."""
        members: list[tuple[str, Any]] = []
        emitted: set[str] = set()
        for raw_key, item in obj.items():
            key = self._coerce_key(raw_key, pointer)
            if key is None:
                continue
            if key in emitted:
                self._report(
                    pointer or "/",
                    f"skipped member with key {raw_key!r} duplicating {key!r}",
                )
                continue
            emitted.add(key)
            members.append((key, item))
        return members

    def _coerce_key(self, key: Any, pointer: str) -> str | None:
        """Coerce a dict key the way the standard JSON encoder does."""
        if isinstance(key, str):
            return key
        if isinstance(key, bool):
            return "true" if key else "false"
        if key is None:
            return "null"
        if isinstance(key, int):
            return int.__repr__(key)
        if isinstance(key, float) and math.isfinite(key):
            return float.__repr__(key)
        self._report(pointer or "/", f"skipped member with unsupported key {key!r}")
        return None

    def _degrade(self, pointer: str, reason: str) -> None:
        self._report(pointer or "/", f"{reason} rendered as null")
        self._emit("null")

    def _report(self, where: str, message: str) -> None:
        if self._config.strict:
            raise SerializationError(f"{message} at {where}")
        logger.warning("Serializer degraded node %s: %s", where, message)
        self._diagnostics.append(f"{where}: {message}")


def serialize(
    value: Any,
    config: SerializerConfig | None = None,
    *,
    indent: int | None = None,
) -> SerializedDocument:
    """Shorthand for ``SourceMapSerializer(config).serialize(value)``.

    Args:
        value: The JSON value to serialize.
        config: Serializer options.  Defaults to ``SerializerConfig()``.
        indent: Spaces per nesting level; overrides ``config.indent``.

    Raises:
        TypeError: If *config* is not a ``SerializerConfig``.
    """
    if indent is not None:
        base = config if config is not None else SerializerConfig()
        config = replace(base, indent=indent)
    return SourceMapSerializer(config).serialize(value)
