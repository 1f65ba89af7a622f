"""SchemaProjector: derives a single TypeScript-style interface from a value.

Type inference per node:
- null -> ``null``; string/number/boolean -> their type names.
- object -> a block listing ``key: type;`` per member in insertion order.
  Keys that are not identifiers are written as quoted string literals.
  ``{}`` when empty.
- array -> ``any[]`` when empty; ``Shape[]`` from the first element when that
  element is an object (later elements are not merged into the shape);
  otherwise the distinct element types joined with `` | ``, parenthesised when
  there is more than one, suffixed with ``[]``.
- anything else -> ``any``.

An object root is rendered as ``interface RootInterface {...}``; any other
root as ``type RootInterface = ...;``.  Every emitted property is recorded
with its JSON Pointer and the 1-based line of its declaration, so the type
view can follow the selection in the tree view.

Projection is diagnostic: a failure yields a description holding an inline
comment with the error rather than an exception.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from jsonscope.config import ProjectionConfig
from jsonscope.errors import ProjectionError
from jsonscope.path.pointer import escape_token
from jsonscope.result import PropertyPosition, SchemaProjection

__all__ = ["SchemaProjector", "project"]

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

ERROR_PREFIX = "// Error generating interface"


@dataclass
class _Fragment:
    """A rendered type expression that may span several lines.

    ``props`` holds ``(line_index, pointer)`` pairs relative to ``lines[0]``.
    """

    lines: list[str]
    props: list[tuple[int, str]] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def prepend(self, prefix: str) -> _Fragment:
        self.lines[0] = prefix + self.lines[0]
        return self

    def append(self, suffix: str) -> _Fragment:
        self.lines[-1] += suffix
        return self

    def extend(self, other: _Fragment, separator: str = "") -> None:
        """Continue this fragment's last line with *other*'s first line."""
        shift = len(self.lines) - 1
        self.lines[-1] += separator + other.lines[0]
        self.lines.extend(other.lines[1:])
        self.props.extend((idx + shift, pointer) for idx, pointer in other.props)


class SchemaProjector:
    """Projects JSON values to a structural type description.

    Example::

        projector = SchemaProjector()
        projection = projector.project({"id": 1, "tags": ["a"]})
        print(projection.description)
        # interface RootInterface {
        #   id: number;
        #   tags: string[];
        # }
        projection.property_positions[1]   # PropertyPosition(path="/tags", line=3)
    """

    def __init__(self, config: ProjectionConfig | None = None) -> None:
        self._config: ProjectionConfig = (
            config if config is not None else ProjectionConfig()
        )

    def project(self, value: Any) -> SchemaProjection:
        """Return the type description of *value*; never raises."""
        try:
            body = self._render(value, 0, "")
        except (ProjectionError, RecursionError) as exc:
            message = str(exc) or type(exc).__name__
            logger.warning("Schema projection failed: %s", message)
            return SchemaProjection(
                description=f"{ERROR_PREFIX}\n// {message}", error=message
            )

        name = self._config.root_name
        if isinstance(value, dict):
            body.prepend(f"interface {name} ")
        else:
            body.prepend(f"type {name} = ").append(";")

        return SchemaProjection(
            description=body.text,
            property_positions=tuple(
                PropertyPosition(path=pointer, line=idx + 1)
                for idx, pointer in body.props
            ),
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self, value: Any, depth: int, pointer: str) -> _Fragment:
        # bool MUST be checked before int
        if isinstance(value, bool):
            return _Fragment(["boolean"])
        if value is None:
            return _Fragment(["null"])
        if isinstance(value, str):
            return _Fragment(["string"])
        if isinstance(value, (int, float)):
            return _Fragment(["number"])
        if isinstance(value, list):
            return self._render_array(value, depth, pointer)
        if isinstance(value, dict):
            return self._render_object(value, depth, pointer)
        return _Fragment(["any"])

    def _render_object(
        self, obj: dict[Any, Any], depth: int, pointer: str
    ) -> _Fragment:
        if not obj:
            return _Fragment(["{}"])

        inner = " " * (self._config.indent * (depth + 1))
        fragment = _Fragment(["{"])
        for key, item in obj.items():
            if not isinstance(key, str):
                msg = f"object key {key!r} at {pointer or '/'} is not a string"
                raise ProjectionError(msg)
            child_pointer = f"{pointer}/{escape_token(key)}"
            child = self._render(item, depth + 1, child_pointer)
            fragment.props.append((len(fragment.lines), child_pointer))
            fragment.lines.extend(
                child.prepend(f"{inner}{_property_name(key)}: ").append(";").lines
            )
            shift = len(fragment.lines) - len(child.lines)
            fragment.props.extend((idx + shift, p) for idx, p in child.props)
        fragment.lines.append(" " * (self._config.indent * depth) + "}")
        return fragment

    def _render_array(self, arr: list[Any], depth: int, pointer: str) -> _Fragment:
        if not arr:
            return _Fragment(["any[]"])

        first = arr[0]
        if isinstance(first, dict):
            return self._render(first, depth, f"{pointer}/0").append("[]")

        distinct: dict[str, _Fragment] = {}
        for idx, item in enumerate(arr):
            rendered = self._render(item, depth, f"{pointer}/{idx}")
            distinct.setdefault(rendered.text, rendered)

        fragments = list(distinct.values())
        if len(fragments) == 1:
            return fragments[0].append("[]")

        union = _Fragment(["("])
        for idx, fragment in enumerate(fragments):
            union.extend(fragment, " | " if idx else "")
        return union.append(")[]")


def _property_name(key: str) -> str:
    if _IDENTIFIER.match(key):
        return key
    return json.dumps(key, ensure_ascii=False)


def project(value: Any, config: ProjectionConfig | None = None) -> SchemaProjection:
    """Shorthand for ``SchemaProjector(config).project(value)``."""
    return SchemaProjector(config).project(value)
