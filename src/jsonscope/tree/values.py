"""JSON value helpers shared across the package.

``JsonValue`` is the in-memory form of a parsed JSON document: dicts with
string keys (insertion ordered), lists, str, int, float, bool and None.
"""

from __future__ import annotations

from typing import Any

__all__ = ["JsonValue", "clone", "kind_of"]

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None


def kind_of(value: Any) -> str:
    """Return the JSON kind name of *value*.

    One of ``"object"``, ``"array"``, ``"string"``, ``"number"``,
    ``"boolean"``, ``"null"`` or ``"unknown"`` for anything that is not a
    JSON value.
    """
    # bool MUST be checked before int: bool subclasses int in Python
    if isinstance(value, bool):
        return "boolean"
    if value is None:
        return "null"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    return "unknown"


def clone(value: Any) -> Any:
    """Return a structurally independent deep copy of a JSON value.

    Unlike ``copy.deepcopy`` no memo is kept: a container referenced twice in
    the input becomes two separate containers in the copy, exactly as a
    serialize/parse round trip would produce.  Writing through one path of the
    copy can therefore never show up at another path.
    """
    if isinstance(value, dict):
        return {key: clone(item) for key, item in value.items()}
    if isinstance(value, list):
        return [clone(item) for item in value]
    return value
