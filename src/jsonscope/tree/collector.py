"""StringCollector: maps every string leaf of a JSON value to its paths.

A single pre-order walk: object members are visited in key insertion order,
array elements by increasing index.  Only ``str`` leaves contribute; numbers,
booleans, null and empty containers contribute nothing.  Members whose key is
not a string cannot be addressed by a path and are skipped.

Paths are emitted in canonical text form (``$.tags[0]``, ``$["a b"]``).  The
returned dict preserves first-encounter order of the string values, which the
duplicate detector relies on for tie-breaking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from jsonscope.path.parser import format_segment
from jsonscope.path.segments import Index, Key

__all__ = ["StringCollector", "collect_occurrences", "collect_strings"]


@dataclass
class StringCollector:
    """Collects string leaves and the paths at which they occur.

    Example::
        collector = StringCollector()
        collector.collect({"tags": ["frontend", "backend", "frontend"]})
        # {"frontend": ["$.tags[0]", "$.tags[2]"], "backend": ["$.tags[1]"]}
    """

    def collect(self, value: Any) -> dict[str, list[str]]:
        """Return a mapping from each string value to every path holding it.

        Args:
            value: Any JSON value.  It is never mutated.

        Returns:
            Dict keyed by string value in first-encounter order; each list holds
            canonical path texts in traversal order.
        """
        collected: dict[str, list[str]] = {}
        for path, text in self.occurrences(value):
            collected.setdefault(text, []).append(path)
        return collected

    def occurrences(self, value: Any) -> list[tuple[str, str]]:
        """Return ``(path, string)`` for every string leaf, in traversal order.

        The walk keeps its own stack, so nesting depth is not bounded by the
        interpreter's recursion limit.

        Raises:
            ValueError: If a container contains itself.
        """
        found: list[tuple[str, str]] = []
        open_ids: set[int] = set()
        # A None path marks the end of the container whose id is the node
        pending: list[tuple[Any, str | None]] = [(value, "$")]
        while pending:
            node, path = pending.pop()
            if path is None:
                open_ids.discard(node)
            elif isinstance(node, str):
                found.append((path, node))
            elif isinstance(node, (dict, list)):
                if id(node) in open_ids:
                    msg = f"Circular reference at {path}"
                    raise ValueError(msg)
                open_ids.add(id(node))
                pending.append((id(node), None))
                # Reversed so the first member is popped first
                if isinstance(node, dict):
                    pending.extend(
                        (item, path + format_segment(Key(key)))
                        for key, item in reversed(node.items())
                        if isinstance(key, str)
                    )
                else:
                    pending.extend(
                        (node[idx], path + format_segment(Index(idx)))
                        for idx in range(len(node) - 1, -1, -1)
                    )
        return found


# Module-level collector (stateless, safe to share)
_collector = StringCollector()


def collect_strings(value: Any) -> dict[str, list[str]]:
    """Shorthand for ``StringCollector().collect(value)``."""
    return _collector.collect(value)


def collect_occurrences(value: Any) -> list[tuple[str, str]]:
    """Shorthand for ``StringCollector().occurrences(value)``."""
    return _collector.occurrences(value)
