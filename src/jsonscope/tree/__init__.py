"""Tree subpackage: JSON value helpers and the string leaf collector."""

from jsonscope.tree.collector import (
    StringCollector,
    collect_occurrences,
    collect_strings,
)
from jsonscope.tree.values import JsonValue, clone, kind_of

__all__ = [
    "JsonValue",
    "StringCollector",
    "clone",
    "collect_occurrences",
    "collect_strings",
    "kind_of",
]
