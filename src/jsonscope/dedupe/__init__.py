"""dedupe subpackage: duplicate string detection and renumbering.

Example::

    from jsonscope.dedupe import deduplicate_one, find_duplicates

    doc = {"title": "Test", "name": "Test"}
    find_duplicates(doc)[0].paths        # ("$.title", "$.name")
    deduplicate_one(doc, "Test")         # {"title": "Test - 001", "name": "Test - 002"}
"""

from __future__ import annotations

from jsonscope.dedupe.detector import (
    DuplicateRecord,
    filter_duplicates,
    find_duplicates,
)
from jsonscope.dedupe.rewriter import (
    deduplicate_all,
    deduplicate_all_strings,
    deduplicate_one,
)

__all__ = [
    "DuplicateRecord",
    "deduplicate_all",
    "deduplicate_all_strings",
    "deduplicate_one",
    "filter_duplicates",
    "find_duplicates",
]
