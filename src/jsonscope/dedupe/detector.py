"""DuplicateDetector: ranks string values that occur more than once.

Built directly on ``StringCollector``.  Records are ordered by descending
occurrence count; equal counts keep the order in which their values were
first encountered during traversal (Python's ``sorted`` is stable).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from jsonscope.tree.collector import collect_strings

__all__ = ["DuplicateRecord", "filter_duplicates", "find_duplicates"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DuplicateRecord:
    """One string value that occurs at two or more paths.

    Attributes:
        value: The duplicated string.
        count: Number of occurrences; always ``len(paths)`` and at least 2.
        paths: Canonical path texts of every occurrence, in traversal order.
    """

    value: str
    count: int
    paths: tuple[str, ...]

    def __post_init__(self) -> None:
        if self.count != len(self.paths):
            msg = f"count ({self.count}) must equal len(paths) ({len(self.paths)})"
            raise ValueError(msg)
        if self.count < 2:
            msg = f"a duplicate needs at least 2 occurrences, got {self.count}"
            raise ValueError(msg)


def find_duplicates(value: Any) -> list[DuplicateRecord]:
    """Return every string value of *value* that occurs at least twice.

    Args:
        value: Any JSON value.  It is never mutated.

    Returns:
        DuplicateRecords sorted by descending ``count``, ties in first-seen
        order.  Empty when no string repeats.
    """
    records = [
        DuplicateRecord(value=text, count=len(paths), paths=tuple(paths))
        for text, paths in collect_strings(value).items()
        if len(paths) > 1
    ]
    logger.debug("Found %d duplicated string value(s)", len(records))
    return sorted(records, key=lambda record: -record.count)


def filter_duplicates(
    records: Iterable[DuplicateRecord], query: str
) -> list[DuplicateRecord]:
    """Keep records whose value contains *query*, ignoring case.

    An empty query keeps everything.  Order is preserved.
    """
    needle = query.lower()
    return [record for record in records if needle in record.value.lower()]
