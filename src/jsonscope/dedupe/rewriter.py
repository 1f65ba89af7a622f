"""Deduplicator: rewrites duplicated strings into numbered variants.

Every occurrence of a duplicated value is replaced by
``"{value}{separator}{n}"`` with ``n`` zero-padded (``"Test - 001"``).
Numbering follows the occurrence order of the input document, computed once
per call before any write happens.

Both operations work on a fresh, alias-free copy; the input is never mutated.
In ``deduplicate_one`` an occurrence that no longer holds the target value at
write time is skipped with a warning instead of aborting the whole pass.
"""

from __future__ import annotations

import logging
from bisect import insort
from typing import Any

from jsonscope.config import DedupeConfig
from jsonscope.dedupe.detector import find_duplicates
from jsonscope.errors import PathNotFoundError
from jsonscope.path.address import resolve, write
from jsonscope.path.parser import parse
from jsonscope.tree.collector import collect_occurrences, collect_strings
from jsonscope.tree.values import clone

__all__ = ["deduplicate_all", "deduplicate_all_strings", "deduplicate_one"]

logger = logging.getLogger(__name__)


def deduplicate_one(
    value: Any,
    target_value: str,
    config: DedupeConfig | None = None,
) -> Any:
    """Number every occurrence of *target_value* in a copy of *value*.

    Args:
        value:        Any JSON value.  It is never mutated.
        target_value: The string whose occurrences are renumbered.
        config:       Separator and padding.  Defaults to ``DedupeConfig()``.

    Returns:
        A new, structurally independent JSON value.  When *target_value*
        occurs fewer than two times the copy is returned unchanged.
    """
    cfg = config if config is not None else DedupeConfig()
    result = clone(value)

    paths = collect_strings(value).get(target_value, [])
    if len(paths) <= 1:
        return result

    written = 0
    for occurrence, path_text in enumerate(paths, start=1):
        segments = parse(path_text)
        try:
            current = resolve(segments, result)
        except PathNotFoundError:
            logger.warning("Skipping %s: path no longer resolves", path_text)
            continue
        if current != target_value:
            logger.warning("Skipping %s: value changed before rewrite", path_text)
            continue
        write(segments, result, cfg.suffixed(target_value, occurrence))
        written += 1

    logger.debug("Renumbered %d occurrence(s) of %r", written, target_value)
    return result


def deduplicate_all(value: Any, config: DedupeConfig | None = None) -> Any:
    """Renumber every duplicated string of *value*.

    Duplicates are detected once, up front, on the input.  Each record is then
    applied in ``find_duplicates`` order to the progressively rewritten
    document, exactly as chaining ``deduplicate_one`` calls would.  A value
    produced by an earlier rewrite is only renumbered again when it was itself
    one of the duplicates detected up front; it then joins that group at its
    traversal position.

    The document is copied and walked once.  An index from each string to its
    ranked occurrences is kept current as rewrites land, so the pass stays
    linear in the size of the document.

    Returns:
        A new, structurally independent JSON value.
    """
    cfg = config if config is not None else DedupeConfig()
    result = clone(value)

    # rank is the occurrence's position in the traversal of the whole tree
    index: dict[str, list[tuple[int, str]]] = {}
    for rank, (path_text, text) in enumerate(collect_occurrences(result)):
        index.setdefault(text, []).append((rank, path_text))

    for record in find_duplicates(value):
        ranked = index.pop(record.value)
        for occurrence, (rank, path_text) in enumerate(ranked, start=1):
            renamed = cfg.suffixed(record.value, occurrence)
            write(parse(path_text), result, renamed)
            insort(index.setdefault(renamed, []), (rank, path_text))
        logger.debug("Renumbered %d occurrence(s) of %r", len(ranked), record.value)
    return result


deduplicate_all_strings = deduplicate_all
