"""Public API functions for jsonscope.

Flat entry points for the collaborators of the core: the node editor
(``resolve``/``write``/``apply_edit``), the text editor (``serialize``), the
duplicate finder (``find_duplicates``/``deduplicate_one``/``deduplicate_all``)
and the type viewer (``project``).  Every function takes the document it
operates on explicitly; nothing keeps a reference to a "current" document.
"""

from __future__ import annotations

from jsonscope.dedupe.detector import filter_duplicates, find_duplicates
from jsonscope.dedupe.rewriter import (
    deduplicate_all,
    deduplicate_all_strings,
    deduplicate_one,
)
from jsonscope.edit import apply_edit, coerce_edit, editable_text
from jsonscope.path.address import exists, replace, resolve, write
from jsonscope.path.parser import parse, to_text
from jsonscope.path.pointer import from_pointer, to_pointer
from jsonscope.tree.collector import collect_strings
from jsonscope.views.schema import project
from jsonscope.views.sourcemap import serialize

__all__ = [
    "apply_edit",
    "coerce_edit",
    "collect_strings",
    "deduplicate_all",
    "deduplicate_all_strings",
    "deduplicate_one",
    "editable_text",
    "exists",
    "filter_duplicates",
    "find_duplicates",
    "from_pointer",
    "parse",
    "project",
    "replace",
    "resolve",
    "serialize",
    "to_pointer",
    "to_text",
    "write",
]
