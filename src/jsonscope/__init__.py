"""jsonscope - path-addressed JSON data model and structural transforms."""

from __future__ import annotations

from jsonscope.api import (
    apply_edit,
    coerce_edit,
    collect_strings,
    deduplicate_all,
    deduplicate_all_strings,
    deduplicate_one,
    editable_text,
    exists,
    filter_duplicates,
    find_duplicates,
    from_pointer,
    parse,
    project,
    replace,
    resolve,
    serialize,
    to_pointer,
    to_text,
    write,
)
from jsonscope.cache import ViewCache
from jsonscope.config import DedupeConfig, ProjectionConfig, SerializerConfig
from jsonscope.dedupe.detector import DuplicateRecord
from jsonscope.errors import (
    JsonScopeError,
    MalformedPathError,
    PathNotFoundError,
    ProjectionError,
    RootWriteError,
    SerializationError,
)
from jsonscope.path.segments import Index, Key
from jsonscope.result import (
    EditResult,
    PositionSpan,
    PropertyPosition,
    SchemaProjection,
    SerializedDocument,
)

__version__: str = "0.1.0"
__all__: list[str] = [
    "DedupeConfig",
    "DuplicateRecord",
    "EditResult",
    "Index",
    "JsonScopeError",
    "Key",
    "MalformedPathError",
    "PathNotFoundError",
    "PositionSpan",
    "ProjectionConfig",
    "ProjectionError",
    "PropertyPosition",
    "RootWriteError",
    "SchemaProjection",
    "SerializationError",
    "SerializedDocument",
    "SerializerConfig",
    "ViewCache",
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
