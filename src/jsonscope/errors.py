"""Exception taxonomy for jsonscope.

Path addressing, string collection and deduplication raise these errors to
the caller.  The source-map serializer and the schema projector contain
their errors and report them through their result objects instead.
"""

from __future__ import annotations

__all__ = [
    "JsonScopeError",
    "MalformedPathError",
    "PathError",
    "PathNotFoundError",
    "ProjectionError",
    "RootWriteError",
    "SerializationError",
]


class JsonScopeError(Exception):
    """Base class for every error raised by jsonscope."""


class PathError(JsonScopeError):
    """Base class for path addressing errors.

    Attributes:
        path: The path text (or canonical rendering) the error refers to.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class MalformedPathError(PathError, ValueError):
    """Path text could not be tokenized.

    Attributes:
        position: Character index in the text where parsing failed.
    """

    def __init__(self, message: str, path: str = "", position: int = 0) -> None:
        super().__init__(f"{message} (at position {position} in {path!r})", path)
        self.position = position


class PathNotFoundError(PathError, LookupError):
    """A well-formed path does not address a node in the document.

    Attributes:
        depth: Number of segments dereferenced successfully before failing.
    """

    def __init__(self, message: str, path: str = "", depth: int = 0) -> None:
        super().__init__(message, path)
        self.depth = depth


class RootWriteError(PathError):
    """An in-place write was attempted at the root path."""


class SerializationError(JsonScopeError, ValueError):
    """A value could not be rendered as JSON text."""


class ProjectionError(JsonScopeError):
    """A value could not be projected to a type description."""
