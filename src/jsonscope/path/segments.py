"""Typed path segments.

A path is a tuple of segments, each either a ``Key`` (object member access)
or an ``Index`` (array element access).  Keeping the two apart means an
object key that happens to look numeric (``"0"``) is never confused with an
array position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

__all__ = ["ROOT", "Index", "Key", "Path", "Segment"]


@dataclass(frozen=True, slots=True)
class Key:
    """Object member access by string key."""

    name: str


@dataclass(frozen=True, slots=True)
class Index:
    """Array element access by non-negative position."""

    position: int

    def __post_init__(self) -> None:
        if self.position < 0:
            msg = f"Index position must be >= 0, got {self.position}"
            raise ValueError(msg)


Segment: TypeAlias = Key | Index
Path: TypeAlias = tuple[Segment, ...]

ROOT: Path = ()
