"""Frozen configuration dataclasses for the jsonscope operations.

Each config is immutable and validated on construction.  Every public
operation accepts ``config=None`` and falls back to the defaults below.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["DedupeConfig", "ProjectionConfig", "SerializerConfig"]

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


@dataclass(frozen=True, slots=True)
class DedupeConfig:
    """How duplicate strings are disambiguated.

    Attributes:
        separator: Text placed between the original value and its number.
        pad_width: Minimum width of the zero-padded occurrence number.  Wider
            numbers are used verbatim, never truncated.
    """

    separator: str = " - "
    pad_width: int = 3

    def __post_init__(self) -> None:
        if self.pad_width < 1:
            msg = f"pad_width must be >= 1, got {self.pad_width}"
            raise ValueError(msg)

    def suffixed(self, value: str, occurrence: int) -> str:
        """Return *value* tagged with its 1-based *occurrence* number."""
        return f"{value}{self.separator}{occurrence:0{self.pad_width}d}"


@dataclass(frozen=True, slots=True)
class SerializerConfig:
    """Source-map serializer settings.

    Attributes:
        indent: Spaces per nesting level.
        strict: When True, unserializable nodes raise ``SerializationError``
            instead of degrading to ``null``.
    """

    indent: int = 2
    strict: bool = False

    def __post_init__(self) -> None:
        if self.indent < 0:
            msg = f"indent must be >= 0, got {self.indent}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ProjectionConfig:
    """Schema projector settings.

    Attributes:
        indent: Spaces per nesting level in the generated description.
        root_name: Name given to the generated root interface or type alias.
    """

    indent: int = 2
    root_name: str = "RootInterface"

    def __post_init__(self) -> None:
        if self.indent < 0:
            msg = f"indent must be >= 0, got {self.indent}"
            raise ValueError(msg)
        if not _IDENTIFIER.match(self.root_name):
            msg = f"root_name must be an identifier, got {self.root_name!r}"
            raise ValueError(msg)
