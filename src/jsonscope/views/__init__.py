"""views subpackage: derived, read-only projections of a JSON value.

- SourceMapSerializer / serialize: pretty-printed text with node positions
- SchemaProjector / project: single-interface type description
"""

from __future__ import annotations

from jsonscope.views.schema import SchemaProjector, project
from jsonscope.views.sourcemap import SourceMapSerializer, serialize

__all__ = ["SchemaProjector", "SourceMapSerializer", "project", "serialize"]
