"""Path subpackage: typed path segments and path-addressed reads and writes.

Re-exports the public API for the path module:
- Key, Index: the two segment variants; Path is a tuple of them
- parse, to_text: path text tokenizer and canonical renderer
- resolve, write, replace: read, in-place write, copy-on-write update
- to_pointer, from_pointer: JSON Pointer bridge
"""

from jsonscope.path.address import exists, replace, resolve, write
from jsonscope.path.parser import as_path, format_segment, parse, to_text
from jsonscope.path.pointer import from_pointer, to_pointer
from jsonscope.path.segments import ROOT, Index, Key, Path, Segment

__all__ = [
    "ROOT",
    "Index",
    "Key",
    "Path",
    "Segment",
    "as_path",
    "exists",
    "format_segment",
    "from_pointer",
    "parse",
    "replace",
    "resolve",
    "to_pointer",
    "to_text",
    "write",
]
