"""ViewCache: LRU-backed memo of the derived views of a document.

Duplicate lists, serialized documents and schema projections are pure
functions of a document (and a config).  The tree, editor and type views
recompute them on every change; this cache lets them share one computation
per document revision.

Entries are keyed by a fingerprint of the document's compact JSON text plus
the view kind and its config.  Documents that cannot be fingerprinted (e.g.
holding values the JSON encoder rejects, or non-string keys) are computed
without caching.

Each ``ViewCache`` instance owns its own ``LRUCache``: two instances never
interfere with each other.

Example::

    from jsonscope.cache import ViewCache

    views = ViewCache(max_size=64)
    views.duplicates(doc)        # computed
    views.duplicates(doc)        # served from memory
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

from cachetools import LRUCache

from jsonscope.config import ProjectionConfig, SerializerConfig
from jsonscope.dedupe.detector import DuplicateRecord, find_duplicates
from jsonscope.result import SchemaProjection, SerializedDocument
from jsonscope.views.schema import project
from jsonscope.views.sourcemap import serialize

__all__ = ["ViewCache"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _has_foreign_keys(value: Any) -> bool:
    """True when any object in *value* has a key that is not a string."""
    stack = [value]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            if any(not isinstance(key, str) for key in node):
                return True
            stack.extend(node.values())
        elif isinstance(node, list):
            stack.extend(node)
    return False


def _fingerprint(value: Any) -> str | None:
    """Digest of the compact JSON text of *value*, or None if unencodable.

    The encoder coerces non-string keys, so ``{1: x}`` and ``{"1": x}`` would
    share a digest; such documents are treated as unencodable.
    """
    if _has_foreign_keys(value):
        return None
    try:
        text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return None
    return hashlib.blake2b(
        text.encode("utf-8", "surrogatepass"), digest_size=16
    ).hexdigest()


class ViewCache:
    """LRU memo for ``find_duplicates``, ``serialize`` and ``project``.

    Cached results are shared between callers.  Every view is immutable:
    frozen records, tuples and the read-only mappings of
    ``SerializedDocument``.

    Args:
        max_size: Maximum number of views held in memory.  Defaults to 128.
            When exceeded, the least-recently-used entry is silently evicted.
    """

    def __init__(self, max_size: int = 128) -> None:
        self._cache: LRUCache[Hashable, Any] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    def clear(self) -> None:
        """Drop every cached view."""
        self._cache.clear()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def duplicates(self, value: Any) -> tuple[DuplicateRecord, ...]:
        """Cached ``find_duplicates(value)``, as an immutable tuple."""
        return self._lookup(
            value, ("duplicates",), lambda: tuple(find_duplicates(value))
        )

    def serialized(
        self, value: Any, config: SerializerConfig | None = None
    ) -> SerializedDocument:
        """Cached ``serialize(value, config)``."""
        cfg = config if config is not None else SerializerConfig()
        return self._lookup(value, ("serialized", cfg), lambda: serialize(value, cfg))

    def projection(
        self, value: Any, config: ProjectionConfig | None = None
    ) -> SchemaProjection:
        """Cached ``project(value, config)``."""
        cfg = config if config is not None else ProjectionConfig()
        return self._lookup(value, ("projection", cfg), lambda: project(value, cfg))

    def _lookup(
        self, value: Any, kind: tuple[Hashable, ...], compute: Callable[[], T]
    ) -> T:
        fingerprint = _fingerprint(value)
        if fingerprint is None:
            logger.debug("Document cannot be fingerprinted; computing %s", kind[0])
            return compute()

        key = (fingerprint, *kind)
        if key in self._cache:
            logger.debug("View cache hit for %s", kind[0])
            cached: T = self._cache[key]
            return cached

        logger.debug("View cache miss for %s", kind[0])
        result = compute()
        self._cache[key] = result
        return result
