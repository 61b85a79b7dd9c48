"""Caches for schema resolution and view definitions.

- ``MemoCache``: LRU-backed memoization of a pure computation, keyed by any
  hashable (typically a ``Schema``, whose hash is its content fingerprint).
- ``ViewCache``: one ``ViewDefinition`` per schema fingerprint.
- ``CacheRegistry``: the set of caches (plus the validator collaborator)
  used by the package, built from a ``ViewConfig``.

All caches are filled lazily.  A computation that raises is never cached, so
the next access recomputes it.  Fills are guarded by a ``threading.RLock``;
memo computations run outside the lock, because every cached value is a pure
function of schema content and a racing duplicate fill stores an equal value.
View fills run inside the lock so that equal schemas always receive the
identical definition object.

Example::

    from json_schema_view.cache import get_registry
    from json_schema_view.schema import Schema

    schema = Schema({"properties": {"a": {}}})
    registry = get_registry()
    registry.views.view_for(schema) is registry.views.view_for(Schema({"properties": {"a": {}}}))
    # True
    registry.clear()
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from cachetools import Cache, LRUCache

from json_schema_view.config import ViewConfig
from json_schema_view.validator import JsonSchemaValidator
from json_schema_view.view import ViewDefinition

if TYPE_CHECKING:
    from json_schema_view.protocols import SchemaValidator
    from json_schema_view.schema import Schema

__all__ = [
    "CacheRegistry",
    "MemoCache",
    "ViewCache",
    "get_registry",
    "set_registry",
]

logger = logging.getLogger(__name__)

V = TypeVar("V")

_MISSING: Any = object()


class MemoCache(Generic[V]):
    """LRU-backed memo of a pure computation.

    Args:
        name: Label used in log messages.
        max_size: Maximum number of entries; the least-recently-used entry is
            evicted silently when exceeded.
    """

    def __init__(self, name: str, max_size: int) -> None:
        self._name = name
        self._cache: LRUCache[Hashable, V] = LRUCache(maxsize=max_size)
        self._lock = threading.RLock()

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

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get(self, key: Hashable, default: Any = None) -> V | Any:
        """Return the cached value for ``key``, or ``default``."""
        with self._lock:
            return self._cache.get(key, default)

    def get_or_compute(self, key: Hashable, compute: Callable[[], V]) -> V:
        """Return the cached value for ``key``, computing and storing it if absent.

        Exceptions raised by ``compute`` propagate and nothing is stored.
        """
        with self._lock:
            value = self._cache.get(key, _MISSING)
        if value is not _MISSING:
            return value
        value = compute()
        with self._lock:
            self._cache[key] = value
        return value

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        return self.curr_size

    def __repr__(self) -> str:
        return f"<MemoCache {self._name} {self.curr_size}/{self.max_size}>"


class ViewCache:
    """Maps schemas (by content fingerprint) to shared ``ViewDefinition`` objects.

    Args:
        max_size: Maximum number of definitions, or None for no bound.  With a
            bound, an evicted schema gets a new (equal in content, but not
            identical) definition on its next request.
    """

    def __init__(self, max_size: int | None = None) -> None:
        self._views: Cache[Schema, ViewDefinition] = (
            LRUCache(maxsize=max_size) if max_size is not None else Cache(maxsize=float("inf"))
        )
        self._lock = threading.RLock()

    @property
    def max_size(self) -> float:
        """The maximum number of definitions (``inf`` when unbounded)."""
        return self._views.maxsize

    @property
    def curr_size(self) -> int:
        """The current number of cached definitions."""
        return int(self._views.currsize)

    def view_for(self, schema: Schema) -> ViewDefinition:
        """Return the definition for ``schema``, building it on first request."""
        with self._lock:
            view = self._views.get(schema)
            if view is None:
                view = ViewDefinition.from_schema(schema)
                logger.debug("built view for %r (kind=%s)", schema, view.kind)
                self._views[schema] = view
            return view

    def clear(self) -> None:
        """Forget every definition."""
        with self._lock:
            self._views.clear()

    def __len__(self) -> int:
        return self.curr_size

    def __contains__(self, schema: object) -> bool:
        with self._lock:
            return schema in self._views


class CacheRegistry:
    """Every process-wide cache, plus the validator collaborator.

    Args:
        config: Sizes and defaults.  Defaults to ``ViewConfig()``.
        validator: Validator collaborator.  Defaults to a ``JsonSchemaValidator``
            using ``config.default_dialect``.
    """

    def __init__(
        self,
        config: ViewConfig | None = None,
        validator: SchemaValidator | None = None,
    ) -> None:
        self.config: ViewConfig = config if config is not None else ViewConfig()
        self.validator: Any = (
            validator
            if validator is not None
            else JsonSchemaValidator(default_dialect=self.config.default_dialect)
        )
        size = self.config.memo_max_size
        self.property_subschemas: MemoCache[Any] = MemoCache("property_subschemas", size)
        self.index_subschemas: MemoCache[Any] = MemoCache("index_subschemas", size)
        self.property_names: MemoCache[frozenset[str]] = MemoCache("property_names", size)
        self.schema_ids: MemoCache[str] = MemoCache("schema_ids", size)
        self.patterns: MemoCache[Any] = MemoCache("patterns", size)
        self.views = ViewCache(self.config.view_max_size)

    def memo_caches(self) -> list[MemoCache[Any]]:
        return [
            self.property_subschemas,
            self.index_subschemas,
            self.property_names,
            self.schema_ids,
            self.patterns,
        ]

    def clear(self) -> None:
        """Empty every cache (memo caches, views and cached validators)."""
        for memo in self.memo_caches():
            memo.clear()
        self.views.clear()
        clear_validator = getattr(self.validator, "clear", None)
        if callable(clear_validator):
            clear_validator()


_registry_lock = threading.Lock()
_registry: CacheRegistry | None = None


def get_registry() -> CacheRegistry:
    """Return the process-wide registry, creating the default one on first use."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = CacheRegistry()
        return _registry


def set_registry(registry: CacheRegistry) -> CacheRegistry:
    """Install ``registry`` as the process-wide registry and return it."""
    global _registry
    with _registry_lock:
        _registry = registry
        return registry
