"""ViewConfig: process-wide configuration for schema views.

ViewConfig is a frozen (immutable) dataclass.  The active configuration is
held by the process-wide ``CacheRegistry``; installing a new one via
``configure()`` also replaces the caches, since cached artifacts depend on it.
"""

from __future__ import annotations

from dataclasses import dataclass

from json_schema_view.errors import SchemaConfigurationError

__all__ = ["DRAFT4", "DRAFT6", "DRAFT7", "DRAFT201909", "DRAFT202012", "ViewConfig"]

DRAFT4 = "http://json-schema.org/draft-04/schema#"
DRAFT6 = "http://json-schema.org/draft-06/schema#"
DRAFT7 = "http://json-schema.org/draft-07/schema#"
DRAFT201909 = "https://json-schema.org/draft/2019-09/schema"
DRAFT202012 = "https://json-schema.org/draft/2020-12/schema"

_KNOWN_DIALECTS = frozenset({DRAFT4, DRAFT6, DRAFT7, DRAFT201909, DRAFT202012})


@dataclass(frozen=True, slots=True)
class ViewConfig:
    """Immutable configuration for schema resolution, caching and validation.

    Attributes:
        memo_max_size: Maximum number of entries held by each memoization cache
            (subschemas, property names, schema ids, compiled patterns).
            Least-recently-used entries are evicted silently.  Must be >= 1.
        view_max_size: Maximum number of cached view definitions, or None for
            no bound.  Unbounded is the default because a bound means two equal
            schemas may get different (but equivalent) view definitions once
            the first one has been evicted.
        default_dialect: Metaschema URI used to pick a validator for schema
            documents that carry no ``$schema`` keyword.
        normalize_keys: When True, schema and instance documents are passed
            through ``deep_stringify_keys`` on ingestion.
    """

    memo_max_size: int = 4096
    view_max_size: int | None = None
    default_dialect: str = DRAFT7
    normalize_keys: bool = True

    def __post_init__(self) -> None:
        if self.memo_max_size < 1:
            msg = f"memo_max_size must be >= 1, got {self.memo_max_size}"
            raise SchemaConfigurationError(msg)
        if self.view_max_size is not None and self.view_max_size < 1:
            msg = f"view_max_size must be >= 1 or None, got {self.view_max_size}"
            raise SchemaConfigurationError(msg)
        if self.default_dialect not in _KNOWN_DIALECTS:
            msg = (
                f"default_dialect must be one of {sorted(_KNOWN_DIALECTS)}, "
                f"got {self.default_dialect!r}"
            )
            raise SchemaConfigurationError(msg)
