"""Plain-value projection and shape predicates for JSON-like values.

A *plain* value is built only from ``dict`` (string keys), ``list``, ``str``,
``int``, ``float``, ``bool`` and ``None``.  Document nodes, schema instances
and schemas all project to plain values through their ``as_plain()`` method;
``as_plain`` here dispatches to that method and otherwise walks mappings and
sequences recursively.

Fingerprints are the canonical serialization of a plain value (sorted keys,
compact separators).  They are the content identity used for equality,
hashing and cache keys throughout the package.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

__all__ = [
    "as_plain",
    "canonical_fingerprint",
    "is_array_like",
    "is_object_like",
]


def is_object_like(value: Any) -> bool:
    """Return True for mapping values (JSON objects)."""
    return isinstance(value, Mapping)


def is_array_like(value: Any) -> bool:
    """Return True for sequence values (JSON arrays), excluding str/bytes."""
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def as_plain(value: Any) -> Any:
    """Project ``value`` to a plain JSON-like value.

    Objects exposing ``as_plain()`` (DocumentNode, SchemaInstance, Schema)
    delegate to it.  Mappings become dicts and sequences become lists, both
    recursively.  Scalars (and anything unrecognized) are returned as-is.

    Args:
        value: Any JSON-like value, possibly containing wrapper objects.

    Returns:
        A value containing no wrapper types.
    """
    projector = getattr(value, "as_plain", None)
    if callable(projector) and not isinstance(value, type):
        return projector()
    if is_object_like(value):
        return {key: as_plain(item) for key, item in value.items()}
    if is_array_like(value):
        return [as_plain(item) for item in value]
    return value


def canonical_fingerprint(value: Any) -> str:
    """Return the canonical serialization of ``value``'s plain projection.

    Keys are sorted and separators compact, so two values with the same
    content always produce the same string regardless of key order.  Values
    that are not JSON-serializable fall back to their ``repr``.
    """
    return json.dumps(
        as_plain(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=repr,
    )
