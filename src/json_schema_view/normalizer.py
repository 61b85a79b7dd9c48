"""Key normalizer: converts non-string mapping keys to strings.

Schema ``properties`` and ``required`` entries are always strings, so
property-name matching only works when document keys are strings too.
Documents built in Python may carry other keys (enum members, numbers,
booleans, ``None``); these are converted the way ``json.dumps`` converts keys:

- str            -> unchanged
- Enum member    -> its value, converted by the rules below
- bytes          -> decoded as UTF-8
- bool           -> "true" / "false"
- None           -> "null"
- int / float    -> str(key)
- anything else  -> str(key)

Collisions after conversion (e.g. ``{1: "a", "1": "b"}``) keep the value seen
last in iteration order.

Containers are only copied when something inside them changes, so
normalizing an already-normalized document returns the same object.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from json_schema_view.errors import TypeMismatchError
from json_schema_view.typelike import is_array_like, is_object_like

__all__ = ["deep_stringify_keys", "stringify_key", "stringify_keys"]


def stringify_key(key: Any) -> str:
    """Convert a single mapping key to its string form."""
    if isinstance(key, str):
        return key
    if isinstance(key, Enum):
        return stringify_key(key.value)
    if isinstance(key, bytes):
        return key.decode("utf-8")
    # bool before int: bool subclasses int
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def stringify_keys(mapping: Mapping[Any, Any]) -> Mapping[str, Any]:
    """Return ``mapping`` with its top-level keys converted to strings.

    Args:
        mapping: Any mapping.

    Returns:
        ``mapping`` itself when all keys are already strings; otherwise a new
        dict with converted keys and the same values.

    Raises:
        TypeMismatchError: If ``mapping`` is not a mapping.
    """
    if not is_object_like(mapping):
        msg = (
            f"expected argument to be a mapping; got "
            f"{type(mapping).__name__}: {mapping!r}"
        )
        raise TypeMismatchError(msg)
    if all(isinstance(key, str) for key in mapping):
        return mapping
    return {stringify_key(key): value for key, value in mapping.items()}


def deep_stringify_keys(value: Any) -> Any:
    """Recursively convert every mapping key within ``value`` to a string.

    Mappings and sequences are rebuilt (as dict / list) only when a key or an
    element changed; otherwise the original object is returned.
    """
    if is_object_like(value):
        changed = False
        out: dict[str, Any] = {}
        for key, item in value.items():
            out_key = stringify_key(key)
            out_item = deep_stringify_keys(item)
            if out_key is not key or out_item is not item:
                changed = True
            out[out_key] = out_item
        return out if changed else value
    if is_array_like(value):
        items = [deep_stringify_keys(item) for item in value]
        if any(new is not old for new, old in zip(items, value, strict=True)):
            return items
        return value
    return value
