"""Public API functions for json-schema-view.

The user-facing entry points: ``wrap``, ``schema_from``, ``view_for`` and
``validate``, plus ``configure`` / ``get_config`` / ``clear_caches`` for the
process-wide caches.  Configuration is the only global state; every cache it
governs holds values that are pure functions of schema content.
"""

from __future__ import annotations

from typing import Any

from json_schema_view.cache import CacheRegistry, get_registry, set_registry
from json_schema_view.config import ViewConfig
from json_schema_view.instance import SchemaInstance
from json_schema_view.protocols import SchemaValidator
from json_schema_view.schema import Schema
from json_schema_view.view import ViewDefinition

__all__ = [
    "clear_caches",
    "configure",
    "get_config",
    "schema_from",
    "validate",
    "view_for",
    "wrap",
]


def schema_from(schema_object: Any) -> Schema:
    """Return a ``Schema`` for ``schema_object``.

    Idempotent: a ``Schema`` is returned unchanged.  ``True`` / ``False`` are
    normalized to ``{}`` / ``{"not": {}}``.

    Raises:
        TypeMismatchError: If ``schema_object`` cannot represent a schema body.
    """
    return Schema.from_object(schema_object)


def wrap(instance: Any, schema: Any) -> SchemaInstance:
    """Bind ``instance`` to ``schema`` and return the wrapper.

    Args:
        instance: Plain JSON-like data, or a ``DocumentNode``.
        schema:   A ``Schema`` or anything ``schema_from`` accepts.

    Returns:
        An ``ObjectInstance``, ``ArrayInstance`` or ``SchemaInstance``
        depending on the shape of ``instance``.

    Raises:
        InvalidInstanceError: If ``instance`` is a Schema or already wrapped.
    """
    return SchemaInstance(instance, schema_from(schema))


def view_for(schema: Any) -> ViewDefinition:
    """Return the shared ``ViewDefinition`` for ``schema``.

    Structurally equal schemas always receive the identical definition.
    """
    return get_registry().views.view_for(schema_from(schema))


def validate(instance: Any, schema: Any) -> list[str]:
    """Return every validation error message for ``instance`` against ``schema``."""
    return schema_from(schema).fully_validate_instance(instance)


def configure(
    config: ViewConfig | None = None,
    validator: SchemaValidator | None = None,
) -> ViewConfig:
    """Replace the process-wide caches with fresh ones built from ``config``.

    Args:
        config:    Cache sizes and defaults.  Defaults to ``ViewConfig()``.
        validator: Validator collaborator.  Defaults to a ``JsonSchemaValidator``
                   for ``config.default_dialect``.

    Returns:
        The configuration now in effect.
    """
    return set_registry(CacheRegistry(config=config, validator=validator)).config


def get_config() -> ViewConfig:
    """Return the configuration currently in effect."""
    return get_registry().config


def clear_caches() -> None:
    """Empty every process-wide cache, keeping the current configuration."""
    get_registry().clear()
