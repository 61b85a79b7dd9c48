"""json-schema-view - navigate and edit JSON documents through their JSON Schema."""

from __future__ import annotations

from json_schema_view.api import (
    clear_caches,
    configure,
    get_config,
    schema_from,
    validate,
    view_for,
    wrap,
)
from json_schema_view.config import ViewConfig
from json_schema_view.document import Document, DocumentNode, Pointer
from json_schema_view.errors import (
    InvalidInstanceError,
    NotAssignableError,
    NotIndexableError,
    PointerResolutionError,
    SchemaConfigurationError,
    SchemaValidationFailure,
    SchemaViewError,
    TypeMismatchError,
)
from json_schema_view.instance import ArrayInstance, ObjectInstance, SchemaInstance
from json_schema_view.protocols import SchemaValidator
from json_schema_view.schema import Schema
from json_schema_view.view import ViewDefinition, ViewKind

__version__: str = "0.1.0"
__all__: list[str] = [
    "ArrayInstance",
    "Document",
    "DocumentNode",
    "InvalidInstanceError",
    "NotAssignableError",
    "NotIndexableError",
    "ObjectInstance",
    "Pointer",
    "PointerResolutionError",
    "Schema",
    "SchemaConfigurationError",
    "SchemaInstance",
    "SchemaValidationFailure",
    "SchemaValidator",
    "SchemaViewError",
    "TypeMismatchError",
    "ViewConfig",
    "ViewDefinition",
    "ViewKind",
    "clear_caches",
    "configure",
    "get_config",
    "schema_from",
    "validate",
    "view_for",
    "wrap",
]
