"""ViewDefinition and ViewKind: the accessor surface a schema implies.

A view definition is the declarative dispatch table used by schema
instances: which property names get attribute accessors, and whether the
schema describes objects, arrays, or neither.  Definitions are built once per
schema fingerprint by ``ViewCache`` and shared by every structurally equal
schema.
"""

from __future__ import annotations

from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

from json_schema_view.typelike import is_array_like, is_object_like

if TYPE_CHECKING:
    from json_schema_view.schema import Schema

__all__ = ["ViewDefinition", "ViewKind", "view_kind_for"]

_OBJECT_KEYWORDS = frozenset(
    {"properties", "patternProperties", "additionalProperties", "required"}
)
_ARRAY_KEYWORDS = frozenset({"items", "additionalItems", "prefixItems"})


class ViewKind(StrEnum):
    """Capability flag of a view.

    - OBJECT  -> "object"  : the schema describes JSON objects
    - ARRAY   -> "array"   : the schema describes JSON arrays
    - NEITHER -> "neither" : scalars, or nothing can be inferred
    """

    OBJECT = auto()
    ARRAY = auto()
    NEITHER = auto()


def view_kind_for(schema_body: Any) -> ViewKind:
    """Derive the view kind from a schema body.

    The declared ``type`` wins: ``"object"`` / ``"array"``, or a list naming
    exactly one of the two.  Without ``type``, the presence of object keywords
    (``properties``, ``patternProperties``, ``additionalProperties``,
    ``required``) or array keywords (``items``, ``additionalItems``,
    ``prefixItems``) decides; when both or neither appear the kind is NEITHER.
    """
    if not is_object_like(schema_body):
        return ViewKind.NEITHER
    declared = schema_body.get("type")
    if isinstance(declared, str):
        declared = [declared]
    if is_array_like(declared):
        has_object = "object" in declared
        has_array = "array" in declared
    else:
        has_object = any(keyword in schema_body for keyword in _OBJECT_KEYWORDS)
        has_array = any(keyword in schema_body for keyword in _ARRAY_KEYWORDS)
    if has_object and not has_array:
        return ViewKind.OBJECT
    if has_array and not has_object:
        return ViewKind.ARRAY
    return ViewKind.NEITHER


class ViewDefinition:
    """The cached accessor surface of one schema (by content identity).

    Instances are immutable.  ``bind_name`` returns a named copy for display
    purposes; the shared definition held by the cache keeps no name.
    """

    __slots__ = ("_kind", "_name", "_property_names", "_schema")

    def __init__(
        self,
        schema: Schema,
        kind: ViewKind,
        property_names: frozenset[str],
        name: str | None = None,
    ) -> None:
        self._schema = schema
        self._kind = kind
        self._property_names = property_names
        self._name = name

    @classmethod
    def from_schema(cls, schema: Schema) -> ViewDefinition:
        """Build the definition for ``schema``.

        Property accessors are only derived for OBJECT views.  A schema with no
        ``type`` and no object or array keywords of its own is an OBJECT view
        when its ``allOf`` branches describe property names.
        """
        body = schema.schema_node.value
        kind = view_kind_for(body)
        names: frozenset[str] = frozenset()
        if kind is ViewKind.OBJECT:
            names = schema.described_object_property_names()
        elif kind is ViewKind.NEITHER and "type" not in body and not any(
            keyword in body for keyword in _OBJECT_KEYWORDS | _ARRAY_KEYWORDS
        ):
            names = schema.described_object_property_names()
            if names:
                kind = ViewKind.OBJECT
        return cls(schema, kind, names)

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def kind(self) -> ViewKind:
        return self._kind

    @property
    def property_names(self) -> frozenset[str]:
        return self._property_names

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def schema_id(self) -> str:
        return self._schema.schema_id

    @property
    def is_object_view(self) -> bool:
        return self._kind is ViewKind.OBJECT

    @property
    def is_array_view(self) -> bool:
        return self._kind is ViewKind.ARRAY

    def describes(self, name: str) -> bool:
        """Return True when ``name`` has an accessor in this view."""
        return name in self._property_names

    def bind_name(self, name: str) -> ViewDefinition:
        """Return a copy of this definition carrying a display name."""
        return type(self)(self._schema, self._kind, self._property_names, name)

    def __repr__(self) -> str:
        label = self._name if self._name is not None else self.schema_id
        return f"<ViewDefinition {label} kind={self._kind} properties={sorted(self._property_names)}>"
