"""Schema: a JSON Schema body located within a schema document.

A ``Schema`` wraps a ``DocumentNode`` whose value is a schema body and
answers the questions needed to view instances through it:

- which subschema applies to a property name or an array index,
- which ``oneOf`` / ``anyOf`` branch matches a given instance,
- which property names the schema describes (through ``allOf`` as well),
- what its absolute identifier is (``schema_id``),
- whether an instance (or the schema itself) is valid, by delegating to the
  validator collaborator held in the ``CacheRegistry``.

Identity is content-based: two schemas are equal when they are of the same
class, sit at the same pointer, and their documents have the same content.
That equality is what keys every memo and the view cache.

Example::

    schema = Schema({"id": "https://x/y", "properties": {"a": {"type": "string"}}})
    schema.schema_id                                  # "https://x/y#"
    schema.subschema_for_property("a").schema_id      # "https://x/y#/properties/a"
    schema.described_object_property_names()          # frozenset({"a"})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Literal
from urllib.parse import urldefrag

from json_schema_view.cache import get_registry
from json_schema_view.document.node import DocumentNode
from json_schema_view.document.pointer import Pointer, Token
from json_schema_view.errors import (
    SchemaConfigurationError,
    SchemaValidationFailure,
    TypeMismatchError,
)
from json_schema_view.patterns import compile_pattern
from json_schema_view.typelike import as_plain, is_array_like, is_object_like

if TYPE_CHECKING:
    from json_schema_view.instance import SchemaInstance
    from json_schema_view.view import ViewDefinition

__all__ = ["Schema"]

logger = logging.getLogger(__name__)

_TRUE_SCHEMA: dict[str, Any] = {}
_FALSE_SCHEMA: dict[str, Any] = {"not": {}}


class Schema:
    """A schema body plus its location in a schema document.

    Args:
        schema_object: A mapping (a new schema document), ``True`` / ``False``
            (normalized to ``{}`` / ``{"not": {}}``), a ``DocumentNode`` whose
            value is a schema body, or an object-like ``SchemaInstance``.
            ``$ref`` at the given node is followed.

    Raises:
        TypeMismatchError: For another ``Schema`` (use ``Schema.from_object``)
            or any value that cannot represent a schema body.
    """

    __slots__ = ("_node",)

    def __init__(self, schema_object: Any) -> None:
        from json_schema_view.instance import SchemaInstance

        if isinstance(schema_object, Schema):
            msg = f"will not instantiate Schema from another Schema: {schema_object!r}"
            raise TypeMismatchError(msg)
        if isinstance(schema_object, SchemaInstance):
            schema_object = schema_object.node
        if isinstance(schema_object, DocumentNode):
            node = schema_object.deref()
            if isinstance(node.value, bool):
                node = self._boolean_schema_node(node.value)
            elif not node.is_object_like:
                msg = (
                    f"cannot instantiate Schema from node at {node.pointer.fragment}: "
                    f"{node.value!r}"
                )
                raise TypeMismatchError(msg)
        elif isinstance(schema_object, bool):
            node = self._boolean_schema_node(schema_object)
        elif isinstance(schema_object, Mapping):
            node = DocumentNode.new_document(
                schema_object, normalize_keys=get_registry().config.normalize_keys
            ).deref()
        else:
            msg = (
                f"cannot instantiate Schema from {type(schema_object).__name__}: "
                f"{schema_object!r}"
            )
            raise TypeMismatchError(msg)
        self._node: DocumentNode = node

    @classmethod
    def from_object(cls, schema_object: Any) -> Schema:
        """Return ``schema_object`` if it is already a Schema, else wrap it."""
        if isinstance(schema_object, Schema):
            return schema_object
        return cls(schema_object)

    @staticmethod
    def _boolean_schema_node(flag: bool) -> DocumentNode:
        return DocumentNode.new_document(dict(_TRUE_SCHEMA if flag else _FALSE_SCHEMA))

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def schema_node(self) -> DocumentNode:
        """The document node holding this schema's body."""
        return self._node

    @property
    def fingerprint(self) -> tuple[type[Schema], Pointer, str]:
        """Content identity: class, pointer and document fingerprint."""
        return (type(self), self._node.pointer, self._node.document.fingerprint)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Schema):
            return NotImplemented
        return self.fingerprint == other.fingerprint

    def __hash__(self) -> int:
        return hash(self.fingerprint)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} schema_id={self.schema_id!r} {self._node.value!r}>"

    def __getitem__(self, keyword: str) -> Any:
        """Return the raw value of ``keyword`` in the schema body."""
        return self._node.value[keyword]

    def get(self, keyword: str, default: Any = None) -> Any:
        """Return the raw value of ``keyword``, or ``default`` when absent."""
        return self._node.value.get(keyword, default)

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._node.value

    def as_plain(self) -> Any:
        """Return the schema body as a plain JSON-like value."""
        return self._node.as_plain()

    # ------------------------------------------------------------------
    # Identifier
    # ------------------------------------------------------------------

    @property
    def schema_id(self) -> str:
        """Absolute identifier of this schema, with a pointer fragment.

        Found by ascending from this schema's node to the nearest node that
        declares an identifier, then appending the path from there as a
        fragment (extending the identifier's own fragment, if it has one).
        """
        return get_registry().schema_ids.get_or_compute(self, self._compute_schema_id)

    def _compute_schema_id(self) -> str:
        node: DocumentNode | None = self._node
        path_from_id_node: list[Token] = []
        base_id: str | None = None
        while node is not None:
            base_id = self._declared_id(node)
            if base_id is not None or node.pointer.is_root:
                break
            path_from_id_node.insert(0, node.pointer.last_token)
            node = node.parent()

        base_uri, fragment = urldefrag(base_id or "")
        if fragment.startswith("/"):
            path_from_id_node = [
                *Pointer.from_fragment("#" + fragment).tokens,
                *path_from_id_node,
            ]
        return base_uri + Pointer(tuple(path_from_id_node)).fragment

    @staticmethod
    def _declared_id(node: DocumentNode) -> str | None:
        value = node.value
        if not is_object_like(value):
            return None
        # fragment-only ids are anchors, not bases
        for keyword in ("$id", "id"):
            candidate = value.get(keyword)
            if isinstance(candidate, str) and not candidate.startswith("#"):
                return candidate
        return None

    # ------------------------------------------------------------------
    # Subschema resolution
    # ------------------------------------------------------------------

    def _subschema_at(self, node: DocumentNode) -> Schema | None:
        node = node.deref()
        if not node.is_object_like:
            return None
        return type(self)(node)

    def subschema_for_property(self, property_name: str) -> Schema | None:
        """Return the subschema that applies to ``property_name``, if any.

        Looked up, in order, in ``properties``, then the first matching entry
        of ``patternProperties``, then ``additionalProperties``.  Only schema
        bodies (objects) count; boolean subschemas are skipped.

        Raises:
            SchemaConfigurationError: If a pattern consulted before a match
                cannot be compiled.
        """
        return get_registry().property_subschemas.get_or_compute(
            (self, property_name),
            lambda: self._compute_property_subschema(property_name),
        )

    def _compute_property_subschema(self, property_name: str) -> Schema | None:
        body = self._node.value
        properties = body.get("properties")
        if is_object_like(properties) and property_name in properties:
            found = self._subschema_at(
                self._node.child("properties").child(property_name)
            )
            if found is not None:
                return found

        pattern_properties = body.get("patternProperties")
        if is_object_like(pattern_properties):
            patterns = get_registry().patterns
            for pattern in pattern_properties:
                compiled = patterns.get_or_compute(
                    pattern, lambda pattern=pattern: compile_pattern(pattern)
                )
                if compiled.search(property_name):
                    found = self._subschema_at(
                        self._node.child("patternProperties").child(pattern)
                    )
                    if found is not None:
                        return found

        if is_object_like(body.get("additionalProperties")):
            return self._subschema_at(self._node.child("additionalProperties"))
        return None

    def subschema_for_index(self, index: int) -> Schema | None:
        """Return the subschema that applies to array element ``index``, if any.

        A tuple-form ``items`` (or ``prefixItems``) applies positionally, with
        ``additionalItems`` (or, after ``prefixItems``, ``items``) covering
        the rest; a single-schema ``items`` applies to every index.

        Raises:
            TypeMismatchError: If ``index`` is not a non-negative int.
        """
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            msg = f"array index must be a non-negative int, got {index!r}"
            raise TypeMismatchError(msg)
        return get_registry().index_subschemas.get_or_compute(
            (self, index), lambda: self._compute_index_subschema(index)
        )

    def _compute_index_subschema(self, index: int) -> Schema | None:
        body = self._node.value
        if is_array_like(body.get("prefixItems")):
            if index < len(body["prefixItems"]):
                return self._subschema_at(self._node.child("prefixItems").child(index))
            if is_object_like(body.get("items")):
                return self._subschema_at(self._node.child("items"))
            return None

        items = body.get("items")
        if is_array_like(items):
            if index < len(items):
                return self._subschema_at(self._node.child("items").child(index))
            if is_object_like(body.get("additionalItems")):
                return self._subschema_at(self._node.child("additionalItems"))
            return None
        if is_object_like(items):
            return self._subschema_at(self._node.child("items"))
        return None

    def match_to_instance(self, instance: Any) -> Schema:
        """Return the ``oneOf`` / ``anyOf`` branch that matches ``instance``.

        Branches are tried in array order (``oneOf`` first); the first one
        ``instance`` validates against is itself matched recursively.  When no
        branch matches, or the schema has neither keyword, returns self.
        """
        body = self._node.value
        for keyword in ("oneOf", "anyOf"):
            branches = body.get(keyword)
            if not is_array_like(branches):
                continue
            branches_node = self._node.child(keyword)
            for index in range(len(branches)):
                branch = type(self)(branches_node.child(index))
                if branch.validate_instance(instance):
                    logger.debug(
                        "matched %s/%d at %s", keyword, index, self._node.pointer.fragment
                    )
                    return branch.match_to_instance(instance)
        return self

    def described_object_property_names(self) -> frozenset[str]:
        """Return the property names this schema says its instances may have.

        Includes the keys of ``properties``, the entries of ``required`` and,
        recursively, the names described by every ``allOf`` branch (with
        ``$ref`` followed).

        Raises:
            SchemaConfigurationError: If ``allOf`` branches refer back to a
                schema already being expanded.
        """
        return get_registry().property_names.get_or_compute(
            self, lambda: self._described_names(frozenset())
        )

    def _described_names(self, expanding: frozenset[Schema]) -> frozenset[str]:
        if self in expanding:
            msg = f"allOf cycle detected at {self._node.pointer.fragment}"
            raise SchemaConfigurationError(msg)
        expanding = expanding | {self}

        body = self._node.value
        names: set[str] = set()
        if is_object_like(body.get("properties")):
            names.update(body["properties"].keys())
        if is_array_like(body.get("required")):
            names.update(name for name in body["required"] if isinstance(name, str))
        all_of = body.get("allOf")
        if is_array_like(all_of):
            memo = get_registry().property_names
            all_of_node = self._node.child("allOf")
            for index in range(len(all_of)):
                branch = self._subschema_at(all_of_node.child(index))
                if branch is None:
                    continue
                names.update(
                    memo.get_or_compute(
                        branch, lambda branch=branch: branch._described_names(expanding)
                    )
                )
        return frozenset(names)

    # ------------------------------------------------------------------
    # Validation (delegated)
    # ------------------------------------------------------------------

    def _validation_args(self) -> tuple[Any, Pointer]:
        return self._node.document, self._node.pointer

    def validate_instance(self, instance: Any) -> bool:
        """Return whether ``instance`` is valid against this schema."""
        document, pointer = self._validation_args()
        return get_registry().validator.validate(document, as_plain(instance), pointer)

    def fully_validate_instance(self, instance: Any) -> list[str]:
        """Return every validation error message for ``instance``."""
        document, pointer = self._validation_args()
        return get_registry().validator.fully_validate(
            document, as_plain(instance), pointer
        )

    def validate_instance_strict(self, instance: Any) -> Literal[True]:
        """Return True, or raise ``SchemaValidationFailure`` with every message."""
        document, pointer = self._validation_args()
        return get_registry().validator.validate_strict(
            document, as_plain(instance), pointer
        )

    def fully_validate_schema(self) -> list[str]:
        """Return every error of this schema against its metaschema."""
        document, pointer = self._validation_args()
        return get_registry().validator.fully_validate_schema(document, pointer)

    def validate_schema(self) -> bool:
        """Return whether this schema is valid against its metaschema."""
        return not self.fully_validate_schema()

    def validate_schema_strict(self) -> Literal[True]:
        """Return True, or raise ``SchemaValidationFailure`` for metaschema errors."""
        messages = self.fully_validate_schema()
        if messages:
            raise SchemaValidationFailure(messages, subject="schema")
        return True

    # ------------------------------------------------------------------
    # Views and instances
    # ------------------------------------------------------------------

    @property
    def view(self) -> ViewDefinition:
        """The shared view definition for this schema."""
        return get_registry().views.view_for(self)

    def new_instance(self, instance: Any) -> SchemaInstance:
        """Wrap ``instance`` (a plain value or DocumentNode) with this schema."""
        from json_schema_view.instance import SchemaInstance

        return SchemaInstance(instance, self)
