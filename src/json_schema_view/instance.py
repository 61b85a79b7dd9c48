"""SchemaInstance: instance data viewed through a schema.

``SchemaInstance(value, schema)`` binds a document node (created from
``value`` when it is plain data) to a ``Schema`` and that schema's shared
``ViewDefinition``.  Construction dispatches on the instance's shape:

- object-like values get an ``ObjectInstance`` (a ``Mapping``
  with property reads, property writes and attribute accessors for the
  names the schema describes),
- array-like values get an ``ArrayInstance`` (a ``Sequence`` with index
  reads and writes),
- anything else gets a plain ``SchemaInstance``, which refuses reads and
  writes.

Reads resolve-then-wrap: the child's subschema is resolved, matched against
the child value (``oneOf`` / ``anyOf``), and container children with a
subschema come back wrapped; everything else comes back as a plain value.

Writes are copy-on-write: the document is never changed in place.  The
wrapper rebinds to a node in a new document, so other wrappers (including
children read before the write) keep seeing the old content.

Example::

    schema = Schema({"properties": {"foo": {"type": "object"}}})
    doc = SchemaInstance({"foo": {"x": "y"}}, schema)
    doc.foo                 # <ObjectInstance #/foo schema='#/properties/foo' {'x': 'y'}>
    doc.foo == {"x": "y"}   # True
    doc.foo = {"y": "z"}
    doc["foo"]["y"]         # "z"
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any, Literal

from json_schema_view.cache import get_registry
from json_schema_view.document.node import DocumentNode
from json_schema_view.errors import (
    InvalidInstanceError,
    NotAssignableError,
    NotIndexableError,
    TypeMismatchError,
)
from json_schema_view.normalizer import deep_stringify_keys
from json_schema_view.schema import Schema
from json_schema_view.typelike import (
    as_plain,
    canonical_fingerprint,
    is_array_like,
    is_object_like,
)
from json_schema_view.view import ViewDefinition

__all__ = ["ArrayInstance", "ObjectInstance", "SchemaInstance"]


def _ingest(value: Any) -> Any:
    plain = as_plain(value)
    if get_registry().config.normalize_keys:
        plain = deep_stringify_keys(plain)
    return plain


class SchemaInstance:
    """An instance value bound to a schema.

    Args:
        instance: Plain JSON-like data, or a ``DocumentNode`` to bind directly.
        schema: A ``Schema``, or anything ``Schema.from_object`` accepts.
        parent: The wrapper this instance was read from, if any.

    Raises:
        InvalidInstanceError: If ``instance`` is a ``Schema`` or already a
            ``SchemaInstance``.
    """

    __slots__ = ("_node", "_parent", "_schema", "_view")

    def __new__(
        cls, instance: Any, schema: Any, parent: SchemaInstance | None = None
    ) -> SchemaInstance:
        if cls is SchemaInstance and not isinstance(instance, (Schema, SchemaInstance)):
            value = instance.value if isinstance(instance, DocumentNode) else instance
            if is_object_like(value):
                cls = ObjectInstance
            elif is_array_like(value):
                cls = ArrayInstance
        return object.__new__(cls)

    def __init__(
        self, instance: Any, schema: Any, parent: SchemaInstance | None = None
    ) -> None:
        if isinstance(instance, (Schema, SchemaInstance)):
            msg = (
                f"cannot wrap a {type(instance).__name__} as instance data: {instance!r}"
            )
            raise InvalidInstanceError(msg)
        if isinstance(instance, DocumentNode):
            node = instance
        else:
            node = DocumentNode.new_document(
                instance, normalize_keys=get_registry().config.normalize_keys
            )
        self._schema: Schema = Schema.from_object(schema)
        self._view: ViewDefinition = self._schema.view
        self._node: DocumentNode = node
        self._parent: SchemaInstance | None = parent

    # ------------------------------------------------------------------
    # Bindings
    # ------------------------------------------------------------------

    @property
    def node(self) -> DocumentNode:
        """The document node currently bound (changes after a write)."""
        return self._node

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def view(self) -> ViewDefinition:
        return self._view

    @property
    def parent(self) -> SchemaInstance | None:
        """The wrapper this instance was read from, or None."""
        return self._parent

    @property
    def parents(self) -> list[SchemaInstance]:
        """Every wrapper this instance was read through, nearest first."""
        chain: list[SchemaInstance] = []
        parent = self._parent
        while parent is not None:
            chain.append(parent)
            parent = parent._parent
        return chain

    def as_plain(self) -> Any:
        """Return the instance content as a plain JSON-like value."""
        return self._node.as_plain()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def fingerprint(self) -> str:
        """Canonical serialization of the instance content."""
        return canonical_fingerprint(self._node.value)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if isinstance(other, SchemaInstance):
            return self.fingerprint == other.fingerprint
        if isinstance(other, Schema):
            return NotImplemented
        # array wrappers never equal tuples: tuples hash by content
        if (isinstance(self, ObjectInstance) and is_object_like(other)) or (
            isinstance(self, ArrayInstance) and isinstance(other, list)
        ):
            return self.fingerprint == canonical_fingerprint(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.fingerprint)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self._node.pointer.fragment} "
            f"schema={self._schema.schema_id!r} {self._node.value!r}>"
        )

    # ------------------------------------------------------------------
    # Reads and writes
    # ------------------------------------------------------------------

    def __getitem__(self, token: Any) -> Any:
        msg = (
            f"cannot subscript (using token: {token!r}) at "
            f"{self._node.pointer.fragment} from non-object, non-array value: "
            f"{self._node.value!r}"
        )
        raise NotIndexableError(msg)

    def __setitem__(self, token: Any, value: Any) -> None:
        msg = (
            f"cannot assign (using token: {token!r}) at "
            f"{self._node.pointer.fragment} to non-object, non-array value: "
            f"{self._node.value!r}"
        )
        raise NotAssignableError(msg)

    def _wrap_child(self, token: str | int, subschema: Schema | None) -> Any:
        child = self._node.child(token)
        if subschema is None or not (child.is_object_like or child.is_array_like):
            return child.as_plain()
        return SchemaInstance(child, subschema.match_to_instance(child.value), parent=self)

    def _write_child(self, token: str | int, value: Any) -> None:
        new_value = _ingest(value)

        def replace(container: Any) -> Any:
            copy = dict(container) if is_object_like(container) else list(container)
            copy[token] = new_value
            return copy

        self._node = self._node.with_value_at_pointer(replace)

    def __getattr__(self, name: str) -> Any:
        # only reached when normal lookup fails
        if name.startswith("_") or not self._view.describes(name):
            msg = f"{type(self).__name__!r} object has no attribute {name!r}"
            raise AttributeError(msg)
        if not self._node.is_object_like:
            return self[name]
        if name not in self._node.value:
            return None
        return self[name]

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        elif self._view.describes(name):
            self[name] = value
        else:
            msg = f"{type(self).__name__!r} object has no settable attribute {name!r}"
            raise AttributeError(msg)

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | self._view.property_names)

    # ------------------------------------------------------------------
    # Copies
    # ------------------------------------------------------------------

    def modified_copy(self, transform: Callable[[Any], Any]) -> SchemaInstance:
        """Return a new wrapper whose content is ``transform(plain content)``.

        ``transform`` receives a plain copy, so it may mutate and return it.
        The new wrapper keeps this wrapper's schema and pointer, in a new
        document; this wrapper is unchanged.
        """
        new_node = self._node.with_value_at_pointer(
            lambda value: _ingest(transform(as_plain(value)))
        )
        return SchemaInstance(new_node, self._schema)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> bool:
        """Return whether this instance is valid against its schema."""
        return self._schema.validate_instance(self)

    def fully_validate(self) -> list[str]:
        """Return every validation error message for this instance."""
        return self._schema.fully_validate_instance(self)

    def validate_strict(self) -> Literal[True]:
        """Return True, or raise ``SchemaValidationFailure``."""
        return self._schema.validate_instance_strict(self)


class ObjectInstance(SchemaInstance, Mapping):
    """A JSON object instance: a ``Mapping`` of property name to value."""

    __slots__ = ()

    def __getitem__(self, name: Any) -> Any:
        if not isinstance(name, str):
            msg = f"{self._node.pointer.fragment}: object has no property {name!r}"
            raise KeyError(msg)
        return self._wrap_child(name, self._schema.subschema_for_property(name))

    def __setitem__(self, name: Any, value: Any) -> None:
        if not isinstance(name, str):
            msg = f"property names must be str, got {type(name).__name__}: {name!r}"
            raise TypeMismatchError(msg)
        self._write_child(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._node.value

    def __iter__(self) -> Iterator[str]:
        return iter(self._node.value)

    def __len__(self) -> int:
        return len(self._node.value)


class ArrayInstance(SchemaInstance, Sequence):
    """A JSON array instance: a ``Sequence`` of values."""

    __slots__ = ()

    def _index(self, index: Any) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            msg = f"array indices must be int, got {type(index).__name__}: {index!r}"
            raise TypeMismatchError(msg)
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            msg = f"{self._node.pointer.fragment}: index {index} out of range"
            raise IndexError(msg)
        return index

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if isinstance(index, str):
            msg = (
                f"cannot subscript (using property name: {index!r}) at "
                f"{self._node.pointer.fragment} from array value"
            )
            raise NotIndexableError(msg)
        index = self._index(index)
        return self._wrap_child(index, self._schema.subschema_for_index(index))

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, str):
            msg = (
                f"cannot assign (using property name: {index!r}) at "
                f"{self._node.pointer.fragment} to array value"
            )
            raise NotAssignableError(msg)
        self._write_child(self._index(index), value)

    def __iter__(self) -> Iterator[Any]:
        for index in range(len(self)):
            yield self[index]

    def __len__(self) -> int:
        return len(self._node.value)
