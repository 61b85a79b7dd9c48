"""End-to-end scenarios through the top-level ``json_schema_view`` package.

All imports use the top-level package, never internal submodules.
"""

from __future__ import annotations

from typing import Any

import pytest

from json_schema_view import (
    DocumentNode,
    ObjectInstance,
    Pointer,
    Schema,
    view_for,
    wrap,
)


class TestObjectPropertyTraversal:
    """Reading a described object property yields a wrapped object."""

    def test_nested_object_wrapped_and_equal(self) -> None:
        schema = {"type": "object", "properties": {"foo": {"type": "object"}}}
        foo = wrap({"foo": {"x": "y"}}, schema)["foo"]
        assert isinstance(foo, ObjectInstance)
        assert foo == {"x": "y"}

    def test_undescribed_scalar_returned_plain(self) -> None:
        schema = {"type": "object", "properties": {"foo": {"type": "object"}}}
        assert wrap({"foo": {}, "baz": True}, schema)["baz"] is True


class TestPatternProperties:
    """patternProperties resolution."""

    def test_matching_and_non_matching_names(self) -> None:
        schema = Schema({"patternProperties": {"^S_": {"type": "string"}}})
        matched = schema.subschema_for_property("S_a")
        assert matched is not None
        assert matched.as_plain() == {"type": "string"}
        assert schema.subschema_for_property("T_a") is None


class TestOneOfMatching:
    """oneOf branch selection."""

    def test_integer_branch(self) -> None:
        schema = Schema({"oneOf": [{"type": "string"}, {"type": "integer"}]})
        assert schema.match_to_instance(5).as_plain() == {"type": "integer"}


class TestSchemaIds:
    """Identifiers from an ``id`` keyword."""

    def test_root_and_child(self) -> None:
        schema = Schema({"id": "https://x/y", "properties": {"a": {}}})
        assert schema.schema_id == "https://x/y#"
        child = schema.subschema_for_property("a")
        assert child is not None
        assert child.schema_id == "https://x/y#/properties/a"


class TestCopyOnWrite:
    """Writes rebind one wrapper; older wrappers keep the old document."""

    def test_write_then_read(self) -> None:
        schema = {"type": "object", "properties": {"foo": {"type": "object"}}}
        instance = {"foo": {"x": "y"}}
        wrapper = wrap(instance, schema)
        earlier = wrap(wrapper.node, schema)
        wrapper["foo"] = {"y": "z"}
        assert wrapper["foo"] == {"y": "z"}
        assert earlier["foo"] == {"x": "y"}
        assert instance == {"foo": {"x": "y"}}


DOCUMENTS: list[Any] = [
    {"a": [1, {"b": [True, None]}], "c": {"d": {"e": "f"}}},
    [[[]], {"": {"~": {"/": 0}}}],
]


class TestStructuralProperties:
    """Properties that hold for every document and schema."""

    @staticmethod
    def _all_pointers(value: Any, prefix: Pointer) -> list[Pointer]:
        pointers = [prefix]
        if isinstance(value, dict):
            for key, item in value.items():
                pointers += TestStructuralProperties._all_pointers(item, prefix.child(key))
        elif isinstance(value, list):
            for index, item in enumerate(value):
                pointers += TestStructuralProperties._all_pointers(item, prefix.child(index))
        return pointers

    @pytest.mark.parametrize("document", DOCUMENTS)
    def test_parent_child_round_trip(self, document: Any) -> None:
        root = DocumentNode.new_document(document)
        for pointer in self._all_pointers(document, Pointer.root()):
            if pointer.is_root:
                continue
            node = root.descend(pointer)
            parent = node.parent()
            assert parent is not None
            assert parent.child(pointer.last_token) == node

    def test_equal_schemas_share_views(self) -> None:
        body = {"type": "object", "properties": {"a": {"type": "object"}}}
        one = Schema(body).subschema_for_property("a")
        two = Schema({"properties": {"a": {"type": "object"}}, "type": "object"})
        two_a = two.subschema_for_property("a")
        assert one == two_a
        assert view_for(one) is view_for(two_a)

    def test_modified_copy_leaves_original(self) -> None:
        wrapper = wrap({"a": {"b": 1}}, {"properties": {"a": {"type": "object"}}})
        wrapper.modified_copy(lambda value: {**value, "a": {"b": 2}})
        assert wrapper == wrap({"a": {"b": 1}}, {})
        assert wrapper == wrap({"a": {"b": 1}}, {"type": "object"})

    @pytest.mark.parametrize(
        ("value", "schema"),
        [
            ({"a": [1, 2], "b": {"c": None}}, {"properties": {"a": {"items": {}}}}),
            ([{"x": 1}, "s"], {"items": {"type": "object"}}),
            ("scalar", {"type": "string"}),
        ],
    )
    def test_plain_round_trip(self, value: Any, schema: Any) -> None:
        assert wrap(value, schema).as_plain() == value
