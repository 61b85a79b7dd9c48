"""Tests for ViewKind, view_kind_for and ViewDefinition."""

from __future__ import annotations

from typing import Any

import pytest

from json_schema_view.schema import Schema
from json_schema_view.view import ViewDefinition, ViewKind, view_kind_for


class TestViewKind:
    """The ViewKind StrEnum."""

    def test_values_are_lowercased(self) -> None:
        assert ViewKind.OBJECT == "object"
        assert ViewKind.ARRAY == "array"
        assert ViewKind.NEITHER == "neither"

    def test_has_exactly_three_members(self) -> None:
        assert len(ViewKind) == 3


class TestViewKindFor:
    """Kind derivation from a schema body."""

    @pytest.mark.parametrize(
        ("body", "expected"),
        [
            ({"type": "object"}, ViewKind.OBJECT),
            ({"type": "array"}, ViewKind.ARRAY),
            ({"type": "string"}, ViewKind.NEITHER),
            ({"type": ["object", "null"]}, ViewKind.OBJECT),
            ({"type": ["object", "array"]}, ViewKind.NEITHER),
            ({"properties": {}}, ViewKind.OBJECT),
            ({"required": ["a"]}, ViewKind.OBJECT),
            ({"items": {}}, ViewKind.ARRAY),
            ({"prefixItems": []}, ViewKind.ARRAY),
            ({"properties": {}, "items": {}}, ViewKind.NEITHER),
            ({"type": "string", "properties": {}}, ViewKind.NEITHER),
            ({}, ViewKind.NEITHER),
        ],
    )
    def test_kinds(self, body: dict[str, Any], expected: ViewKind) -> None:
        assert view_kind_for(body) is expected

    def test_non_mapping_body(self) -> None:
        assert view_kind_for(True) is ViewKind.NEITHER


class TestViewDefinition:
    """ViewDefinition built from schemas."""

    def test_object_view_names(self) -> None:
        schema = Schema({"type": "object", "properties": {"a": {}}, "required": ["b"]})
        view = ViewDefinition.from_schema(schema)
        assert view.is_object_view
        assert not view.is_array_view
        assert view.property_names == frozenset({"a", "b"})
        assert view.describes("a")
        assert not view.describes("c")

    def test_array_view_has_no_names(self) -> None:
        view = ViewDefinition.from_schema(Schema({"type": "array", "properties": {"a": {}}}))
        assert view.is_array_view
        assert view.property_names == frozenset()

    def test_schema_and_id(self) -> None:
        schema = Schema({"$id": "https://example.com/s", "type": "object"})
        view = ViewDefinition.from_schema(schema)
        assert view.schema is schema
        assert view.schema_id == "https://example.com/s#"

    def test_bind_name_returns_named_copy(self) -> None:
        """The shared cached definition is never renamed."""
        schema = Schema({"type": "object", "properties": {"a": {}}})
        view = schema.view
        named = view.bind_name("Widget")
        assert named is not view
        assert named.name == "Widget"
        assert "Widget" in repr(named)
        assert named.kind is view.kind
        assert named.property_names == view.property_names
        assert view.name is None
        assert Schema({"type": "object", "properties": {"a": {}}}).view is view

    def test_all_of_only_schema_is_object_view(self) -> None:
        schema = Schema({"allOf": [{"properties": {"a": {"type": "object"}}}, {"required": ["b"]}]})
        view = ViewDefinition.from_schema(schema)
        assert view.is_object_view
        assert view.property_names == frozenset({"a", "b"})

    @pytest.mark.parametrize(
        "body",
        [
            {"type": "string", "allOf": [{"properties": {"a": {}}}]},
            {"items": {}, "allOf": [{"properties": {"a": {}}}]},
            {"allOf": [{"type": "string"}]},
        ],
    )
    def test_all_of_does_not_override_own_shape(self, body: dict[str, Any]) -> None:
        view = ViewDefinition.from_schema(Schema(body))
        assert not view.is_object_view
        assert view.property_names == frozenset()
