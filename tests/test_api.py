"""Tests for the public API functions: wrap, schema_from, view_for, validate,
configure, get_config, clear_caches."""

from __future__ import annotations

import pytest

from json_schema_view import (
    InvalidInstanceError,
    ObjectInstance,
    Schema,
    ViewConfig,
    clear_caches,
    configure,
    get_config,
    schema_from,
    validate,
    view_for,
    wrap,
)
from json_schema_view.cache import get_registry
from json_schema_view.config import DRAFT4


class TestWrap:
    """wrap()"""

    def test_returns_shaped_wrapper(self) -> None:
        wrapped = wrap({"a": 1}, {"type": "object"})
        assert isinstance(wrapped, ObjectInstance)
        assert wrapped.as_plain() == {"a": 1}

    def test_rejects_wrapped_instance(self) -> None:
        wrapped = wrap({}, {})
        with pytest.raises(InvalidInstanceError):
            wrap(wrapped, {})

    def test_rejects_schema_instance_data(self) -> None:
        with pytest.raises(InvalidInstanceError):
            wrap(Schema({}), {})


class TestSchemaFrom:
    """schema_from()"""

    def test_idempotent(self) -> None:
        schema = Schema({})
        assert schema_from(schema) is schema

    def test_booleans(self) -> None:
        assert schema_from(True).as_plain() == {}
        assert schema_from(False).as_plain() == {"not": {}}


class TestViewFor:
    """view_for()"""

    def test_identity_for_equal_schemas(self) -> None:
        assert view_for({"properties": {"a": {}}}) is view_for(Schema({"properties": {"a": {}}}))


class TestValidate:
    """validate()"""

    def test_messages(self) -> None:
        assert validate({"a": 1}, {"properties": {"a": {"type": "integer"}}}) == []
        assert validate({"a": "x"}, {"properties": {"a": {"type": "integer"}}})


class TestConfiguration:
    """configure / get_config / clear_caches."""

    def test_default_config(self) -> None:
        assert get_config() == ViewConfig()

    def test_configure_installs_new_registry(self) -> None:
        before = get_registry()
        config = ViewConfig(memo_max_size=16, default_dialect=DRAFT4)
        assert configure(config) is config
        assert get_config() is config
        assert get_registry() is not before
        assert get_registry().property_subschemas.max_size == 16

    def test_configure_defaults(self) -> None:
        assert configure() == ViewConfig()

    def test_configure_dialect_used_for_validation(self) -> None:
        configure(ViewConfig(default_dialect=DRAFT4))
        assert validate(1, {"minimum": 1, "exclusiveMinimum": True})

    def test_configure_without_key_normalization(self) -> None:
        configure(ViewConfig(normalize_keys=False))
        assert wrap({1: "a"}, {}).node.value == {1: "a"}

    def test_clear_caches_keeps_config(self) -> None:
        config = configure(ViewConfig(memo_max_size=8))
        view = view_for({"type": "object"})
        clear_caches()
        assert get_config() is config
        assert view_for({"type": "object"}) is not view
