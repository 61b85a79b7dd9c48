"""Shared fixtures: every test runs against a fresh process-wide registry."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from json_schema_view.cache import CacheRegistry, get_registry, set_registry


@pytest.fixture(autouse=True)
def fresh_registry() -> Iterator[CacheRegistry]:
    """Install an empty default registry for the duration of one test."""
    previous = get_registry()
    registry = set_registry(CacheRegistry())
    yield registry
    set_registry(previous)


class RecordingValidator:
    """SchemaValidator that accepts everything and records each call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any, Any, Any]] = []

    def validate(self, schema_document: Any, instance: Any, fragment: Any = "#") -> bool:
        self.calls.append(("validate", schema_document, instance, fragment))
        return True

    def fully_validate(
        self, schema_document: Any, instance: Any, fragment: Any = "#"
    ) -> list[str]:
        self.calls.append(("fully_validate", schema_document, instance, fragment))
        return []

    def validate_strict(
        self, schema_document: Any, instance: Any, fragment: Any = "#"
    ) -> bool:
        self.calls.append(("validate_strict", schema_document, instance, fragment))
        return True

    def fully_validate_schema(self, schema_document: Any, fragment: Any = "#") -> list[str]:
        self.calls.append(("fully_validate_schema", schema_document, None, fragment))
        return []


@pytest.fixture
def recording_validator() -> RecordingValidator:
    """Install a RecordingValidator in a fresh registry and return it."""
    validator = RecordingValidator()
    set_registry(CacheRegistry(validator=validator))
    return validator
