"""Integration tests for the json-schema-view pytest plugin.

These tests verify that the assert_schema_valid fixture is auto-discovered
via the pytest11 entry point and behaves correctly.

NOTE: These tests require json-schema-view to be installed (even in editable mode
via ``pip install -e .``). The pytest11 entry point is only registered at
install time -- running from a raw source checkout without installing will not
discover the fixture.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest

from json_schema_view import Schema, wrap

SCHEMA = {"$id": "https://example.com/item", "properties": {"id": {"type": "integer"}}}


def test_fixture_passes_valid_instance(assert_schema_valid: Any) -> None:
    """A valid instance raises nothing."""
    assert_schema_valid({"id": 1}, SCHEMA)


def test_fixture_fails_invalid_instance(assert_schema_valid: Any) -> None:
    """An invalid instance raises AssertionError."""
    with pytest.raises(AssertionError, match=r"not valid"):
        assert_schema_valid({"id": "x"}, SCHEMA)


def test_fixture_accepts_schema_and_wrapper(assert_schema_valid: Any) -> None:
    """Schema objects and wrapped instances are accepted as arguments."""
    schema = Schema(SCHEMA)
    assert_schema_valid(wrap({"id": 2}, schema), schema)


def test_fixture_error_message_contents(assert_schema_valid: Any) -> None:
    """AssertionError message should name the schema and every failure."""
    with pytest.raises(AssertionError) as exc_info:
        assert_schema_valid({"id": "x"}, SCHEMA)

    error_message = str(exc_info.value)
    assert "https://example.com/item#" in error_message
    assert "#/id: 'x' is not of type 'integer'" in error_message
    assert "instance:" in error_message


def test_fixture_returns_callable(assert_schema_valid: Any) -> None:
    """The fixture should return a callable, not None or a direct assertion result."""
    assert callable(assert_schema_valid)


def test_plugin_discovery() -> None:
    """Verify assert_schema_valid appears in pytest --fixtures output."""
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "--fixtures", "-q"],
        capture_output=True,
        text=True,
        cwd=str(Path(__file__).resolve().parents[2]),
    )
    assert "assert_schema_valid" in result.stdout, (
        f"assert_schema_valid not found in pytest --fixtures output.\n"
        f"stdout:\n{result.stdout}\n"
        f"stderr:\n{result.stderr}"
    )
