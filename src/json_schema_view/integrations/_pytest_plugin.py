"""pytest plugin for json-schema-view.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_schema_view import Schema, schema_from


@pytest.fixture(scope="session")
def assert_schema_valid() -> Any:
    """Fixture that returns a callable schema-validity asserter.

    The fixture is session-scoped because the returned callable is stateless
    (each call delegates to ``Schema.fully_validate_instance``).

    Usage in tests::

        def test_payload(assert_schema_valid):
            assert_schema_valid({"id": 1}, {"properties": {"id": {"type": "integer"}}})

        def test_bad_payload(assert_schema_valid):
            with pytest.raises(AssertionError, match=r"not valid"):
                assert_schema_valid({"id": "x"}, {"properties": {"id": {"type": "integer"}}})

    Returns:
        A callable ``_assert(instance, schema) -> None`` that raises
        ``AssertionError`` listing every validation message when ``instance``
        is not valid against ``schema``.
    """

    def _assert(instance: Any, schema: Schema | Any) -> None:
        """Assert that ``instance`` is valid against ``schema``.

        Args:
            instance: Plain JSON-like data or a ``SchemaInstance``.
            schema:   A ``Schema`` or anything ``schema_from`` accepts.

        Raises:
            AssertionError: When validation reports any error, with every
                message and the schema id in the assertion message.
        """
        resolved = schema_from(schema)
        messages = resolved.fully_validate_instance(instance)
        if messages:
            listed = "\n".join(f"  - {message}" for message in messages)
            raise AssertionError(
                f"instance not valid against {resolved.schema_id}:\n{listed}\n"
                f"  instance: {instance}"
            )

    return _assert
