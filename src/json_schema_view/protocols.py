"""SchemaValidator Protocol for the json-schema-view validation extension point.

Defines the structural interface every validator collaborator must satisfy.
Users can plug in their own validator without inheriting from any base class:
any class with conformant methods passes ``isinstance`` checks.

Example::

    from json_schema_view.protocols import SchemaValidator

    class AcceptEverything:
        def validate(self, schema_document, instance, fragment="#"):
            return True

        def fully_validate(self, schema_document, instance, fragment="#"):
            return []

        def validate_strict(self, schema_document, instance, fragment="#"):
            return True

        def fully_validate_schema(self, schema_document, fragment="#"):
            return []

    assert isinstance(AcceptEverything(), SchemaValidator)  # structural conformance
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from json_schema_view.document.pointer import Pointer


@runtime_checkable
class SchemaValidator(Protocol):
    """Structural protocol for JSON Schema validators.

    ``schema_document`` is the complete schema document (a plain value, or a
    ``Document`` whose cached fingerprint may be used as a cache key) and
    ``fragment`` addresses the schema to validate against within it, either
    as a URI fragment string (``"#/properties/a"``) or a ``Pointer``.
    ``instance`` is always a plain JSON-like value.

    - ``validate`` returns whether the instance is valid.
    - ``fully_validate`` returns every error message, in a stable order.
    - ``validate_strict`` returns True or raises ``SchemaValidationFailure``.
    - ``fully_validate_schema`` validates the addressed schema against its
      metaschema and returns every error message.
    """

    def validate(
        self, schema_document: Any, instance: Any, fragment: str | Pointer = "#"
    ) -> bool: ...

    def fully_validate(
        self, schema_document: Any, instance: Any, fragment: str | Pointer = "#"
    ) -> list[str]: ...

    def validate_strict(
        self, schema_document: Any, instance: Any, fragment: str | Pointer = "#"
    ) -> Literal[True]: ...

    def fully_validate_schema(
        self, schema_document: Any, fragment: str | Pointer = "#"
    ) -> list[str]: ...
