"""JsonSchemaValidator: the default SchemaValidator, built on ``jsonschema``.

One root validator is built per schema document (picked with
``jsonschema.validators.validator_for`` from the document's ``$schema``,
falling back to the configured default dialect) and kept in an LRU cache
keyed by the document fingerprint.  Validating against a fragment evolves
the root validator onto the subschema, which keeps the root's reference
resolver so ``"#/definitions/..."`` references inside the fragment still
resolve against the whole document.

Satisfies the ``SchemaValidator`` Protocol structurally.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Literal

from cachetools import LRUCache
from jsonschema import (
    Draft4Validator,
    Draft6Validator,
    Draft7Validator,
    Draft201909Validator,
    Draft202012Validator,
)
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from json_schema_view.config import DRAFT4, DRAFT6, DRAFT7, DRAFT201909, DRAFT202012
from json_schema_view.document.node import Document
from json_schema_view.document.pointer import Pointer
from json_schema_view.errors import SchemaValidationFailure
from json_schema_view.typelike import canonical_fingerprint

__all__ = ["JsonSchemaValidator"]

logger = logging.getLogger(__name__)

_VALIDATORS_BY_DIALECT: dict[str, type[Validator]] = {
    DRAFT4: Draft4Validator,
    DRAFT6: Draft6Validator,
    DRAFT7: Draft7Validator,
    DRAFT201909: Draft201909Validator,
    DRAFT202012: Draft202012Validator,
}


def _as_pointer(fragment: str | Pointer) -> Pointer:
    if isinstance(fragment, Pointer):
        return fragment
    return Pointer.from_fragment(fragment)


def _format_error(error: Any) -> str:
    location = Pointer(tuple(error.absolute_path)).fragment
    return f"{location}: {error.message}"


class JsonSchemaValidator:
    """Validator collaborator backed by the ``jsonschema`` package.

    Args:
        default_dialect: Metaschema URI used for documents without ``$schema``.
            One of the ``DRAFT*`` constants in ``json_schema_view.config``.
        max_cached_documents: How many root validators to keep.  Defaults to 64.

    Example::

        validator = JsonSchemaValidator()
        doc = {"properties": {"a": {"type": "integer"}}}
        validator.validate(doc, 1, "#/properties/a")      # True
        validator.fully_validate(doc, "x", "#/properties/a")
        # ["#: 'x' is not of type 'integer'"]
    """

    def __init__(
        self, default_dialect: str = DRAFT7, max_cached_documents: int = 64
    ) -> None:
        self._default_cls: type[Validator] = _VALIDATORS_BY_DIALECT[default_dialect]
        self._roots: LRUCache[str, Validator] = LRUCache(maxsize=max_cached_documents)
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # SchemaValidator Protocol surface
    # ------------------------------------------------------------------

    def validate(
        self, schema_document: Any, instance: Any, fragment: str | Pointer = "#"
    ) -> bool:
        """Return True when ``instance`` is valid against the addressed schema."""
        return bool(self._for_fragment(schema_document, fragment).is_valid(instance))

    def fully_validate(
        self, schema_document: Any, instance: Any, fragment: str | Pointer = "#"
    ) -> list[str]:
        """Return every error message for ``instance``, in the order reported."""
        validator = self._for_fragment(schema_document, fragment)
        return [_format_error(error) for error in validator.iter_errors(instance)]

    def validate_strict(
        self, schema_document: Any, instance: Any, fragment: str | Pointer = "#"
    ) -> Literal[True]:
        """Return True, or raise ``SchemaValidationFailure`` listing every error."""
        messages = self.fully_validate(schema_document, instance, fragment)
        if messages:
            raise SchemaValidationFailure(messages)
        return True

    def fully_validate_schema(
        self, schema_document: Any, fragment: str | Pointer = "#"
    ) -> list[str]:
        """Return the metaschema error messages for the addressed schema."""
        root_value = self._root_value(schema_document)
        subschema = _as_pointer(fragment).evaluate(root_value)
        cls = validator_for(root_value, default=self._default_cls)
        meta_validator = cls(cls.META_SCHEMA)
        return [_format_error(error) for error in meta_validator.iter_errors(subschema)]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _root_value(schema_document: Any) -> Any:
        if isinstance(schema_document, Document):
            return schema_document.value
        return schema_document

    def _root_validator(self, schema_document: Any) -> Validator:
        if isinstance(schema_document, Document):
            key = schema_document.fingerprint
        else:
            key = canonical_fingerprint(schema_document)
        with self._lock:
            validator = self._roots.get(key)
            if validator is None:
                root_value = self._root_value(schema_document)
                cls = validator_for(root_value, default=self._default_cls)
                logger.debug("building %s for schema document", cls.__name__)
                validator = cls(root_value)
                self._roots[key] = validator
            return validator

    def _for_fragment(self, schema_document: Any, fragment: str | Pointer) -> Validator:
        pointer = _as_pointer(fragment)
        root = self._root_validator(schema_document)
        if pointer.is_root:
            return root
        return root.evolve(schema=pointer.evaluate(root.schema))

    def clear(self) -> None:
        """Drop every cached root validator."""
        with self._lock:
            self._roots.clear()
