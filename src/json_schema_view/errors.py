"""Exception taxonomy for json-schema-view.

Every exception raised by the package derives from ``SchemaViewError`` and
also from the closest built-in exception, so callers can catch either
``SchemaViewError`` or the familiar ``TypeError`` / ``ValueError`` /
``LookupError``.

- TypeMismatchError:        wrong kind of value where a schema, pointer token,
                            mapping or sequence was required.
- NotIndexableError:        read attempted on an instance lacking the shape.
- NotAssignableError:       write attempted on an instance lacking the shape.
- InvalidInstanceError:     a Schema or SchemaInstance given as instance data.
- SchemaValidationFailure:  strict validation failed; carries the messages.
- SchemaConfigurationError: the schema itself is unusable (bad pattern,
                            ``$ref`` or ``allOf`` cycle) or bad configuration.
- PointerResolutionError:   a pointer does not resolve within a document.
"""

from __future__ import annotations

__all__ = [
    "InvalidInstanceError",
    "NotAssignableError",
    "NotIndexableError",
    "PointerResolutionError",
    "SchemaConfigurationError",
    "SchemaValidationFailure",
    "SchemaViewError",
    "TypeMismatchError",
]


class SchemaViewError(Exception):
    """Base class for all json-schema-view errors."""


class TypeMismatchError(SchemaViewError, TypeError):
    """A value of the wrong kind was given where a specific kind was required."""


class NotIndexableError(SchemaViewError, TypeError):
    """A property or index was read from an instance that is not object/array-like."""


class NotAssignableError(SchemaViewError, TypeError):
    """A property or index was written to an instance that is not object/array-like."""


class InvalidInstanceError(SchemaViewError, TypeError):
    """A Schema or an existing SchemaInstance was given as plain instance data."""


class SchemaConfigurationError(SchemaViewError, ValueError):
    """The schema (or the package configuration) cannot be used as given."""


class PointerResolutionError(SchemaViewError, LookupError):
    """A pointer does not identify a location within its document."""


class SchemaValidationFailure(SchemaViewError, ValueError):
    """Strict validation of an instance (or schema) failed.

    Attributes:
        messages: The validator's error messages, in the order reported.
    """

    def __init__(self, messages: list[str], subject: str = "instance") -> None:
        self.messages: list[str] = list(messages)
        summary = "; ".join(self.messages) if self.messages else "no details"
        super().__init__(f"{subject} failed validation: {summary}")
