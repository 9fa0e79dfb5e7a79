"""Validation Errors

A failed validation yields exactly one ``Violation``: evaluation stops at
the first broken rule. Violations are plain values inside the engine; the
validator entry points turn them into ``ValidationError`` exceptions or
``AppError`` results.

Error Format (HTTP):
{
    "error": {
        "code": "E2001_REQUIRED_FIELD_MISSING",
        "message": "required field `name` not present.",
        "category": "validation",
        "metadata": {"field": "name", "constraint": "required", "schema": "contact"}
    }
}
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from core.errors import AppError, ErrorCode, validation_error


class ViolationKind(str, Enum):
    REQUIRED = "required"
    TYPE = "type"
    LENGTH = "length"
    NESTED = "nested"

    @property
    def error_code(self) -> ErrorCode:
        return _KIND_CODES[self]


_KIND_CODES = {
    ViolationKind.REQUIRED: ErrorCode.E2001_REQUIRED_FIELD_MISSING,
    ViolationKind.TYPE: ErrorCode.E2004_INVALID_TYPE,
    ViolationKind.LENGTH: ErrorCode.E2005_CONSTRAINT_VIOLATION,
    ViolationKind.NESTED: ErrorCode.E2000_VALIDATION_GENERIC,
}


@dataclass(frozen=True, slots=True)
class Violation:
    """The first rule an object broke.

    For nested failures ``field`` is the dotted path to the offending key,
    ``message`` is the inner message unchanged and ``cause`` holds the
    inner violation.
    """
    kind: ViolationKind
    field: str
    message: str
    cause: Violation | None = None

    @property
    def root(self) -> Violation:
        """Innermost violation of a nested chain."""
        violation = self
        while violation.cause is not None:
            violation = violation.cause
        return violation

    @property
    def error_code(self) -> ErrorCode:
        return self.root.kind.error_code

    def nested_under(self, key: str) -> Violation:
        """Wrap this violation as the failure of the object stored at ``key``."""
        return Violation(
            kind=ViolationKind.NESTED,
            field=f"{key}.{self.field}",
            message=self.message,
            cause=self,
        )

    def __str__(self) -> str:
        return self.message


class ValidationError(Exception):
    """Raised (or set on a future) when an object fails its schema."""

    def __init__(self, violation: Violation, schema: str | None = None):
        self.violation = violation
        self.schema = schema
        super().__init__(violation.message)

    @property
    def message(self) -> str:
        return self.violation.message

    @property
    def field(self) -> str:
        return self.violation.field

    def to_app_error(self) -> AppError:
        """Convert to AppError for the HTTP error handlers."""
        root = self.violation.root
        return validation_error(
            self.violation.message,
            code=self.violation.error_code,
            field=self.violation.field,
            constraint=root.kind.value,
            schema=self.schema,
        ).error

    def __repr__(self) -> str:
        return f"ValidationError(schema={self.schema!r}, field={self.field!r}, message={self.message!r})"


class SchemaDefinitionError(ValueError):
    """A schema declaration is malformed."""


class UnknownSchemaError(LookupError):
    """A schema name has not been declared."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"schema '{name}' is not registered")
