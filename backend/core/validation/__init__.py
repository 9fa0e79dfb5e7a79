"""Declarative Object Validation

Named schemas of ordered field rules, applied to decoded request bodies:
required fields and defaults, numeric-string coercion, explicit coercion,
transforms, string length bounds, nested objects validated against other
named schemas, and removal of undeclared keys. The object is rewritten in
place; the first broken rule is reported.

Usage:
    from core.validation import declare, ValidationError

    declare("address", [
        ("zip", {"type": "string", "required": True, "length": 5}),
    ])
    contact_validator = declare("contact", [
        ("name", {"type": "string", "required": True, "min-length": 1}),
        ("age", {"type": "number"}),
        ("address", {"validator": "address"}),
    ])

    contact = contact_validator({"name": "Ann", "age": "30", "extra": "x"})
    # {"name": "Ann", "age": 30}
"""
from .errors import (
    SchemaDefinitionError,
    UnknownSchemaError,
    ValidationError,
    Violation,
    ViolationKind,
)
from .numeric import NumberParseError, parse_number
from .types import FieldType, ID_PATTERN
from .coercion import (
    CoercionRule,
    ToBoolean,
    ToFloat,
    ToInteger,
    ToNumber,
    ToString,
    coercion_for,
)
from .rules import MISSING, FieldRule, Schema
from .registry import SchemaRegistry, registry
from .evaluator import evaluate, merge, sanitize
from .validators import (
    FutureValidator,
    RaisingValidator,
    SchemaValidator,
    declare,
    validate,
)

__all__ = [
    # Errors
    "SchemaDefinitionError",
    "UnknownSchemaError",
    "ValidationError",
    "Violation",
    "ViolationKind",
    # Numbers
    "NumberParseError",
    "parse_number",
    # Types and coercion
    "FieldType",
    "ID_PATTERN",
    "CoercionRule",
    "ToBoolean",
    "ToFloat",
    "ToInteger",
    "ToNumber",
    "ToString",
    "coercion_for",
    # Schemas
    "MISSING",
    "FieldRule",
    "Schema",
    "SchemaRegistry",
    "registry",
    # Evaluation
    "evaluate",
    "merge",
    "sanitize",
    # Entry points
    "SchemaValidator",
    "RaisingValidator",
    "FutureValidator",
    "declare",
    "validate",
]
