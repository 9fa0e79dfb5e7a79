"""Rule evaluation.

``evaluate`` walks a schema's rules in declaration order against a decoded
object, rewriting values in place (defaults, numeric coercion, explicit
coercion, transforms) and recursing into nested objects whose rule names
another schema. The first broken rule ends the walk. When every rule
passes, keys the schema does not declare are removed. ``merge`` folds a
validated partial update into a stored object.

Evaluation is synchronous and touches nothing but the object it is given
and the (read-only) registry.
"""
from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from .errors import Violation, ViolationKind
from .numeric import NumberParseError, parse_number
from .registry import SchemaRegistry, registry as default_registry
from .rules import FieldRule, Schema
from .types import FieldType


def required_missing(key: str) -> Violation:
    return Violation(ViolationKind.REQUIRED, key, f"required field `{key}` not present.")


def type_mismatch(key: str, expected: FieldType) -> Violation:
    return Violation(ViolationKind.TYPE, key, f"field `{key}` is not of the expected type {expected}.")


def coercion_failed(key: str, target: FieldType) -> Violation:
    return Violation(ViolationKind.TYPE, key, f"field `{key}` cannot be coerced to {target}.")


def _check_length(rule: FieldRule, value: str) -> Violation | None:
    key = rule.key
    size = len(value)
    if rule.length is not None and size != rule.length:
        return Violation(ViolationKind.LENGTH, key, f"field `{key}` must be exactly {rule.length} characters long.")
    if rule.min_length is not None and size < rule.min_length:
        return Violation(ViolationKind.LENGTH, key, f"field `{key}` must be at least {rule.min_length} characters long.")
    if rule.max_length is not None and size > rule.max_length:
        return Violation(ViolationKind.LENGTH, key, f"field `{key}` must be at most {rule.max_length} characters long.")
    return None


def _auto_coerce(expected: FieldType, value: Any) -> Any:
    """Numeric strings become numbers for numeric fields; others are untouched."""
    if expected.is_numeric and isinstance(value, str):
        try:
            return parse_number(value)
        except NumberParseError:
            # The type check reports the original string
            return value
    return value


def sanitize(obj: MutableMapping[str, Any], schema: Schema) -> None:
    """Remove every key of ``obj`` that ``schema`` does not declare."""
    for key in [key for key in obj if key not in schema.keys]:
        del obj[key]


def merge(
    target: MutableMapping[str, Any],
    changes: Mapping[str, Any],
    schema: Schema,
    *,
    registry: SchemaRegistry = default_registry,
) -> MutableMapping[str, Any]:
    """Apply edit-mode ``changes`` to a stored object in place.

    Fields whose rule names a nested schema are merged key by key when both
    sides are objects; every other value replaces the stored one.
    """
    for key, value in changes.items():
        rule = schema.rule_for(key)
        current = target.get(key)
        if (
            rule is not None
            and rule.validator is not None
            and isinstance(value, Mapping)
            and isinstance(current, MutableMapping)
        ):
            merge(current, value, registry.get(rule.validator), registry=registry)
        else:
            target[key] = value
    return target


def evaluate(
    obj: MutableMapping[str, Any],
    schema: Schema,
    *,
    edit: bool = False,
    registry: SchemaRegistry = default_registry,
) -> Violation | None:
    """Validate ``obj`` against ``schema`` in place.

    Args:
        obj: Decoded object; values are rewritten and unknown keys removed.
        schema: Rules to apply, in order.
        edit: Partial-update mode; absent required fields are allowed and
            their defaults are not applied.
        registry: Where nested ``validator`` names are resolved.

    Returns:
        None on success, otherwise the first violation.

    Raises:
        UnknownSchemaError: a nested rule names an undeclared schema.
    """
    for rule in schema.rules:
        key = rule.key
        present = key in obj
        value = obj.get(key)

        if rule.required and not present and not edit:
            if not rule.has_default:
                return required_missing(key)
            value = rule.resolve_default()
            present = True

        if not present:
            continue

        if rule.validator is not None and isinstance(value, MutableMapping):
            nested = registry.get(rule.validator)
            violation = evaluate(value, nested, edit=edit, registry=registry)
            if violation is not None:
                return violation.nested_under(key)
            obj[key] = value
            continue

        if rule.type is not None:
            value = _auto_coerce(rule.type, value)
            if not rule.type.matches(value):
                return type_mismatch(key, rule.type)

        if rule.coerce is not None:
            result = rule.coercion(value)
            if result.is_err():
                return coercion_failed(key, rule.coerce)
            value = result.unwrap()

        if rule.type is FieldType.STRING and isinstance(value, str):
            violation = _check_length(rule, value)
            if violation is not None:
                return violation

        if rule.transform is not None:
            value = rule.transform(value)

        obj[key] = value

    sanitize(obj, schema)
    return None
