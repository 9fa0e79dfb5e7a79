"""Validator entry points.

``declare`` registers a schema and hands back a callable bound to its name.
Two reporting conventions coexist at the call sites:

- ``RaisingValidator`` raises ``ValidationError`` on failure; the FastAPI
  handler registered for it turns that into a 400 response.
- ``FutureValidator`` takes an outstanding ``asyncio.Future`` and fails
  it with the ``ValidationError`` instead of raising.

On success both run the caller's ``body`` with the validated object and
return whatever it returns (an async body therefore yields an awaitable).
Without a body the validated object itself is returned.

Usage:
    contact_validator = declare("contact", [
        ("name", {"type": "string", "required": True}),
        ("age", {"type": "integer"}),
    ])

    contact = contact_validator(payload)
    await contact_validator(payload, store_contact)

    outcome = loop.create_future()
    contact_updates(payload, outcome, outcome.set_result, edit=True)
    changes = await outcome
"""
from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Mapping, MutableMapping
from typing import Any, TypeVar

from core.errors import AppError, Err, Ok, Result
from core.logging import validation_logger

from .errors import ValidationError, Violation
from .evaluator import evaluate
from .registry import SchemaRegistry, registry as default_registry
from .rules import FieldRule, Schema

T = TypeVar("T")

Body = Callable[[MutableMapping[str, Any]], T]
FieldDeclaration = FieldRule | tuple[str, Mapping[str, Any]]

log = validation_logger()


class SchemaValidator:
    """Callable bound to a schema name.

    The schema is resolved from the registry on every call, so a later
    re-declaration under the same name takes effect.
    """

    __slots__ = ("name", "registry")

    def __init__(self, name: str, registry: SchemaRegistry = default_registry):
        self.name = name
        self.registry = registry

    @property
    def schema(self) -> Schema:
        return self.registry.get(self.name)

    def check(self, obj: MutableMapping[str, Any], *, edit: bool = False) -> Violation | None:
        """Run the evaluator; returns the first violation or None."""
        if not isinstance(obj, MutableMapping):
            raise TypeError(f"{self.name} validator expects a mutable mapping, got {type(obj).__name__}")
        violation = evaluate(obj, self.schema, edit=edit, registry=self.registry)
        if violation is not None:
            log.debug(
                "validation_failed",
                schema=self.name,
                field=violation.field,
                kind=violation.root.kind.value,
                edit=edit,
            )
        return violation

    def result(self, obj: MutableMapping[str, Any], *, edit: bool = False) -> Result[MutableMapping[str, Any], AppError]:
        """Validate returning a Result instead of reporting through a channel."""
        violation = self.check(obj, edit=edit)
        if violation is not None:
            return Err(ValidationError(violation, self.name).to_app_error())
        return Ok(obj)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class RaisingValidator(SchemaValidator):
    """Reports failure by raising ValidationError."""

    __slots__ = ()

    def __call__(
        self,
        obj: MutableMapping[str, Any],
        body: Body | None = None,
        *,
        edit: bool = False,
    ) -> Any:
        violation = self.check(obj, edit=edit)
        if violation is not None:
            raise ValidationError(violation, self.name)
        return body(obj) if body is not None else obj


class FutureValidator(SchemaValidator):
    """Reports failure by failing the caller's future.

    A future that is already done is left alone.
    """

    __slots__ = ()

    def __call__(
        self,
        obj: MutableMapping[str, Any],
        future: asyncio.Future,
        body: Body | None = None,
        *,
        edit: bool = False,
    ) -> Any:
        violation = self.check(obj, edit=edit)
        if violation is not None:
            if not future.done():
                future.set_exception(ValidationError(violation, self.name))
            return None
        return body(obj) if body is not None else obj


def declare(
    name: str,
    fields: Iterable[FieldDeclaration],
    *,
    forward_to_future: bool = False,
    registry: SchemaRegistry = default_registry,
) -> RaisingValidator | FutureValidator:
    """Register a schema under ``name`` and return its entry point.

    Args:
        name: Schema name; nested rules refer to it through ``validator``.
        fields: ``(key, properties)`` pairs or FieldRule instances, in
            evaluation order.
        forward_to_future: Return a FutureValidator instead of a
            RaisingValidator.
        registry: Target registry (defaults to the process-wide one).

    Raises:
        SchemaDefinitionError: malformed declaration.
    """
    registry.register(Schema.declare(name, fields))
    validator_cls = FutureValidator if forward_to_future else RaisingValidator
    return validator_cls(name, registry)


def validate(
    name: str,
    obj: MutableMapping[str, Any],
    *,
    edit: bool = False,
    registry: SchemaRegistry = default_registry,
) -> Result[MutableMapping[str, Any], AppError]:
    """Validate ``obj`` against the schema registered as ``name``.

    Returns Ok(obj) with ``obj`` coerced and sanitized in place, or Err
    with the validation AppError.
    """
    return SchemaValidator(name, registry).result(obj, edit=edit)
