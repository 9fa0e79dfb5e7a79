"""Field rules and schemas.

A schema is declared as an ordered list of ``(key, properties)`` pairs:

    declare("contact", [
        ("name", {"type": "string", "required": True, "min-length": 1}),
        ("age", {"type": "integer"}),
        ("address", {"validator": "address"}),
    ])

Recognized properties: ``type``, ``required``, ``default``, ``coerce``,
``transform``, ``validator``, ``length``, ``min-length``, ``max-length``
(underscore spellings are accepted too).
"""
from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .coercion import CoercionRule, coercion_for
from .errors import SchemaDefinitionError
from .types import FieldType


class _Missing:
    """Sentinel for "no default declared"; None is a legal default."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

_PROPERTY_NAMES = {
    "type": "type",
    "required": "required",
    "default": "default",
    "coerce": "coerce",
    "transform": "transform",
    "validator": "validator",
    "length": "length",
    "min-length": "min_length",
    "min_length": "min_length",
    "max-length": "max_length",
    "max_length": "max_length",
}


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Declarative constraints on one object key."""
    key: str
    type: FieldType | None = None
    required: bool = False
    default: Any = MISSING
    coerce: FieldType | None = None
    transform: Callable[[Any], Any] | None = None
    validator: str | None = None
    length: int | None = None
    min_length: int | None = None
    max_length: int | None = None

    def __post_init__(self):
        if not isinstance(self.key, str) or not self.key:
            raise SchemaDefinitionError(f"field key must be a non-empty string, got {self.key!r}")
        for attr in ("type", "coerce"):
            tag = getattr(self, attr)
            if tag is None:
                continue
            try:
                object.__setattr__(self, attr, FieldType.parse(tag))
            except ValueError as e:
                raise SchemaDefinitionError(f"{e} for `{self.key}`") from e
        if self.transform is not None and not callable(self.transform):
            raise SchemaDefinitionError(f"transform for `{self.key}` is not callable")
        if self.validator is not None and not isinstance(self.validator, str):
            raise SchemaDefinitionError(f"validator for `{self.key}` must be a schema name")
        if self.coerce is not None and coercion_for(self.coerce) is None:
            raise SchemaDefinitionError(f"field `{self.key}` cannot be coerced to {self.coerce}")

        bounds = {"length": self.length, "min-length": self.min_length, "max-length": self.max_length}
        for name, bound in bounds.items():
            if bound is None:
                continue
            if isinstance(bound, bool) or not isinstance(bound, int) or bound < 0:
                raise SchemaDefinitionError(f"{name} for `{self.key}` must be a non-negative integer")
            if self.type is not FieldType.STRING:
                raise SchemaDefinitionError(f"{name} for `{self.key}` requires type string")
        if self.min_length is not None and self.max_length is not None and self.min_length > self.max_length:
            raise SchemaDefinitionError(f"min-length exceeds max-length for `{self.key}`")

    @classmethod
    def from_properties(cls, key: str, properties: Mapping[str, Any] | None = None) -> FieldRule:
        """Build a rule from the declaration surface's property mapping."""
        kwargs: dict[str, Any] = {}
        for name, value in (properties or {}).items():
            attr = _PROPERTY_NAMES.get(name)
            if attr is None:
                raise SchemaDefinitionError(f"unknown property '{name}' for `{key}`")
            kwargs[attr] = value
        if "required" in kwargs:
            kwargs["required"] = bool(kwargs["required"])
        return cls(key=key, **kwargs)

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def resolve_default(self) -> Any:
        """Default value; zero-argument producers are invoked on each use.

        Literal defaults are deep-copied so no two objects share a container.
        """
        if callable(self.default):
            return self.default()
        return copy.deepcopy(self.default)

    @property
    def coercion(self) -> CoercionRule | None:
        return coercion_for(self.coerce) if self.coerce is not None else None


@dataclass(frozen=True, slots=True)
class Schema:
    """Named, ordered sequence of field rules.

    Rule order is evaluation order; for duplicate keys the first rule wins.
    """
    name: str
    rules: tuple[FieldRule, ...]
    keys: frozenset[str] = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "keys", frozenset(rule.key for rule in self.rules))

    @classmethod
    def declare(cls, name: str, fields: Iterable[FieldRule | tuple[str, Mapping[str, Any]]]) -> Schema:
        """Build a schema from rules or ``(key, properties)`` pairs."""
        if not isinstance(name, str) or not name:
            raise SchemaDefinitionError(f"schema name must be a non-empty string, got {name!r}")
        rules = []
        for entry in fields:
            if isinstance(entry, FieldRule):
                rules.append(entry)
            else:
                try:
                    key, properties = entry
                except (TypeError, ValueError):
                    raise SchemaDefinitionError(
                        f"schema '{name}': expected (key, properties) pair, got {entry!r}"
                    ) from None
                rules.append(FieldRule.from_properties(key, properties))
        return cls(name=name, rules=tuple(rules))

    def rule_for(self, key: str) -> FieldRule | None:
        for rule in self.rules:
            if rule.key == key:
                return rule
        return None

    def __iter__(self):
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)
