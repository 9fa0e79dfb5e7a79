"""Semantic type tags for field rules."""
from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

# Hex object ids: 24 characters for generated ids, up to 80 for foreign ones
ID_PATTERN = re.compile(r"[0-9a-fA-F]{24,80}")


class FieldType(str, Enum):
    """Closed set of value types a field rule can require."""
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    ID = "id"

    @classmethod
    def parse(cls, tag: FieldType | str) -> FieldType:
        """Resolve a declared tag, accepting common aliases.

        Raises:
            ValueError: unknown tag
        """
        if isinstance(tag, cls):
            return tag
        normalized = str(tag).strip().lower()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"unknown field type '{tag}'") from None

    @property
    def is_numeric(self) -> bool:
        return self in (FieldType.NUMBER, FieldType.INTEGER, FieldType.FLOAT)

    def matches(self, value: Any) -> bool:
        """Check a runtime value against this tag."""
        match self:
            case FieldType.STRING:
                return isinstance(value, str)
            case FieldType.BOOLEAN:
                return isinstance(value, bool)
            case FieldType.INTEGER:
                return isinstance(value, int) and not isinstance(value, bool)
            case FieldType.NUMBER | FieldType.FLOAT:
                return isinstance(value, (int, float)) and not isinstance(value, bool)
            case FieldType.OBJECT:
                return isinstance(value, Mapping)
            case FieldType.ARRAY:
                return isinstance(value, (list, tuple))
            case FieldType.ID:
                return isinstance(value, str) and ID_PATTERN.fullmatch(value) is not None
        return False

    def __str__(self) -> str:
        return self.value


_ALIASES = {
    "str": "string",
    "int": "integer",
    "bool": "boolean",
    "dict": "object",
    "mapping": "object",
    "list": "array",
    "sequence": "array",
    "identifier": "id",
}
