"""Process-wide schema registry.

Schemas are registered while modules declaring them are imported, before
the application serves requests; afterwards the registry is only read.
Writes take a lock so late registration stays safe, reads do not.
"""
from __future__ import annotations

import threading

from core.logging import validation_logger

from .errors import UnknownSchemaError
from .rules import Schema

log = validation_logger()


class SchemaRegistry:
    """Mapping from schema name to Schema. Last registration wins."""

    __slots__ = ("_schemas", "_lock")

    def __init__(self):
        self._schemas: dict[str, Schema] = {}
        self._lock = threading.Lock()

    def register(self, schema: Schema) -> Schema:
        with self._lock:
            replaced = schema.name in self._schemas
            # Readers see either the old mapping or the new one
            schemas = dict(self._schemas)
            schemas[schema.name] = schema
            self._schemas = schemas
        log.debug("schema_registered", schema=schema.name, fields=len(schema), replaced=replaced)
        return schema

    def lookup(self, name: str) -> Schema | None:
        return self._schemas.get(name)

    def get(self, name: str) -> Schema:
        """Like lookup, but raises UnknownSchemaError for undeclared names."""
        schema = self._schemas.get(name)
        if schema is None:
            raise UnknownSchemaError(name)
        return schema

    def names(self) -> list[str]:
        return sorted(self._schemas)

    def clear(self) -> None:
        with self._lock:
            self._schemas = {}

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)


registry = SchemaRegistry()
