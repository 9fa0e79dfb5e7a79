"""Tests for the schema registry."""

import pytest

from core.validation.errors import UnknownSchemaError
from core.validation.registry import SchemaRegistry
from core.validation.rules import Schema


def _schema(name: str, *keys: str) -> Schema:
    return Schema.declare(name, [(key, {}) for key in keys])


class TestSchemaRegistry:
    def test_register_and_lookup(self, schema_registry: SchemaRegistry) -> None:
        schema = schema_registry.register(_schema("address", "zip"))
        assert schema_registry.lookup("address") is schema
        assert "address" in schema_registry
        assert len(schema_registry) == 1

    def test_lookup_absent(self, schema_registry: SchemaRegistry) -> None:
        assert schema_registry.lookup("missing") is None

    def test_get_absent_raises(self, schema_registry: SchemaRegistry) -> None:
        with pytest.raises(UnknownSchemaError, match="schema 'missing' is not registered"):
            schema_registry.get("missing")

    def test_unknown_schema_is_lookup_error(self, schema_registry: SchemaRegistry) -> None:
        with pytest.raises(LookupError):
            schema_registry.get("missing")

    def test_last_writer_wins(self, schema_registry: SchemaRegistry) -> None:
        schema_registry.register(_schema("address", "zip"))
        replacement = schema_registry.register(_schema("address", "zip", "city"))
        assert schema_registry.get("address") is replacement
        assert len(schema_registry) == 1

    def test_names_sorted(self, schema_registry: SchemaRegistry) -> None:
        schema_registry.register(_schema("b"))
        schema_registry.register(_schema("a"))
        assert schema_registry.names() == ["a", "b"]

    def test_clear(self, schema_registry: SchemaRegistry) -> None:
        schema_registry.register(_schema("a"))
        schema_registry.clear()
        assert len(schema_registry) == 0
