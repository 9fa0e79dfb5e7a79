"""Tests for the raising and future-forwarding validator entry points."""

import asyncio

import pytest

from core.errors import ErrorCode
from core.validation.errors import UnknownSchemaError, ValidationError
from core.validation.registry import SchemaRegistry
from core.validation.validators import (
    FutureValidator,
    RaisingValidator,
    declare,
    validate,
)

PERSON = [
    ("name", {"type": "string", "required": True, "min-length": 1}),
    ("age", {"type": "number"}),
]


@pytest.fixture
def event_loop_future():
    loop = asyncio.new_event_loop()
    try:
        yield loop.create_future()
    finally:
        loop.close()


class TestDeclare:
    def test_returns_raising_validator(self, schema_registry: SchemaRegistry) -> None:
        validator = declare("person", PERSON, registry=schema_registry)
        assert isinstance(validator, RaisingValidator)
        assert "person" in schema_registry

    def test_forward_to_future(self, schema_registry: SchemaRegistry) -> None:
        validator = declare("person", PERSON, forward_to_future=True, registry=schema_registry)
        assert isinstance(validator, FutureValidator)

    def test_redeclaration_takes_effect(self, schema_registry: SchemaRegistry) -> None:
        validator = declare("person", PERSON, registry=schema_registry)
        declare("person", [("name", {"type": "string"})], registry=schema_registry)
        assert validator({}) == {}

    def test_unregistered_name(self, schema_registry: SchemaRegistry) -> None:
        with pytest.raises(UnknownSchemaError):
            RaisingValidator("ghost", schema_registry)({})


class TestRaisingValidator:
    def test_success_returns_same_object(self, schema_registry: SchemaRegistry) -> None:
        validator = declare("person", PERSON, registry=schema_registry)
        obj = {"name": "Ann", "age": "30", "extra": "x"}
        assert validator(obj) is obj
        assert obj == {"name": "Ann", "age": 30}

    def test_body_receives_object(self, schema_registry: SchemaRegistry) -> None:
        validator = declare("person", PERSON, registry=schema_registry)
        assert validator({"name": "Ann"}, lambda o: o["name"].upper()) == "ANN"

    def test_failure_raises(self, schema_registry: SchemaRegistry) -> None:
        validator = declare("person", PERSON, registry=schema_registry)
        called = []
        with pytest.raises(ValidationError) as exc_info:
            validator({"age": "30"}, called.append)
        assert str(exc_info.value) == "required field `name` not present."
        assert exc_info.value.field == "name"
        assert exc_info.value.schema == "person"
        assert called == []

    def test_edit_mode(self, schema_registry: SchemaRegistry) -> None:
        validator = declare("person", PERSON, registry=schema_registry)
        assert validator({"age": "5"}, edit=True) == {"age": 5}

    def test_non_mapping(self, schema_registry: SchemaRegistry) -> None:
        validator = declare("person", PERSON, registry=schema_registry)
        with pytest.raises(TypeError):
            validator(["name", "Ann"])

    def test_nested_message(self, schema_registry: SchemaRegistry) -> None:
        declare("address", [("zip", {"type": "string", "required": True})], registry=schema_registry)
        validator = declare("contact", [("address", {"validator": "address"})], registry=schema_registry)
        with pytest.raises(ValidationError) as exc_info:
            validator({"address": {}})
        assert exc_info.value.message == "required field `zip` not present."
        assert exc_info.value.field == "address.zip"


class TestFutureValidator:
    def test_failure_sets_exception(self, schema_registry: SchemaRegistry, event_loop_future) -> None:
        validator = declare("person", PERSON, forward_to_future=True, registry=schema_registry)
        called = []
        assert validator({}, event_loop_future, called.append) is None
        assert called == []
        error = event_loop_future.exception()
        assert isinstance(error, ValidationError)
        assert error.message == "required field `name` not present."

    def test_success_runs_body(self, schema_registry: SchemaRegistry, event_loop_future) -> None:
        validator = declare("person", PERSON, forward_to_future=True, registry=schema_registry)
        validator({"name": "Ann", "age": "2"}, event_loop_future, event_loop_future.set_result)
        assert event_loop_future.result() == {"name": "Ann", "age": 2}

    def test_success_without_body_leaves_future_pending(
        self, schema_registry: SchemaRegistry, event_loop_future
    ) -> None:
        validator = declare("person", PERSON, forward_to_future=True, registry=schema_registry)
        obj = {"name": "Ann"}
        assert validator(obj, event_loop_future) is obj
        assert not event_loop_future.done()

    def test_done_future_untouched(self, schema_registry: SchemaRegistry, event_loop_future) -> None:
        validator = declare("person", PERSON, forward_to_future=True, registry=schema_registry)
        event_loop_future.set_result("earlier")
        assert validator({}, event_loop_future) is None
        assert event_loop_future.result() == "earlier"


class TestValidate:
    def test_ok(self, schema_registry: SchemaRegistry) -> None:
        declare("person", PERSON, registry=schema_registry)
        obj = {"name": "Ann", "age": "3"}
        result = validate("person", obj, registry=schema_registry)
        assert result.is_ok()
        assert result.unwrap() is obj

    def test_err(self, schema_registry: SchemaRegistry) -> None:
        declare("person", PERSON, registry=schema_registry)
        result = validate("person", {"name": ""}, registry=schema_registry)
        assert result.is_err()
        error = result.unwrap_err()
        assert error.code is ErrorCode.E2005_CONSTRAINT_VIOLATION
        assert error.message == "field `name` must be at least 1 characters long."
        assert error.metadata == {"field": "name", "constraint": "length", "schema": "person"}
