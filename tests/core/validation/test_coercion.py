"""Tests for explicit coercion rules."""

from core.errors import ErrorCode
from core.validation.coercion import (
    ToBoolean,
    ToFloat,
    ToInteger,
    ToNumber,
    ToString,
    coercion_for,
)
from core.validation.types import FieldType


class TestToString:
    def test_numbers(self) -> None:
        assert ToString()(5).unwrap() == "5"
        assert ToString()(2.5).unwrap() == "2.5"

    def test_booleans(self) -> None:
        assert ToString()(True).unwrap() == "true"

    def test_collections_rejected(self) -> None:
        result = ToString()([1])
        assert result.is_err()
        assert result.unwrap_err().code is ErrorCode.E2004_INVALID_TYPE


class TestNumericCoercions:
    def test_number_from_string(self) -> None:
        assert ToNumber()("42.5").unwrap() == 42.5

    def test_number_parse_failure(self) -> None:
        result = ToNumber()("abc")
        assert result.is_err()
        assert result.unwrap_err().code is ErrorCode.E2002_INVALID_FORMAT

    def test_integer_truncates(self) -> None:
        assert ToInteger()("42.9").unwrap() == 42
        assert ToInteger()(7.8).unwrap() == 7

    def test_float_from_int_string(self) -> None:
        result = ToFloat()("3").unwrap()
        assert result == 3.0
        assert type(result) is float

    def test_bool_to_number(self) -> None:
        assert ToInteger()(True).unwrap() == 1

    def test_float_out_of_range(self) -> None:
        result = ToFloat()("9" * 400)
        assert result.is_err()
        assert result.unwrap_err().code is ErrorCode.E2002_INVALID_FORMAT

    def test_integer_from_non_finite_float(self) -> None:
        assert ToInteger()(float("inf")).is_err()
        assert ToInteger()(float("nan")).is_err()


class TestToBoolean:
    def test_vocabulary(self) -> None:
        assert ToBoolean()("yes").unwrap() is True
        assert ToBoolean()(" OFF ").unwrap() is False

    def test_numbers(self) -> None:
        assert ToBoolean()(0).unwrap() is False
        assert ToBoolean()(2).unwrap() is True

    def test_unknown_word(self) -> None:
        assert ToBoolean()("maybe").is_err()


class TestCoercionFor:
    def test_scalar_targets(self) -> None:
        assert isinstance(coercion_for(FieldType.INTEGER), ToInteger)
        assert coercion_for(FieldType.STRING).target is FieldType.STRING

    def test_structured_targets_have_none(self) -> None:
        assert coercion_for(FieldType.OBJECT) is None
        assert coercion_for(FieldType.ARRAY) is None
        assert coercion_for(FieldType.ID) is None
