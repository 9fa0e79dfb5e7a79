"""Tests for semantic field types."""

import pytest

from core.validation.types import FieldType

HEX_24 = "5f1d7c2e9a3b4c5d6e7f8a9b"


class TestFieldTypeParse:
    def test_canonical_tags(self) -> None:
        assert FieldType.parse("string") is FieldType.STRING
        assert FieldType.parse("id") is FieldType.ID

    def test_aliases(self) -> None:
        assert FieldType.parse("int") is FieldType.INTEGER
        assert FieldType.parse("sequence") is FieldType.ARRAY
        assert FieldType.parse("identifier") is FieldType.ID
        assert FieldType.parse("Bool") is FieldType.BOOLEAN

    def test_member_passes_through(self) -> None:
        assert FieldType.parse(FieldType.FLOAT) is FieldType.FLOAT

    def test_unknown_tag(self) -> None:
        with pytest.raises(ValueError, match="unknown field type"):
            FieldType.parse("date")

    def test_str_is_tag(self) -> None:
        assert str(FieldType.NUMBER) == "number"
        assert f"{FieldType.NUMBER}" == "number"


class TestFieldTypeMatches:
    def test_string(self) -> None:
        assert FieldType.STRING.matches("abc")
        assert not FieldType.STRING.matches(1)

    def test_integer_excludes_bool_and_float(self) -> None:
        assert FieldType.INTEGER.matches(3)
        assert not FieldType.INTEGER.matches(True)
        assert not FieldType.INTEGER.matches(3.5)

    def test_number_and_float_accept_int_and_float(self) -> None:
        for tag in (FieldType.NUMBER, FieldType.FLOAT):
            assert tag.matches(3)
            assert tag.matches(3.5)
            assert not tag.matches(False)
            assert not tag.matches("3")

    def test_boolean(self) -> None:
        assert FieldType.BOOLEAN.matches(False)
        assert not FieldType.BOOLEAN.matches(0)

    def test_object_and_array(self) -> None:
        assert FieldType.OBJECT.matches({"a": 1})
        assert not FieldType.OBJECT.matches([1])
        assert FieldType.ARRAY.matches([1])
        assert FieldType.ARRAY.matches((1,))
        assert not FieldType.ARRAY.matches("abc")

    def test_id_pattern_bounds(self) -> None:
        assert FieldType.ID.matches(HEX_24)
        assert FieldType.ID.matches(HEX_24.upper())
        assert FieldType.ID.matches("a" * 80)
        assert not FieldType.ID.matches("a" * 23)
        assert not FieldType.ID.matches("a" * 81)
        assert not FieldType.ID.matches("g" * 24)
        assert not FieldType.ID.matches(12345)

    def test_numeric_tags(self) -> None:
        assert {t for t in FieldType if t.is_numeric} == {
            FieldType.NUMBER, FieldType.INTEGER, FieldType.FLOAT,
        }
