"""Explicit Coercion Rules

Coercion named by a field rule's ``coerce`` property. Unlike the automatic
numeric coercion applied to numeric-typed fields, these always run, after
the type check, and may change the value's type.

Each rule returns a Result so the evaluator decides how a failed
conversion is reported.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from core.errors import AppError, Err, ErrorCode, Ok, Result

from .numeric import NumberParseError, parse_number
from .types import FieldType

T = TypeVar("T")


def _cannot_coerce(value: Any, target: FieldType) -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E2004_INVALID_TYPE,
        message=f"Cannot coerce {type(value).__name__} to {target}",
        metadata={"target": str(target)},
    ))


@dataclass(frozen=True, slots=True)
class CoercionRule(ABC, Generic[T]):
    """Conversion of an arbitrary decoded value to one target type."""

    @property
    @abstractmethod
    def target(self) -> FieldType:
        """Tag of the type produced."""

    @abstractmethod
    def coerce(self, value: Any) -> Result[T, AppError]:
        """Convert ``value``; Err when it has no sensible conversion."""

    def __call__(self, value: Any) -> Result[T, AppError]:
        return self.coerce(value)


@dataclass(frozen=True, slots=True)
class ToString(CoercionRule[str]):
    """Render scalars as strings; booleans as ``true``/``false``."""

    @property
    def target(self) -> FieldType:
        return FieldType.STRING

    def coerce(self, value: Any) -> Result[str, AppError]:
        if isinstance(value, str):
            return Ok(value)
        if isinstance(value, bool):
            return Ok("true" if value else "false")
        if isinstance(value, (int, float)):
            return Ok(str(value))
        return _cannot_coerce(value, self.target)


@dataclass(frozen=True, slots=True)
class ToNumber(CoercionRule[int | float]):
    """Numbers pass through, strings go through the numeric parser."""

    @property
    def target(self) -> FieldType:
        return FieldType.NUMBER

    def coerce(self, value: Any) -> Result[int | float, AppError]:
        if isinstance(value, bool):
            return Ok(int(value))
        if isinstance(value, (int, float)):
            return Ok(value)
        if isinstance(value, str):
            try:
                return Ok(parse_number(value))
            except NumberParseError as e:
                return Err(AppError(
                    code=ErrorCode.E2002_INVALID_FORMAT,
                    message=str(e),
                    metadata={"target": str(self.target)},
                ))
        return _cannot_coerce(value, self.target)


@dataclass(frozen=True, slots=True)
class ToInteger(CoercionRule[int]):
    """Truncate numbers and numeric strings to int."""

    @property
    def target(self) -> FieldType:
        return FieldType.INTEGER

    def coerce(self, value: Any) -> Result[int, AppError]:
        return ToNumber().coerce(value).and_then(self._to_int)

    def _to_int(self, number: int | float) -> Result[int, AppError]:
        try:
            return Ok(int(number))
        except (OverflowError, ValueError):
            # inf and nan have no integer value
            return _cannot_coerce(number, self.target)


@dataclass(frozen=True, slots=True)
class ToFloat(CoercionRule[float]):

    @property
    def target(self) -> FieldType:
        return FieldType.FLOAT

    def coerce(self, value: Any) -> Result[float, AppError]:
        return ToNumber().coerce(value).and_then(self._to_float)

    def _to_float(self, number: int | float) -> Result[float, AppError]:
        try:
            return Ok(float(number))
        except OverflowError:
            return Err(AppError(
                code=ErrorCode.E2002_INVALID_FORMAT,
                message="Number is out of range for float",
                metadata={"target": str(self.target)},
            ))


@dataclass(frozen=True, slots=True)
class ToBoolean(CoercionRule[bool]):
    """Coerce strings and numbers to bool.

    Truthy strings: "true", "1", "yes", "on", "y"
    Falsy strings: "false", "0", "no", "off", "n"
    """
    true_values: frozenset[str] = frozenset({"true", "1", "yes", "on", "y"})
    false_values: frozenset[str] = frozenset({"false", "0", "no", "off", "n"})

    @property
    def target(self) -> FieldType:
        return FieldType.BOOLEAN

    def coerce(self, value: Any) -> Result[bool, AppError]:
        if isinstance(value, bool):
            return Ok(value)
        if isinstance(value, (int, float)):
            return Ok(value != 0)
        if isinstance(value, str):
            lower = value.strip().lower()
            if lower in self.true_values:
                return Ok(True)
            if lower in self.false_values:
                return Ok(False)
            return Err(AppError(
                code=ErrorCode.E2002_INVALID_FORMAT,
                message=f"Cannot coerce '{value}' to boolean",
                metadata={"target": str(self.target)},
            ))
        return _cannot_coerce(value, self.target)


_COERCIONS: dict[FieldType, CoercionRule] = {
    FieldType.STRING: ToString(),
    FieldType.NUMBER: ToNumber(),
    FieldType.INTEGER: ToInteger(),
    FieldType.FLOAT: ToFloat(),
    FieldType.BOOLEAN: ToBoolean(),
}


def coercion_for(target: FieldType) -> CoercionRule | None:
    """Coercion producing ``target``, or None when the type has none."""
    return _COERCIONS.get(target)
