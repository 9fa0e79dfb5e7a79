"""Error Boundary Mappers

Exceptions raised below a module boundary are mapped to AppError once, at
the boundary, so callers only ever see Result values.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from .builders import (
    db_connection_failed,
    duplicate_key,
    internal_error,
    transaction_failed,
)
from .types import AppError

T = TypeVar("T")


class ErrorMapper(ABC, Generic[T]):
    """Abstract base for error mappers at module boundaries."""

    @abstractmethod
    def map_exception(self, exc: Exception) -> AppError:
        """Map an exception raised below the boundary to an AppError."""


class DatabaseErrorMapper(ErrorMapper[T]):
    """Maps SQLAlchemy exceptions to database error codes."""

    def __init__(self, origin: str = "database"):
        self.origin = origin

    def map_exception(self, exc: Exception) -> AppError:
        if isinstance(exc, IntegrityError):
            message = str(exc.orig) if exc.orig else str(exc)
            if "unique" in message.lower() or "duplicate" in message.lower():
                return duplicate_key("record", origin=self.origin).error
            return transaction_failed(message, origin=self.origin).error
        if isinstance(exc, OperationalError):
            message = str(exc.orig) if exc.orig else str(exc)
            if "connect" in message.lower() or "unable to open" in message.lower():
                return db_connection_failed(message, origin=self.origin).error
            return transaction_failed(message, origin=self.origin).error
        if isinstance(exc, SQLAlchemyError):
            return transaction_failed(str(exc), origin=self.origin).error

        return internal_error(
            f"Database error: {exc}",
            origin=self.origin,
            cause=exc,
        ).error
