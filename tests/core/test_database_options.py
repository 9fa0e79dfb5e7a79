"""Tests for engine options and the database error mapper."""

from sqlalchemy.exc import IntegrityError, OperationalError

from core.database import engine_options
from core.errors import DatabaseErrorMapper, ErrorCode


class TestEngineOptions:
    def test_sqlite_uses_lock_timeout(self) -> None:
        options = engine_options("sqlite+aiosqlite:///./x.db", 5.0)
        assert options["connect_args"] == {"timeout": 5.0}
        assert "pool_size" not in options

    def test_asyncpg(self) -> None:
        options = engine_options("postgresql+asyncpg://u@h/db", 3.0)
        assert options["connect_args"] == {"timeout": 3.0}
        assert options["pool_timeout"] == 3.0

    def test_other_drivers(self) -> None:
        options = engine_options("mysql+aiomysql://u@h/db", 2.5)
        assert options["connect_args"] == {"connect_timeout": 2}
        assert options["pool_pre_ping"] is True


class TestDatabaseErrorMapper:
    def test_unique_violation(self) -> None:
        exc = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: documents.id"))
        assert DatabaseErrorMapper().map_exception(exc).code is ErrorCode.E4011_DUPLICATE_KEY

    def test_connection_failure(self) -> None:
        exc = OperationalError("SELECT 1", {}, Exception("unable to open database file"))
        assert DatabaseErrorMapper().map_exception(exc).code is ErrorCode.E4001_CONNECTION_FAILED

    def test_other_operational_error(self) -> None:
        exc = OperationalError("SELECT 1", {}, Exception("database is locked"))
        assert DatabaseErrorMapper().map_exception(exc).code is ErrorCode.E4003_TRANSACTION_FAILED

    def test_non_database_exception(self) -> None:
        error = DatabaseErrorMapper("store").map_exception(KeyError("x"))
        assert error.code is ErrorCode.E9001_UNEXPECTED_ERROR
        assert error.context.origin == "store"
