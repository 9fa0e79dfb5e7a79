"""Database Module with Result-based Error Handling

Async SQLAlchemy engine with a fixed connect timeout, session management,
and query helpers that return Results instead of raising.
"""
from typing import AsyncIterator, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from core.config import settings
from core.errors import (
    AppError,
    Ok,
    Err,
    Result,
    not_found,
    DatabaseErrorMapper,
)
from core.logging import db_logger

T = TypeVar("T")

log = db_logger()


def engine_options(url: str, timeout: float) -> dict:
    """Engine keyword arguments for ``url`` with a connect timeout of ``timeout`` seconds."""
    options: dict = {"echo": settings.LOG_SQL}
    if url.startswith("sqlite"):
        # sqlite3 / aiosqlite: seconds to wait on a locked database file
        options["connect_args"] = {"timeout": timeout}
    elif "asyncpg" in url:
        options["connect_args"] = {"timeout": timeout}
        options.update({"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10, "pool_timeout": timeout})
    else:
        options["connect_args"] = {"connect_timeout": int(timeout)}
        options.update({"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10, "pool_timeout": timeout})
    return options


engine = create_async_engine(
    settings.DATABASE_URL,
    **engine_options(settings.DATABASE_URL, settings.DATABASE_TIMEOUT),
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()

_db_mapper = DatabaseErrorMapper("database")


async def get_db() -> AsyncIterator[AsyncSession]:
    """Dependency that yields a database session."""
    async with AsyncSessionLocal() as session:
        yield session


async def fetch_one(
    session: AsyncSession,
    model: type[T],
    id: str,
    entity_name: str | None = None,
) -> Result[T, AppError]:
    """Fetch single entity by primary key.

    Returns:
        Ok(entity) if found
        Err(not_found) if not found
        Err(db_error) on database failure
    """
    name = entity_name or model.__name__
    try:
        entity = await session.get(model, id)
        if entity is None:
            return not_found(name, id, origin="database.fetch_one")
        return Ok(entity)
    except SQLAlchemyError as e:
        log.error("fetch_failed", model=name, error=str(e))
        return Err(_db_mapper.map_exception(e))


async def create_entity(session: AsyncSession, entity: T) -> Result[T, AppError]:
    """Insert entity and commit."""
    try:
        session.add(entity)
        await session.commit()
        await session.refresh(entity)
        return Ok(entity)
    except SQLAlchemyError as e:
        await session.rollback()
        log.error("create_failed", model=type(entity).__name__, error=str(e))
        return Err(_db_mapper.map_exception(e))


async def update_entity(session: AsyncSession, entity: T) -> Result[T, AppError]:
    """Commit pending changes to entity."""
    try:
        await session.commit()
        await session.refresh(entity)
        return Ok(entity)
    except SQLAlchemyError as e:
        await session.rollback()
        log.error("update_failed", model=type(entity).__name__, error=str(e))
        return Err(_db_mapper.map_exception(e))
