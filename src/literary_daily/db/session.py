# ABOUTME: Async engine and session lifecycle for the daily_content store.
# ABOUTME: Commit failures surface as StoreError; one engine is shared per process.

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from literary_daily.config import Settings, get_settings
from literary_daily.db.models import Base
from literary_daily.errors import StoreError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

log = structlog.get_logger()

_engine: "AsyncEngine | None" = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine(settings: Settings | None = None) -> "AsyncEngine":
    """Get or create the shared async engine.

    Settings are only read on first use; later calls return the cached engine.
    """
    global _engine
    if _engine is None:
        settings = settings or get_settings()
        _engine = create_async_engine(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_pool_max_overflow,
            pool_pre_ping=True,
            echo=settings.log_level == "DEBUG",
        )
        log.info("db_engine_created", host=settings.db_host, db=settings.db_name)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _session_factory


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession]:
    """Open a session that commits on clean exit and rolls back otherwise.

    Errors raised inside the block propagate unchanged. A failed commit
    is rolled back and raised as StoreError.
    """
    session = get_session_factory()()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    else:
        try:
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            log.error("db_commit_failed", error=str(e))
            raise StoreError(f"Database commit error: {e}") from e
    finally:
        await session.close()


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database sessions."""
    async with get_session() as session:
        yield session


async def init_db() -> None:
    """Create the daily_content table if it does not exist."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("db_tables_ready", tables=sorted(Base.metadata.tables))


async def close_db() -> None:
    """Dispose of the shared engine so the next use builds a fresh one."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        log.info("db_engine_disposed")
        _engine = None
        _session_factory = None
