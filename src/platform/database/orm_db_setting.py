"""
SQLAlchemy schema management

Request handling uses raw SQL through asyncpg; SQLAlchemy only owns the
declarative schema (table definitions, constraints, indexes) and creates or
drops it for the reset script and integration tests.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class Base(DeclarativeBase):
    pass


def create_schema_engine() -> AsyncEngine:
    return create_async_engine(settings.DATABASE_URL_ASYNC, echo=False, future=True)


async def create_db_and_tables(*, drop_existing: bool = False) -> None:
    """Create database tables if they don't exist"""
    # Register models on Base.metadata
    import src.service.livestream.driven_adapter.model  # noqa: F401

    engine = create_schema_engine()
    try:
        async with engine.begin() as conn:
            if drop_existing:
                Logger.base.warning('🗑️ [DB] Dropping all tables')
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        Logger.base.info(f'🗄️ [DB] Tables ready: {sorted(Base.metadata.tables)}')
    finally:
        await engine.dispose()
