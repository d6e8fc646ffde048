"""
Database configuration and session management
"""
from typing import AsyncIterator, Optional

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from catalog_api.config import Settings
from catalog_api.utils.logger import get_logger

logger = get_logger(__name__)

# Base class for models
Base = declarative_base()


def _get_async_url(url: str) -> str:
    """Convert database URL to async variant"""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return url


class Database:
    """
    Process-wide storage handle: one engine and session factory.

    Built once at startup, handed to request handlers through the
    ``get_database`` dependency and disposed exactly once on shutdown.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        self.url = _get_async_url(url)
        self.engine: AsyncEngine = create_async_engine(
            self.url, echo=echo, future=True, **engine_kwargs
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine_kwargs = {}
        # SQLite doesn't support pool_size
        if not _get_async_url(settings.DATABASE_URL).startswith("sqlite"):
            engine_kwargs["pool_size"] = settings.DB_POOL_SIZE
            engine_kwargs["max_overflow"] = settings.DB_MAX_OVERFLOW
        return cls(settings.DATABASE_URL, echo=settings.DEBUG, **engine_kwargs)

    @property
    def closed(self) -> bool:
        return self._closed

    async def ping(self) -> None:
        """Round-trip a trivial statement; raises if the database is unreachable"""
        if self._closed:
            raise RuntimeError("Database connection has been closed")
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def connect(self) -> None:
        await self.ping()
        logger.info("Database connection has been established successfully")

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def close(self) -> None:
        """Dispose the engine; later calls are no-ops"""
        if self._closed:
            return
        self._closed = True
        await self.engine.dispose()
        logger.info("Database connection closed")


def get_database(request: Request) -> Database:
    """Dependency returning the application's Database"""
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database has not been configured on the application")
    return database


async def get_db(
    database: Database = Depends(get_database),
) -> AsyncIterator[AsyncSession]:
    """Dependency for getting database session"""
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
