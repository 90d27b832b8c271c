"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: owns the engine and re-creates it when the event loop changes
2. Base: declarative base shared by all ORM models
3. Database: session factory handed to repositories through the DI container

SQLite URLs (used by the test suite) get a StaticPool so every session sees the
same in-memory database; every other URL gets a sized connection pool.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class Base(DeclarativeBase):
    pass


class AsyncEngineManager:
    """
    Manages a SQLAlchemy async engine with event loop awareness.

    Ensures the engine is always bound to the current event loop to prevent
    "Task got Future attached to a different loop" errors (TestClient and
    pytest-asyncio both run their own loops).
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop running, create engine without loop tracking
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

        if self._loop is not current_loop:
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, dropping old engine')
                self._session_maker = None
            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._loop = current_loop

        return self._engine  # type: ignore[return-value]

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._loop = None
        self._session_maker = None

    def _create_engine(self) -> AsyncEngine:
        if self.url.startswith('sqlite'):
            return create_async_engine(
                self.url,
                echo=False,
                connect_args={'check_same_thread': False},
                poolclass=StaticPool,
            )
        return create_async_engine(
            self.url,
            echo=False,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
        )


class Database:
    """
    Database handle for the dependency injection container

    Repositories receive `database.session` as their session factory and open
    one session per repository call.
    """

    def __init__(self, url: str | None = None) -> None:
        self._engine_manager = AsyncEngineManager(url or settings.DATABASE_URL_ASYNC)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine_manager.get_engine()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session context manager; rolls back automatically on exception"""
        session_maker = self._engine_manager.get_session_maker()
        async with session_maker() as session:
            yield session

    async def create_tables(self) -> None:
        # Models must be imported so their tables are registered on Base.metadata
        from src.service.marketplace.driven_adapter.model import product_model, user_model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        Logger.base.info('🗄️  [DB] Tables ready')

    async def dispose(self) -> None:
        await self._engine_manager.dispose()
