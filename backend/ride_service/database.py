"""
Ride Service Backend: Database Lifecycle Management
=====================================================

What:  Owns the async SQLAlchemy engine, session factory and table creation.
Why:   The store must connect lazily and idempotently: the first operation
       creates the engine and the `rides` table, every later call is a no-op.
How:   `Database.ensure_ready()` is guarded by a one-shot `_ready` flag and an
       asyncio lock so concurrent first requests initialize exactly once.
Who:   Owned by RideStore; no module-level engine exists.

Connection Strategy:
    In-memory SQLite (the default):
        A single shared connection (StaticPool). Every new connection to
        `:memory:` would otherwise open a separate, empty database.
        Sessions on that connection are serialized by `_shared_conn_lock`;
        interleaved transactions would commit or roll back each other.
    File SQLite:
        Default pool; `check_same_thread` disabled for aiosqlite.
    Server databases:
        pool_size / max_overflow / pool_pre_ping from settings,
        pool_recycle=3600 to drop stale connections.
"""

import asyncio
import logging
from contextlib import asynccontextmanager, nullcontext
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from ride_service.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


class Database:
    """
    Store-owned lifecycle object wrapping the engine and session factory.

    State:
        _engine / _session_factory: None until ensure_ready() runs
        _ready: one-shot flag; True once the schema exists
        _shared_conn_lock: held for a whole session when all sessions share
            one connection (in-memory SQLite)

    Calling ensure_ready() any number of times has the same observable
    effect as calling it once.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._ready = False
        self._init_lock = asyncio.Lock()
        self._shared_conn_lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    def _create_engine(self) -> AsyncEngine:
        url = self.config.database_url
        echo = self.config.log_level == "DEBUG"

        if self.config.is_in_memory:
            return create_async_engine(
                url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
                echo=echo,
            )
        if self.config.is_sqlite:
            return create_async_engine(
                url,
                connect_args={"check_same_thread": False},
                echo=echo,
            )
        return create_async_engine(
            url,
            pool_size=self.config.db_pool_size,
            max_overflow=self.config.db_max_overflow,
            pool_pre_ping=self.config.db_pool_pre_ping,
            pool_recycle=3600,
            echo=echo,
        )

    async def ensure_ready(self) -> None:
        """
        Create the engine and the schema on first use.

        What:    Lazily connects and runs CREATE TABLE IF NOT EXISTS.
        When:    At the top of every RideStore operation.
        How:     Fast path returns immediately once `_ready` is set; the lock
                 only matters for the very first concurrent callers.
        """
        if self._ready:
            return

        async with self._init_lock:
            if self._ready:
                return

            # Import models so they register with Base.metadata
            from ride_service.models import ride  # noqa: F401

            if self._engine is None:
                self._engine = self._create_engine()
                self._session_factory = async_sessionmaker(
                    self._engine,
                    class_=AsyncSession,
                    expire_on_commit=False,
                )

            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            self._ready = True
            logger.info("Ride store initialized (%s)", self._engine.url.render_as_string(hide_password=True))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session that commits on success and rolls back on error.

        Raises:
            Any database exception, after rollback, for the caller to map.
        """
        await self.ensure_ready()
        assert self._session_factory is not None

        guard = self._shared_conn_lock if self.config.is_in_memory else nullcontext()
        async with guard:
            async with self._session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

    async def dispose(self) -> None:
        """
        Close all pooled connections and reset to the uninitialized state.

        An in-memory database is discarded with its connection; the next
        operation starts from an empty table.
        """
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Ride store engine disposed")
        self._engine = None
        self._session_factory = None
        self._ready = False
