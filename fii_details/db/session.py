"""
Database session management.

Provides an async SQLAlchemy engine and a session factory.  The store never
opens sessions itself.  These are the hooks for the embedding application::

    setup_logging()
    await init_db(engine)            # optional, from fii_details.db.base
    async with AsyncSessionLocal() as session:
        store = FundDetailStore(session)

``get_db()`` yields the same kind of session for dependency-injection
frameworks.  Importing this module registers the table models through
``fii_details.db.base``.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from fii_details.core.config import Settings, settings
from fii_details.db import base  # noqa: F401


def build_engine(config: Settings = settings) -> AsyncEngine:
    """Create the async engine described by ``config`` (SQLite or PostgreSQL)."""
    if config.USE_SQLITE:
        kwargs = {"connect_args": {"check_same_thread": False}}
        if not config.SQLITE_PATH:
            # StaticPool makes every connection share the SAME in-memory
            # database; otherwise each connection gets its own empty one.
            kwargs["poolclass"] = StaticPool
        return create_async_engine(
            config.DATABASE_URL, echo=config.DEBUG, future=True, **kwargs
        )

    return create_async_engine(
        config.DATABASE_URL,
        echo=config.DEBUG,
        future=True,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
        pool_timeout=config.DB_POOL_TIMEOUT,
        pool_recycle=config.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: attribute access after commit must not trigger
    # a lazy load, which async sessions cannot do.
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine()
AsyncSessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session that is closed when the caller is done."""
    async with AsyncSessionLocal() as session:
        yield session
