"""Database connection and session management.

Provides the async engine, session factory and schema helpers. PostgreSQL
(asyncpg) is the production target; SQLite (aiosqlite) is supported for
tests and local runs.
"""

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from dischord.config import Settings
from dischord.persistence.tables import metadata


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    url = make_url(settings.database_url)

    if url.get_backend_name() == "sqlite":
        kwargs = {}
        if url.database in (None, "", ":memory:"):
            # Every connection to :memory: is a fresh database, so share one
            kwargs["poolclass"] = StaticPool
        engine = create_async_engine(url, echo=settings.debug, **kwargs)
        _enable_sqlite_foreign_keys(engine)
        return engine

    return create_async_engine(
        url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement, which SQLite disables per connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet.

    Args:
        engine: Database engine
    """
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def truncate_all(engine: AsyncEngine) -> None:
    """Remove every row from every table. Intended for tests.

    Args:
        engine: Database engine
    """
    async with engine.begin() as conn:
        for table in reversed(metadata.sorted_tables):
            await conn.execute(table.delete())
