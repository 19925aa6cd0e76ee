"""Test configuration and fixtures."""

import os

import logfire
import pytest_asyncio

from dischord.config import DatabaseSettings, Settings
from dischord.persistence.database import create_engine, create_schema
from dischord.persistence.inmemory import InMemoryStore
from dischord.persistence.sql_store import SqlStore

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request, tmp_path):
    """Every Store backend, so one suite covers both.

    The SQL backend runs against a throwaway SQLite file unless
    TEST_DATABASE_URL points at another database (e.g. PostgreSQL), which is
    then emptied before each test.
    """
    if request.param == "memory":
        yield InMemoryStore()
        return

    url = os.environ.get("TEST_DATABASE_URL") or (
        f"sqlite+aiosqlite:///{tmp_path / 'dischord.db'}"
    )
    settings = Settings(environment="test", database=DatabaseSettings(url=url))
    engine = create_engine(settings)
    try:
        await create_schema(engine)
        store = SqlStore(engine)
        await store.truncate_all()
        yield store
    finally:
        await engine.dispose()
