"""Integration tests for the SQL-backed Store.

The production persistence provider is used unmocked, pointed at a SQLite
file through the same environment variables a deployment would set.
"""

import asyncio

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from dischord.config import DatabaseSettings, Settings
from dischord.domain.error import AlreadyExistsError, InternalError
from dischord.domain.service import (
    PostService,
    ServerService,
    UserService,
    VoteService,
)
from dischord.domain.store import Store
from dischord.domain.value import PostId, UserId
from dischord.persistence.database import create_engine, create_schema
from dischord.persistence.sql_store import (
    SqlStore,
    is_duplicate_key,
    is_foreign_key_violation,
)
from tests.di import build_test_container
from tests.factories import make_user
from tests.harness import create_env_fixture

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


@pytest.fixture(autouse=True)
def sqlite_env(monkeypatch, tmp_path):
    """Point the production store at a throwaway SQLite file."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'integration.db'}"
    monkeypatch.setenv("STORE__BACKEND", "sql")
    monkeypatch.setenv("DATABASE__URL", url)
    return url


class TestSqlStoreThroughContainer:
    """The DI container wires a working SqlStore."""

    @pytest.mark.asyncio
    async def test_container_provides_sql_store(self, integration_env):
        """STORE__BACKEND=sql selects the SQL backend."""
        store = await integration_env.get(Store)

        assert isinstance(store, SqlStore)
        assert store.dialect == "sqlite"

    @pytest.mark.asyncio
    async def test_services_round_trip(self, integration_env):
        """Services work end to end against the database."""
        # Arrange
        user_service = await integration_env.get(UserService)
        server_service = await integration_env.get(ServerService)
        post_service = await integration_env.get(PostService)
        vote_service = await integration_env.get(VoteService)
        owner = await user_service.create_user("ada", "ada@example.com")
        server = await server_service.create_server("general", owner.id)

        # Act
        post = await post_service.create_post(server.id, owner.id, "Hello", "World")
        voted = await vote_service.put_vote(server.id, post.id, owner.id, 1)

        # Assert
        assert voted.votes == 1
        fetched = await server_service.get_server(server.id)
        assert fetched.member_ids == [owner.id]
        assert fetched.post_ids == [post.id]

    @pytest.mark.asyncio
    async def test_data_survives_container_restart(self):
        """State written by one container is visible to the next."""
        first = build_test_container(unmock={"persistence"})
        async with first() as request_container:
            user_service = await request_container.get(UserService)
            user = await user_service.create_user("ada", "ada@example.com")
        await first.close()

        second = build_test_container(unmock={"persistence"})
        async with second() as request_container:
            user_service = await request_container.get(UserService)
            assert await user_service.get_user(user.id) == user
        await second.close()


class TestSchema:
    """Tests for schema management."""

    @pytest.mark.asyncio
    async def test_create_schema_is_repeatable(self, sqlite_env):
        """Creating the schema twice is harmless."""
        engine = create_engine(
            Settings(environment="test", database=DatabaseSettings(url=sqlite_env))
        )
        try:
            await create_schema(engine)
            await create_schema(engine)
        finally:
            await engine.dispose()


class TestSharedMemoryDatabase:
    """A :memory: database shares one connection between all callers."""

    @pytest.mark.asyncio
    async def test_failed_writes_do_not_undo_concurrent_ones(self):
        """A rolled back duplicate create leaves other callers' creates intact."""
        # Arrange
        engine = create_engine(
            Settings(
                environment="test",
                database=DatabaseSettings(url="sqlite+aiosqlite:///:memory:"),
            )
        )
        try:
            await create_schema(engine)
            store = SqlStore(engine)
            await store.create_user(make_user("dup"))

            # Act
            calls = []
            for i in range(50):
                calls.append(store.create_user(make_user(f"u{i}")))
                calls.append(store.create_user(make_user("dup")))
            results = await asyncio.gather(*calls, return_exceptions=True)

            # Assert
            created = [r for r in results if not isinstance(r, Exception)]
            failed = [r for r in results if isinstance(r, Exception)]
            assert len(created) == 50
            assert all(isinstance(f, AlreadyExistsError) for f in failed)
            for user in created:
                assert await store.get_user(user.id) == user
        finally:
            await engine.dispose()


class TestBackendFailure:
    """Unexpected database failures surface as InternalError."""

    @pytest.mark.asyncio
    async def test_missing_table_raises_internal_error(self, sqlite_env):
        """A query against a dropped table is an internal failure."""
        engine = create_engine(
            Settings(environment="test", database=DatabaseSettings(url=sqlite_env))
        )
        try:
            await create_schema(engine)
            store = SqlStore(engine)
            async with engine.begin() as conn:
                await conn.execute(text("DROP TABLE votes"))

            with pytest.raises(InternalError):
                await store.get_vote(PostId("p1"), UserId("u1"))
        finally:
            await engine.dispose()


class _DriverError(Exception):
    def __init__(self, message: str, sqlstate: str | None = None):
        super().__init__(message)
        self.sqlstate = sqlstate


class TestIntegrityErrorClassification:
    """Backend errors are classified the same way for both drivers."""

    @pytest.mark.parametrize(
        "orig",
        [
            _DriverError("duplicate key value", sqlstate="23505"),
            _DriverError("UNIQUE constraint failed: users.id"),
        ],
    )
    def test_duplicate_key(self, orig):
        """PostgreSQL SQLSTATE and SQLite messages both mean duplicate key."""
        error = IntegrityError("INSERT", {}, orig)

        assert is_duplicate_key(error)
        assert not is_foreign_key_violation(error)

    @pytest.mark.parametrize(
        "orig",
        [
            _DriverError("violates foreign key constraint", sqlstate="23503"),
            _DriverError("FOREIGN KEY constraint failed"),
        ],
    )
    def test_foreign_key_violation(self, orig):
        """PostgreSQL SQLSTATE and SQLite messages both mean missing reference."""
        error = IntegrityError("INSERT", {}, orig)

        assert is_foreign_key_violation(error)
        assert not is_duplicate_key(error)
