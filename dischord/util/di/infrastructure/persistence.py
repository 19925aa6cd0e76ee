"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire

from dischord.config import Settings
from dischord.domain.store import Store
from dischord.persistence.database import create_engine, create_schema
from dischord.persistence.inmemory import InMemoryStore
from dischord.persistence.sql_store import SqlStore
from dischord.util.di.base import ProviderBase
from dischord.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider.

    One Store is shared by the whole application; its backend is chosen by
    STORE__BACKEND.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_store(self, settings: Settings) -> AsyncIterator[Store]:
        """Provide the application Store.

        The SQL backend creates missing tables on startup and disposes its
        engine when the container closes.
        """
        if settings.store.backend == "memory":
            logfire.info("Using in-memory store")
            yield InMemoryStore()
            return

        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        try:
            await create_schema(engine)
            logfire.info("Using SQL store", dialect=engine.dialect.name)
            yield SqlStore(engine)
        finally:
            await engine.dispose()
            logfire.info("Database engine disposed")
