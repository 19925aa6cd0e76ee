"""Relational implementation of Store.

Each operation runs in one short transaction. Primary and foreign keys
enforce uniqueness and existence in the database; the explicit existence
checks only exist to report which entity is missing. Relation inserts are
upsert-or-ignore, votes are upsert-or-overwrite.
"""

import asyncio
from contextlib import asynccontextmanager, nullcontext
from typing import AsyncIterator

import logfire
from sqlalchemy import Table, delete, exists, func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool

from dischord.domain.error import AlreadyExistsError, InternalError, NotFoundError
from dischord.domain.model import (
    Friendship,
    Membership,
    Message,
    Post,
    Server,
    User,
    Vote,
)
from dischord.domain.store import Store
from dischord.domain.value import PostId, ServerId, UserId, VoteValue
from dischord.persistence.database import create_session_factory, truncate_all as _truncate
from dischord.persistence.mappers import (
    message_to_dict,
    post_to_dict,
    row_to_message,
    row_to_post,
    row_to_server,
    row_to_user,
    row_to_vote,
    server_to_dict,
    user_to_dict,
)
from dischord.persistence.tables import (
    friends_table,
    messages_table,
    posts_table,
    server_members_table,
    servers_table,
    users_table,
    votes_table,
)
from dischord.util.error import ConfigurationError

# SQLSTATE codes reported by PostgreSQL drivers
_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"


def _sqlstate(error: IntegrityError) -> str | None:
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_duplicate_key(error: IntegrityError) -> bool:
    """Report whether an integrity error is a unique/primary key violation."""
    return (
        _sqlstate(error) == _UNIQUE_VIOLATION
        or "UNIQUE constraint failed" in str(error.orig)
    )


def is_foreign_key_violation(error: IntegrityError) -> bool:
    """Report whether an integrity error is a foreign key violation."""
    return (
        _sqlstate(error) == _FOREIGN_KEY_VIOLATION
        or "FOREIGN KEY constraint failed" in str(error.orig)
    )


class SqlStore(Store):
    """SQLAlchemy Core implementation of Store (PostgreSQL or SQLite)."""

    def __init__(self, engine: AsyncEngine) -> None:
        """Initialize store with a database engine.

        Args:
            engine: SQLAlchemy async engine

        Raises:
            ConfigurationError: If the engine's dialect has no upsert support here
        """
        self.engine = engine
        self.dialect = engine.dialect.name
        if self.dialect not in ("postgresql", "sqlite"):
            raise ConfigurationError(f"Unsupported database dialect: {self.dialect}")
        self._session_factory = create_session_factory(engine)
        # A StaticPool hands every session the same connection, so
        # transactions must not interleave on it
        self._guard = (
            asyncio.Lock()
            if isinstance(engine.sync_engine.pool, StaticPool)
            else nullcontext()
        )

    @asynccontextmanager
    async def _transaction(
        self,
        resource: str,
        identifier: str,
        references: tuple[str, str] | None = None,
    ) -> AsyncIterator[AsyncSession]:
        """Run a block in one transaction and translate backend failures.

        Duplicate keys become AlreadyExistsError for (resource, identifier).
        Foreign key violations become NotFoundError for ``references`` (the
        referenced resource and id), and any other backend failure becomes
        InternalError.
        """
        try:
            async with self._guard, self._session_factory.begin() as session:
                yield session
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise AlreadyExistsError(resource, identifier) from e
            if is_foreign_key_violation(e):
                raise NotFoundError(*(references or (resource, identifier))) from e
            logfire.error(
                "Unexpected integrity error", resource=resource, error=str(e)
            )
            raise InternalError(f"{resource} {identifier}: {e}") from e
        except (SQLAlchemyError, OSError) as e:
            logfire.error("Database failure", resource=resource, error=str(e))
            raise InternalError(f"{resource} {identifier}: {e}") from e

    def _insert(self, table: Table):
        """Dialect insert construct, which supports ON CONFLICT clauses."""
        if self.dialect == "postgresql":
            return postgresql.insert(table)
        return sqlite.insert(table)

    @staticmethod
    def _post_with_votes():
        """Select posts joined to the sum of their votes (0 when none)."""
        return (
            select(
                posts_table,
                func.coalesce(func.sum(votes_table.c.value), 0).label("votes"),
            )
            .select_from(
                posts_table.outerjoin(
                    votes_table, votes_table.c.post_id == posts_table.c.id
                )
            )
            .group_by(*posts_table.c)
        )

    async def truncate_all(self) -> None:
        """Remove every row from every table. Intended for tests."""
        await _truncate(self.engine)

    @staticmethod
    async def _exists(session: AsyncSession, table: Table, row_id: str) -> bool:
        stmt = select(exists().where(table.c.id == row_id))
        return bool(await session.scalar(stmt))

    # --- Users ---

    async def create_user(self, user: User) -> User:
        """Create a user."""
        async with self._transaction("user", user.id) as session:
            await session.execute(users_table.insert().values(**user_to_dict(user)))
        return user

    async def get_user(self, user_id: UserId) -> User:
        """Get a user by ID."""
        async with self._transaction("user", user_id) as session:
            stmt = select(users_table).where(users_table.c.id == user_id)
            row = (await session.execute(stmt)).mappings().first()
        if row is None:
            raise NotFoundError("user", user_id)
        return row_to_user(row)

    # --- Friends ---

    async def add_friend(self, user_id: UserId, friend_id: UserId) -> Friendship:
        """Record a friendship in both directions."""
        async with self._transaction(
            "friendship", f"{user_id}/{friend_id}", ("user", f"{user_id}/{friend_id}")
        ) as session:
            for uid in (user_id, friend_id):
                if not await self._exists(session, users_table, uid):
                    raise NotFoundError("user", uid)
            pairs = {(user_id, friend_id), (friend_id, user_id)}
            stmt = (
                self._insert(friends_table)
                .values([{"user_id": a, "friend_id": b} for a, b in pairs])
                .on_conflict_do_nothing()
            )
            await session.execute(stmt)
        return Friendship(user_id=user_id, friend_id=friend_id)

    async def get_friends(self, user_id: UserId) -> list[User]:
        """List a user's friends."""
        async with self._transaction("user", user_id) as session:
            stmt = (
                select(users_table)
                .select_from(
                    users_table.join(
                        friends_table, friends_table.c.friend_id == users_table.c.id
                    )
                )
                .where(friends_table.c.user_id == user_id)
            )
            rows = (await session.execute(stmt)).mappings().all()
        return [row_to_user(row) for row in rows]

    # --- Posts ---

    async def create_post(self, post: Post) -> Post:
        """Create a post."""
        async with self._transaction("post", post.id) as session:
            await session.execute(posts_table.insert().values(**post_to_dict(post)))
        return post.model_copy(update={"votes": 0})

    async def get_post(self, server_id: ServerId, post_id: PostId) -> Post:
        """Get a post with its live vote tally."""
        async with self._transaction("post", post_id) as session:
            stmt = self._post_with_votes().where(
                posts_table.c.id == post_id,
                posts_table.c.server_id == server_id,
            )
            row = (await session.execute(stmt)).mappings().first()
        if row is None:
            raise NotFoundError("post", post_id)
        return row_to_post(row)

    async def update_post(self, post: Post) -> Post:
        """Overwrite a post's title, body and updated_at."""
        async with self._transaction("post", post.id) as session:
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post.id)
                .values(title=post.title, body=post.body, updated_at=post.updated_at)
            )
            result = await session.execute(stmt)
            if result.rowcount == 0:  # type: ignore[attr-defined]
                raise NotFoundError("post", post.id)
            stmt = self._post_with_votes().where(posts_table.c.id == post.id)
            row = (await session.execute(stmt)).mappings().one()
        return row_to_post(row)

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post and its votes."""
        async with self._transaction("post", post_id) as session:
            await session.execute(
                delete(votes_table).where(votes_table.c.post_id == post_id)
            )
            result = await session.execute(
                delete(posts_table).where(posts_table.c.id == post_id)
            )
            if result.rowcount == 0:  # type: ignore[attr-defined]
                raise NotFoundError("post", post_id)

    # --- Votes ---

    async def get_vote(self, post_id: PostId, author_id: UserId) -> Vote:
        """Get an author's vote on a post."""
        identifier = f"{post_id}-{author_id}"
        async with self._transaction("vote", identifier) as session:
            stmt = select(votes_table).where(
                votes_table.c.post_id == post_id,
                votes_table.c.author_id == author_id,
            )
            row = (await session.execute(stmt)).mappings().first()
        if row is None:
            raise NotFoundError("vote", identifier)
        return row_to_vote(row)

    async def put_vote(
        self, post_id: PostId, author_id: UserId, value: VoteValue
    ) -> Vote:
        """Insert or replace an author's vote on a post."""
        identifier = f"{post_id}-{author_id}"
        async with self._transaction("vote", identifier, ("post", post_id)) as session:
            if not await self._exists(session, posts_table, post_id):
                raise NotFoundError("post", post_id)
            stmt = self._insert(votes_table).values(
                post_id=post_id, author_id=author_id, value=int(value)
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=[votes_table.c.post_id, votes_table.c.author_id],
                set_={"value": stmt.excluded.value},
            )
            await session.execute(stmt)
        return Vote(post_id=post_id, author_id=author_id, value=value)

    # --- Servers ---

    async def create_server(self, server: Server) -> Server:
        """Create a server."""
        async with self._transaction("server", server.id) as session:
            await session.execute(
                servers_table.insert().values(**server_to_dict(server))
            )
        return server.model_copy(update={"member_ids": [], "post_ids": []})

    async def get_server(self, server_id: ServerId) -> Server:
        """Get a server with its posts and members."""
        async with self._transaction("server", server_id) as session:
            stmt = select(servers_table).where(servers_table.c.id == server_id)
            row = (await session.execute(stmt)).mappings().first()
            if row is None:
                raise NotFoundError("server", server_id)
            post_ids = (
                await session.scalars(
                    select(posts_table.c.id).where(posts_table.c.server_id == server_id)
                )
            ).all()
            member_ids = (
                await session.scalars(
                    select(server_members_table.c.user_id).where(
                        server_members_table.c.server_id == server_id
                    )
                )
            ).all()
        return row_to_server(
            row,
            member_ids=[UserId(uid) for uid in member_ids],
            post_ids=[PostId(pid) for pid in post_ids],
        )

    async def join_server(self, server_id: ServerId, user_id: UserId) -> Membership:
        """Record a user's membership in a server."""
        identifier = f"{server_id}/{user_id}"
        async with self._transaction(
            "membership", identifier, ("server or user", identifier)
        ) as session:
            if not await self._exists(session, servers_table, server_id):
                raise NotFoundError("server", server_id)
            if not await self._exists(session, users_table, user_id):
                raise NotFoundError("user", user_id)
            stmt = (
                self._insert(server_members_table)
                .values(server_id=server_id, user_id=user_id)
                .on_conflict_do_nothing()
            )
            await session.execute(stmt)
        return Membership(server_id=server_id, user_id=user_id)

    async def get_server_members(self, server_id: ServerId) -> list[User]:
        """List a server's members."""
        async with self._transaction("server", server_id) as session:
            stmt = (
                select(users_table)
                .select_from(
                    users_table.join(
                        server_members_table,
                        server_members_table.c.user_id == users_table.c.id,
                    )
                )
                .where(server_members_table.c.server_id == server_id)
            )
            rows = (await session.execute(stmt)).mappings().all()
        return [row_to_user(row) for row in rows]

    # --- Messages ---

    async def create_message(self, message: Message) -> Message:
        """Append a message."""
        async with self._transaction(
            "message", message.id, ("server", message.server_id)
        ) as session:
            if not await self._exists(session, servers_table, message.server_id):
                raise NotFoundError("server", message.server_id)
            next_seq = select(
                func.coalesce(func.max(messages_table.c.seq), 0) + 1
            ).scalar_subquery()
            await session.execute(
                messages_table.insert().values(
                    **message_to_dict(message), seq=next_seq
                )
            )
        return message

    async def get_messages_by_server(self, server_id: ServerId) -> list[Message]:
        """List a server's messages, oldest first."""
        async with self._transaction("server", server_id) as session:
            stmt = (
                select(messages_table)
                .where(messages_table.c.server_id == server_id)
                .order_by(messages_table.c.created_at, messages_table.c.seq)
            )
            rows = (await session.execute(stmt)).mappings().all()
        return [row_to_message(row) for row in rows]
