"""In-memory Store implementation.

All state lives in plain dicts guarded by a single reader/writer lock per
instance: reads share the lock, writes hold it exclusively. Per-server post
and message lookups are linear scans over the respective table.
"""

from aiorwlock import RWLock

from dischord.domain.error import AlreadyExistsError, NotFoundError
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
from dischord.domain.value import MessageId, PostId, ServerId, UserId, VoteValue


class InMemoryStore(Store):
    """In-memory implementation of Store."""

    def __init__(self) -> None:
        self._lock = RWLock()
        self._users: dict[UserId, User] = {}
        self._servers: dict[ServerId, Server] = {}
        self._posts: dict[PostId, Post] = {}
        self._votes: dict[tuple[PostId, UserId], Vote] = {}
        self._messages: dict[MessageId, Message] = {}
        # user_id -> friend_id -> relation, both directions stored
        self._friends: dict[UserId, dict[UserId, Friendship]] = {}
        # server_id -> user_id -> relation, in join order
        self._members: dict[ServerId, dict[UserId, Membership]] = {}

    # --- Users ---

    async def create_user(self, user: User) -> User:
        """Create a user."""
        async with self._lock.writer_lock:
            if user.id in self._users:
                raise AlreadyExistsError("user", user.id)
            self._users[user.id] = user
            return user

    async def get_user(self, user_id: UserId) -> User:
        """Get a user by ID."""
        async with self._lock.reader_lock:
            return self._get_user(user_id)

    # --- Friends ---

    async def add_friend(self, user_id: UserId, friend_id: UserId) -> Friendship:
        """Record a friendship in both directions."""
        async with self._lock.writer_lock:
            self._get_user(user_id)
            self._get_user(friend_id)
            self._friends.setdefault(user_id, {}).setdefault(
                friend_id, Friendship(user_id=user_id, friend_id=friend_id)
            )
            self._friends.setdefault(friend_id, {}).setdefault(
                user_id, Friendship(user_id=friend_id, friend_id=user_id)
            )
            return self._friends[user_id][friend_id]

    async def get_friends(self, user_id: UserId) -> list[User]:
        """List a user's friends."""
        async with self._lock.reader_lock:
            friend_ids = self._friends.get(user_id, {})
            return [self._users[fid] for fid in friend_ids if fid in self._users]

    # --- Posts ---

    async def create_post(self, post: Post) -> Post:
        """Create a post."""
        async with self._lock.writer_lock:
            if post.id in self._posts:
                raise AlreadyExistsError("post", post.id)
            stored = post.model_copy(update={"votes": 0})
            self._posts[post.id] = stored
            return stored

    async def get_post(self, server_id: ServerId, post_id: PostId) -> Post:
        """Get a post with its live vote tally."""
        async with self._lock.reader_lock:
            post = self._posts.get(post_id)
            if post is None or post.server_id != server_id:
                raise NotFoundError("post", post_id)
            return self._with_votes(post)

    async def update_post(self, post: Post) -> Post:
        """Overwrite a post's title, body and updated_at."""
        async with self._lock.writer_lock:
            existing = self._posts.get(post.id)
            if existing is None:
                raise NotFoundError("post", post.id)
            updated = existing.model_copy(
                update={
                    "title": post.title,
                    "body": post.body,
                    "updated_at": post.updated_at,
                }
            )
            self._posts[post.id] = updated
            return self._with_votes(updated)

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post and its votes."""
        async with self._lock.writer_lock:
            if self._posts.pop(post_id, None) is None:
                raise NotFoundError("post", post_id)
            for key in [k for k in self._votes if k[0] == post_id]:
                del self._votes[key]

    # --- Votes ---

    async def get_vote(self, post_id: PostId, author_id: UserId) -> Vote:
        """Get an author's vote on a post."""
        async with self._lock.reader_lock:
            vote = self._votes.get((post_id, author_id))
            if vote is None:
                raise NotFoundError("vote", f"{post_id}-{author_id}")
            return vote

    async def put_vote(
        self, post_id: PostId, author_id: UserId, value: VoteValue
    ) -> Vote:
        """Insert or replace an author's vote on a post."""
        async with self._lock.writer_lock:
            if post_id not in self._posts:
                raise NotFoundError("post", post_id)
            vote = Vote(post_id=post_id, author_id=author_id, value=value)
            self._votes[(post_id, author_id)] = vote
            return vote

    # --- Servers ---

    async def create_server(self, server: Server) -> Server:
        """Create a server."""
        async with self._lock.writer_lock:
            if server.id in self._servers:
                raise AlreadyExistsError("server", server.id)
            stored = server.model_copy(update={"member_ids": [], "post_ids": []})
            self._servers[server.id] = stored
            return self._with_relations(stored)

    async def get_server(self, server_id: ServerId) -> Server:
        """Get a server with its posts and members."""
        async with self._lock.reader_lock:
            return self._with_relations(self._get_server(server_id))

    async def join_server(self, server_id: ServerId, user_id: UserId) -> Membership:
        """Record a user's membership in a server."""
        async with self._lock.writer_lock:
            self._get_server(server_id)
            self._get_user(user_id)
            return self._members.setdefault(server_id, {}).setdefault(
                user_id, Membership(server_id=server_id, user_id=user_id)
            )

    async def get_server_members(self, server_id: ServerId) -> list[User]:
        """List a server's members."""
        async with self._lock.reader_lock:
            member_ids = self._members.get(server_id, {})
            return [self._users[uid] for uid in member_ids if uid in self._users]

    # --- Messages ---

    async def create_message(self, message: Message) -> Message:
        """Append a message."""
        async with self._lock.writer_lock:
            self._get_server(message.server_id)
            if message.id in self._messages:
                raise AlreadyExistsError("message", message.id)
            self._messages[message.id] = message
            return message

    async def get_messages_by_server(self, server_id: ServerId) -> list[Message]:
        """List a server's messages, oldest first."""
        async with self._lock.reader_lock:
            messages = [m for m in self._messages.values() if m.server_id == server_id]
            return sorted(messages, key=lambda m: m.created_at)

    # Helpers below expect the caller to hold the lock.

    def _get_user(self, user_id: UserId) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    def _get_server(self, server_id: ServerId) -> Server:
        server = self._servers.get(server_id)
        if server is None:
            raise NotFoundError("server", server_id)
        return server

    def _with_votes(self, post: Post) -> Post:
        total = sum(
            int(vote.value) for key, vote in self._votes.items() if key[0] == post.id
        )
        return post.model_copy(update={"votes": total})

    def _with_relations(self, server: Server) -> Server:
        post_ids = [p.id for p in self._posts.values() if p.server_id == server.id]
        member_ids = list(self._members.get(server.id, {}))
        return server.model_copy(
            update={"post_ids": post_ids, "member_ids": member_ids}
        )
