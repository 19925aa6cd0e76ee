"""Store interface.

The Store is the persistence and consistency layer: it holds entity state,
enforces existence and uniqueness invariants, and computes derived values
(vote tallies, member and post lists, friend lists) at read time.
Implementations live in the persistence layer and must be observably
identical; one instance is shared by all concurrent callers.
"""

from abc import ABC, abstractmethod

from dischord.domain.model import (
    Friendship,
    Membership,
    Message,
    Post,
    Server,
    User,
    Vote,
)
from dischord.domain.value import PostId, ServerId, UserId, VoteValue


class Store(ABC):
    """Contract shared by every Store backend.

    Inputs are assumed validated (non-empty fields) by the caller. Every
    failure raises exactly one of NotFoundError, AlreadyExistsError or
    InternalError; the Store never retries.
    """

    # --- Users ---

    @abstractmethod
    async def create_user(self, user: User) -> User:
        """Persist a new user verbatim.

        Raises:
            AlreadyExistsError: If the user id is taken
        """
        pass

    @abstractmethod
    async def get_user(self, user_id: UserId) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        pass

    # --- Friends ---

    @abstractmethod
    async def add_friend(self, user_id: UserId, friend_id: UserId) -> Friendship:
        """Record a symmetric friendship.

        Both directions are stored. Repeated calls succeed without further
        effect.

        Raises:
            NotFoundError: If either user does not exist
        """
        pass

    @abstractmethod
    async def get_friends(self, user_id: UserId) -> list[User]:
        """List the friends of a user, in no guaranteed order.

        Returns an empty list when the user has no friends, including when
        the user id is unknown.
        """
        pass

    # --- Posts ---

    @abstractmethod
    async def create_post(self, post: Post) -> Post:
        """Persist a new post.

        Any ``votes`` value on the input is ignored; the returned post
        carries its live tally.

        Raises:
            AlreadyExistsError: If the post id is taken
        """
        pass

    @abstractmethod
    async def get_post(self, server_id: ServerId, post_id: PostId) -> Post:
        """Get a post with its live vote tally.

        Raises:
            NotFoundError: If the post does not exist or belongs to another
                server
        """
        pass

    @abstractmethod
    async def update_post(self, post: Post) -> Post:
        """Overwrite a post's title, body and updated_at.

        This is a blind overwrite: the last write wins.

        Raises:
            NotFoundError: If the post no longer exists
        """
        pass

    @abstractmethod
    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post together with its votes.

        Raises:
            NotFoundError: If the post does not exist
        """
        pass

    # --- Votes ---

    @abstractmethod
    async def get_vote(self, post_id: PostId, author_id: UserId) -> Vote:
        """Get the vote an author cast on a post.

        Raises:
            NotFoundError: If no vote exists for the pair
        """
        pass

    @abstractmethod
    async def put_vote(
        self, post_id: PostId, author_id: UserId, value: VoteValue
    ) -> Vote:
        """Insert or replace the vote keyed on (post_id, author_id).

        Raises:
            NotFoundError: If the post does not exist
        """
        pass

    # --- Servers ---

    @abstractmethod
    async def create_server(self, server: Server) -> Server:
        """Persist a new server.

        Derived lists on the input are ignored.

        Raises:
            AlreadyExistsError: If the server id is taken
        """
        pass

    @abstractmethod
    async def get_server(self, server_id: ServerId) -> Server:
        """Get a server with its computed post_ids and member_ids.

        Raises:
            NotFoundError: If the server does not exist
        """
        pass

    @abstractmethod
    async def join_server(self, server_id: ServerId, user_id: UserId) -> Membership:
        """Record a membership. Repeated calls succeed without further effect.

        Raises:
            NotFoundError: If the server or the user does not exist
        """
        pass

    @abstractmethod
    async def get_server_members(self, server_id: ServerId) -> list[User]:
        """List users joined to a server (empty if none)."""
        pass

    # --- Messages ---

    @abstractmethod
    async def create_message(self, message: Message) -> Message:
        """Append a message to its server.

        Raises:
            NotFoundError: If the server does not exist
            AlreadyExistsError: If the message id is taken
        """
        pass

    @abstractmethod
    async def get_messages_by_server(self, server_id: ServerId) -> list[Message]:
        """List a server's messages, oldest first.

        Messages with equal timestamps keep their insertion order. An unknown
        server yields an empty list, not an error.
        """
        pass
