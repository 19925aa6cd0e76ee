"""User domain service."""

from datetime import datetime

import logfire

from dischord.domain.error import ValidationError
from dischord.domain.model import Friendship, User
from dischord.domain.value import UserId, new_id

from .base import Service


class UserService(Service):
    """Domain service for users and friendships."""

    async def create_user(self, username: str, email: str) -> User:
        """Create a user with a fresh ID.

        Args:
            username: Display name
            email: Contact email

        Returns:
            Created user

        Raises:
            ValidationError: If username or email is empty
        """
        if not username or not email:
            raise ValidationError("username and email are required")

        user = User(
            id=UserId(new_id()),
            username=username,
            email=email,
            created_at=datetime.now(),
        )
        with logfire.span("user_service.create_user", user_id=user.id):
            created = await self.store.create_user(user)
            logfire.info("User created", user_id=created.id, username=username)
            return created

    async def get_user(self, user_id: UserId) -> User:
        """Get a user by ID."""
        with logfire.span("user_service.get_user", user_id=user_id):
            return await self.store.get_user(user_id)

    async def add_friend(self, user_id: UserId, friend_id: UserId) -> Friendship:
        """Befriend two users (symmetric, idempotent).

        Raises:
            ValidationError: If friend_id is empty or equals user_id
            NotFoundError: If either user does not exist
        """
        if not friend_id:
            raise ValidationError("friend_id is required")
        if friend_id == user_id:
            raise ValidationError("users cannot befriend themselves")

        with logfire.span(
            "user_service.add_friend", user_id=user_id, friend_id=friend_id
        ):
            friendship = await self.store.add_friend(user_id, friend_id)
            logfire.info("Friend added", user_id=user_id, friend_id=friend_id)
            return friendship

    async def get_friends(self, user_id: UserId) -> list[User]:
        """List a user's friends (empty for unknown users)."""
        with logfire.span("user_service.get_friends", user_id=user_id):
            friends = await self.store.get_friends(user_id)
            logfire.debug("Friends listed", user_id=user_id, count=len(friends))
            return friends
