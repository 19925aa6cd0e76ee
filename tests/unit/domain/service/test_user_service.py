"""Unit tests for UserService."""

import pytest

from dischord.domain.error import NotFoundError, ValidationError
from dischord.domain.service import UserService
from dischord.domain.store import Store
from dischord.domain.value import UserId
from tests.harness import create_env_fixture

# Unit test fixture - in-memory store, nothing external
unit_env = create_env_fixture()


class TestCreateUser:
    """Tests for create_user method."""

    @pytest.mark.asyncio
    async def test_create_user_generates_id_and_persists(self, unit_env):
        """Created users get a fresh ID and are stored."""
        # Arrange
        user_service = await unit_env.get(UserService)
        store = await unit_env.get(Store)

        # Act
        user = await user_service.create_user("ada", "ada@example.com")

        # Assert
        assert user.id
        assert user.username == "ada"
        assert await store.get_user(user.id) == user

    @pytest.mark.asyncio
    async def test_create_user_ids_are_unique(self, unit_env):
        """Two users never share an ID."""
        user_service = await unit_env.get(UserService)

        first = await user_service.create_user("ada", "ada@example.com")
        second = await user_service.create_user("ada", "ada@example.com")

        assert first.id != second.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "username,email", [("", "ada@example.com"), ("ada", "")]
    )
    async def test_create_user_requires_fields(self, unit_env, username, email):
        """Empty username or email is rejected."""
        user_service = await unit_env.get(UserService)

        with pytest.raises(ValidationError):
            await user_service.create_user(username, email)


class TestFriends:
    """Tests for add_friend and get_friends."""

    @pytest.mark.asyncio
    async def test_add_friend_links_both_users(self, unit_env):
        """Friendship is visible from both sides."""
        user_service = await unit_env.get(UserService)
        ada = await user_service.create_user("ada", "ada@example.com")
        bob = await user_service.create_user("bob", "bob@example.com")

        friendship = await user_service.add_friend(ada.id, bob.id)

        assert friendship.user_id == ada.id
        assert friendship.friend_id == bob.id
        assert await user_service.get_friends(ada.id) == [bob]
        assert await user_service.get_friends(bob.id) == [ada]

    @pytest.mark.asyncio
    async def test_add_friend_rejects_self(self, unit_env):
        """Users cannot befriend themselves."""
        user_service = await unit_env.get(UserService)
        ada = await user_service.create_user("ada", "ada@example.com")

        with pytest.raises(ValidationError):
            await user_service.add_friend(ada.id, ada.id)

    @pytest.mark.asyncio
    async def test_add_friend_rejects_empty_friend(self, unit_env):
        """A friend ID is required."""
        user_service = await unit_env.get(UserService)
        ada = await user_service.create_user("ada", "ada@example.com")

        with pytest.raises(ValidationError):
            await user_service.add_friend(ada.id, UserId(""))

    @pytest.mark.asyncio
    async def test_add_friend_with_unknown_user_fails(self, unit_env):
        """Befriending a missing user fails with NotFound."""
        user_service = await unit_env.get(UserService)
        ada = await user_service.create_user("ada", "ada@example.com")

        with pytest.raises(NotFoundError):
            await user_service.add_friend(ada.id, UserId("ghost"))
