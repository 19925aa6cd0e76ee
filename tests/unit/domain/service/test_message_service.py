"""Unit tests for MessageService."""

import pytest

from dischord.domain.error import NotFoundError, ValidationError
from dischord.domain.service import MessageService, ServerService, UserService
from dischord.domain.value import ServerId, UserId
from tests.harness import create_env_fixture

# Unit test fixture - in-memory store, nothing external
unit_env = create_env_fixture()


class TestMessages:
    """Tests for create_message and list_messages."""

    @pytest.mark.asyncio
    async def test_messages_are_listed_in_order(self, unit_env):
        """Messages come back oldest first."""
        # Arrange
        user_service = await unit_env.get(UserService)
        server_service = await unit_env.get(ServerService)
        message_service = await unit_env.get(MessageService)
        owner = await user_service.create_user("ada", "ada@example.com")
        server = await server_service.create_server("general", owner.id)

        # Act
        first = await message_service.create_message(server.id, owner.id, "one")
        second = await message_service.create_message(server.id, owner.id, "two")

        # Assert
        messages = await message_service.list_messages(server.id)
        assert [m.id for m in messages] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_message_in_unknown_server_fails(self, unit_env):
        """Messages need an existing server."""
        message_service = await unit_env.get(MessageService)

        with pytest.raises(NotFoundError):
            await message_service.create_message(ServerId("ghost"), UserId("u1"), "hi")

    @pytest.mark.asyncio
    async def test_message_requires_content(self, unit_env):
        """Empty messages are rejected."""
        message_service = await unit_env.get(MessageService)

        with pytest.raises(ValidationError):
            await message_service.create_message(ServerId("s1"), UserId("u1"), "")
