"""Unit tests for PostService."""

import pytest

from dischord.domain.error import NotFoundError, ValidationError
from dischord.domain.service import PostService, ServerService, UserService
from dischord.domain.value import PostId, ServerId, UserId
from tests.harness import create_env_fixture

# Unit test fixture - in-memory store, nothing external
unit_env = create_env_fixture()


async def _server_with_owner(unit_env):
    user_service = await unit_env.get(UserService)
    server_service = await unit_env.get(ServerService)
    owner = await user_service.create_user("ada", "ada@example.com")
    server = await server_service.create_server("general", owner.id)
    return server, owner


class TestCreatePost:
    """Tests for create_post method."""

    @pytest.mark.asyncio
    async def test_create_post_appears_in_server(self, unit_env):
        """New posts have zero votes and are listed by their server."""
        # Arrange
        post_service = await unit_env.get(PostService)
        server_service = await unit_env.get(ServerService)
        server, owner = await _server_with_owner(unit_env)

        # Act
        post = await post_service.create_post(server.id, owner.id, "Hello", "World")

        # Assert
        assert post.votes == 0
        assert post.created_at == post.updated_at
        assert (await server_service.get_server(server.id)).post_ids == [post.id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "author,title,body",
        [("", "Hello", "World"), ("u1", "", "World"), ("u1", "Hello", "")],
    )
    async def test_create_post_requires_fields(self, unit_env, author, title, body):
        """Author, title and body are mandatory."""
        post_service = await unit_env.get(PostService)

        with pytest.raises(ValidationError):
            await post_service.create_post(ServerId("s1"), UserId(author), title, body)


class TestUpdatePost:
    """Tests for update_post method."""

    @pytest.mark.asyncio
    async def test_update_post_changes_only_given_fields(self, unit_env):
        """Omitted fields keep their value and updated_at moves forward."""
        post_service = await unit_env.get(PostService)
        server, owner = await _server_with_owner(unit_env)
        post = await post_service.create_post(server.id, owner.id, "Hello", "World")

        updated = await post_service.update_post(server.id, post.id, title="Hi")

        assert updated.title == "Hi"
        assert updated.body == "World"
        assert updated.created_at == post.created_at
        assert updated.updated_at >= post.updated_at

    @pytest.mark.asyncio
    async def test_update_post_in_wrong_server_fails(self, unit_env):
        """Posts are addressed through their own server."""
        post_service = await unit_env.get(PostService)
        server, owner = await _server_with_owner(unit_env)
        post = await post_service.create_post(server.id, owner.id, "Hello", "World")

        with pytest.raises(NotFoundError):
            await post_service.update_post(ServerId("other"), post.id, title="Hi")


class TestDeletePost:
    """Tests for delete_post method."""

    @pytest.mark.asyncio
    async def test_delete_post_removes_it(self, unit_env):
        """Deleted posts can no longer be fetched."""
        post_service = await unit_env.get(PostService)
        server, owner = await _server_with_owner(unit_env)
        post = await post_service.create_post(server.id, owner.id, "Hello", "World")

        await post_service.delete_post(server.id, post.id)

        with pytest.raises(NotFoundError):
            await post_service.get_post(server.id, post.id)

    @pytest.mark.asyncio
    async def test_delete_post_in_wrong_server_keeps_it(self, unit_env):
        """A mismatched server leaves the post alone."""
        post_service = await unit_env.get(PostService)
        server, owner = await _server_with_owner(unit_env)
        post = await post_service.create_post(server.id, owner.id, "Hello", "World")

        with pytest.raises(NotFoundError):
            await post_service.delete_post(ServerId("other"), post.id)

        assert await post_service.get_post(server.id, post.id) == post

    @pytest.mark.asyncio
    async def test_delete_unknown_post_fails(self, unit_env):
        """Deleting a missing post fails with NotFound."""
        post_service = await unit_env.get(PostService)

        with pytest.raises(NotFoundError):
            await post_service.delete_post(ServerId("s1"), PostId("ghost"))
