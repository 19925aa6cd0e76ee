"""Post domain service."""

from datetime import datetime

import logfire

from dischord.domain.error import ValidationError
from dischord.domain.model import Post
from dischord.domain.value import PostId, ServerId, UserId, new_id

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    async def create_post(
        self, server_id: ServerId, author_id: UserId, title: str, body: str
    ) -> Post:
        """Create a post in a server.

        Args:
            server_id: Server the post belongs to
            author_id: Author's user ID
            title: Post title
            body: Post body

        Returns:
            Created post (with zero votes)

        Raises:
            ValidationError: If author_id, title or body is empty
        """
        if not author_id or not title or not body:
            raise ValidationError("author_id, title, and body are required")

        now = datetime.now()
        post = Post(
            id=PostId(new_id()),
            server_id=server_id,
            author_id=author_id,
            title=title,
            body=body,
            created_at=now,
            updated_at=now,
        )
        with logfire.span(
            "post_service.create_post", post_id=post.id, server_id=server_id
        ):
            created = await self.store.create_post(post)
            logfire.info("Post created", post_id=created.id, title=title)
            return created

    async def get_post(self, server_id: ServerId, post_id: PostId) -> Post:
        """Get a post with its current vote tally.

        Raises:
            NotFoundError: If the post does not exist in this server
        """
        with logfire.span(
            "post_service.get_post", post_id=post_id, server_id=server_id
        ):
            return await self.store.get_post(server_id, post_id)

    async def update_post(
        self,
        server_id: ServerId,
        post_id: PostId,
        title: str | None = None,
        body: str | None = None,
    ) -> Post:
        """Change a post's title and/or body.

        Fields left as None keep their current value. This is a
        read-modify-write against a blind overwrite, so concurrent updates
        to one post resolve as last write wins.

        Raises:
            NotFoundError: If the post does not exist in this server
        """
        with logfire.span(
            "post_service.update_post", post_id=post_id, server_id=server_id
        ):
            post = await self.store.get_post(server_id, post_id)
            changes: dict[str, object] = {"updated_at": datetime.now()}
            if title is not None:
                changes["title"] = title
            if body is not None:
                changes["body"] = body
            updated = await self.store.update_post(post.model_copy(update=changes))
            logfire.info("Post updated", post_id=post_id)
            return updated

    async def delete_post(self, server_id: ServerId, post_id: PostId) -> None:
        """Delete a post and its votes.

        Raises:
            NotFoundError: If the post does not exist in this server
        """
        with logfire.span(
            "post_service.delete_post", post_id=post_id, server_id=server_id
        ):
            await self.store.get_post(server_id, post_id)
            await self.store.delete_post(post_id)
            logfire.info("Post deleted", post_id=post_id)
