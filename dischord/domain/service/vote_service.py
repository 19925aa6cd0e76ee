"""Vote domain service."""

import logfire

from dischord.domain.error import NotFoundError, ValidationError
from dischord.domain.model import Post, Vote
from dischord.domain.value import PostId, ServerId, UserId, VoteValue

from .base import Service


class VoteService(Service):
    """Domain service for vote operations."""

    async def get_vote(
        self, server_id: ServerId, post_id: PostId, author_id: UserId
    ) -> Vote:
        """Get an author's vote on a post.

        Raises:
            NotFoundError: If the post does not exist in this server, or the
                author never voted on it
        """
        with logfire.span("vote_service.get_vote", post_id=post_id, author=author_id):
            await self.store.get_post(server_id, post_id)
            return await self.store.get_vote(post_id, author_id)

    async def put_vote(
        self, server_id: ServerId, post_id: PostId, author_id: UserId, value: int
    ) -> Post:
        """Cast, switch or retract a vote.

        Switching replaces the previous value rather than stacking on it, and
        repeating the current value changes nothing.

        Args:
            server_id: Server the post belongs to
            post_id: Post being voted on
            author_id: Voting user
            value: -1, 0 or 1

        Returns:
            The post with its updated tally

        Raises:
            ValidationError: If author_id is empty or value is out of range
            NotFoundError: If the post does not exist in this server
        """
        if not author_id:
            raise ValidationError("author is required")
        try:
            vote_value = VoteValue(value)
        except ValueError:
            raise ValidationError(f"vote must be -1, 0 or 1, got {value}")

        with logfire.span(
            "vote_service.put_vote", post_id=post_id, author=author_id, value=value
        ):
            await self.store.get_post(server_id, post_id)

            try:
                current = await self.store.get_vote(post_id, author_id)
            except NotFoundError:
                current = None

            if current is not None and current.value == vote_value:
                logfire.debug(
                    "Vote unchanged", post_id=post_id, author=author_id, value=value
                )
            else:
                await self.store.put_vote(post_id, author_id, vote_value)
                logfire.info(
                    "Vote recorded", post_id=post_id, author=author_id, value=value
                )

            return await self.store.get_post(server_id, post_id)
