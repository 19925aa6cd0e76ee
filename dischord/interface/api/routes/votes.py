"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from pydantic import BaseModel

from dischord.domain.model import Post, Vote
from dischord.domain.service import VoteService
from dischord.domain.value import PostId, ServerId, UserId

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class PutVoteAPIRequest(BaseModel):
    """API request for casting a vote.

    ``vote`` is -1 (down), 0 (retract) or 1 (up); anything else is rejected
    by the service with a 400.
    """

    author: str = ""
    vote: int = 0


@router.get("/servers/{server_id}/posts/{post_id}/vote", response_model=Vote)
async def get_vote(
    server_id: str,
    post_id: str,
    vote_service: FromDishka[VoteService],
    author: str = Query(default=""),
) -> Vote:
    """Get an author's vote on a post.

    Args:
        server_id: Server ID
        post_id: Post ID
        vote_service: Vote service from DI
        author: Voting user's ID

    Returns:
        The stored vote
    """
    return await vote_service.get_vote(
        ServerId(server_id), PostId(post_id), UserId(author)
    )


@router.put("/servers/{server_id}/posts/{post_id}/vote", response_model=Post)
async def put_vote(
    server_id: str,
    post_id: str,
    request: PutVoteAPIRequest,
    vote_service: FromDishka[VoteService],
) -> Post:
    """Cast, switch or retract a vote and return the post's new tally."""
    return await vote_service.put_vote(
        ServerId(server_id),
        PostId(post_id),
        UserId(request.author),
        request.vote,
    )
