"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from dischord.domain.model import Post
from dischord.domain.service import PostService
from dischord.domain.value import PostId, ServerId, UserId

router = APIRouter(
    prefix="/servers/{server_id}/posts", tags=["posts"], route_class=DishkaRoute
)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    author_id: str = ""
    title: str = ""
    body: str = ""


class UpdatePostAPIRequest(BaseModel):
    """API request for updating a post. Omitted fields are left unchanged."""

    title: str | None = None
    body: str | None = None


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
async def create_post(
    server_id: str,
    request: CreatePostAPIRequest,
    post_service: FromDishka[PostService],
) -> Post:
    """Create a new post in a server.

    Args:
        server_id: Server ID
        request: Post data
        post_service: Post service from DI

    Returns:
        Created post with zero votes
    """
    return await post_service.create_post(
        ServerId(server_id),
        UserId(request.author_id),
        request.title,
        request.body,
    )


@router.get("/{post_id}", response_model=Post)
async def get_post(
    server_id: str,
    post_id: str,
    post_service: FromDishka[PostService],
) -> Post:
    """Get a post with its current vote tally."""
    return await post_service.get_post(ServerId(server_id), PostId(post_id))


@router.put("/{post_id}", response_model=Post)
async def update_post(
    server_id: str,
    post_id: str,
    request: UpdatePostAPIRequest,
    post_service: FromDishka[PostService],
) -> Post:
    """Change a post's title and/or body."""
    return await post_service.update_post(
        ServerId(server_id),
        PostId(post_id),
        title=request.title,
        body=request.body,
    )


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    server_id: str,
    post_id: str,
    post_service: FromDishka[PostService],
) -> Response:
    """Delete a post together with its votes."""
    await post_service.delete_post(ServerId(server_id), PostId(post_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
