"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM. Derived fields are never written.
"""

from typing import Any, Mapping

from dischord.domain.model import Message, Post, Server, User, Vote
from dischord.domain.value import (
    MessageId,
    PostId,
    ServerId,
    UserId,
    VoteValue,
)


def row_to_user(row: Mapping[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(row["id"]),
        username=row["username"],
        email=row["email"],
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_server(
    row: Mapping[str, Any],
    member_ids: list[UserId] | None = None,
    post_ids: list[PostId] | None = None,
) -> Server:
    """Convert database row plus computed relations to Server domain model."""
    return Server(
        id=ServerId(row["id"]),
        name=row["name"],
        owner_id=UserId(row["owner_id"]),
        member_ids=member_ids or [],
        post_ids=post_ids or [],
        created_at=row["created_at"],
    )


def server_to_dict(server: Server) -> dict[str, Any]:
    """Convert Server domain model to database dict (derived lists dropped)."""
    return server.model_dump(exclude={"member_ids", "post_ids"})


def row_to_post(row: Mapping[str, Any]) -> Post:
    """Convert database row to Post domain model.

    The row may carry an aggregated ``votes`` column; it defaults to 0.
    """
    return Post(
        id=PostId(row["id"]),
        server_id=ServerId(row["server_id"]),
        author_id=UserId(row["author_id"]),
        title=row["title"],
        body=row["body"],
        votes=int(row.get("votes") or 0),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> dict[str, Any]:
    """Convert Post domain model to database dict (tally dropped)."""
    return post.model_dump(exclude={"votes"})


def row_to_vote(row: Mapping[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        post_id=PostId(row["post_id"]),
        author_id=UserId(row["author_id"]),
        value=VoteValue(row["value"]),
    )


def row_to_message(row: Mapping[str, Any]) -> Message:
    """Convert database row to Message domain model."""
    return Message(
        id=MessageId(row["id"]),
        server_id=ServerId(row["server_id"]),
        author_id=UserId(row["author_id"]),
        content=row["content"],
        created_at=row["created_at"],
    )


def message_to_dict(message: Message) -> dict[str, Any]:
    """Convert Message domain model to database dict."""
    return message.model_dump()
