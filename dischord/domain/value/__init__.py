"""Domain value objects for Dischord."""

from dischord.domain.value.identifiers import (
    MessageId,
    PostId,
    ServerId,
    UserId,
    new_id,
)
from dischord.domain.value.types import VoteValue

__all__ = [
    # Identifiers
    "UserId",
    "ServerId",
    "PostId",
    "MessageId",
    "new_id",
    # Types
    "VoteValue",
]
