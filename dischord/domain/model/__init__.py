"""Domain model entities for Dischord."""

from dischord.domain.model.message import Message
from dischord.domain.model.post import Post
from dischord.domain.model.relation import Friendship, Membership
from dischord.domain.model.server import Server
from dischord.domain.model.user import User
from dischord.domain.model.vote import Vote

__all__ = [
    "User",
    "Server",
    "Post",
    "Vote",
    "Friendship",
    "Membership",
    "Message",
]
