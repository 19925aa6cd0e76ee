"""Domain services."""

from .base import Service
from .message_service import MessageService
from .post_service import PostService
from .server_service import ServerService
from .user_service import UserService
from .vote_service import VoteService

__all__ = [
    "MessageService",
    "PostService",
    "ServerService",
    "Service",
    "UserService",
    "VoteService",
]
