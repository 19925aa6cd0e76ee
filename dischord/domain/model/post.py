"""Post entity."""

from datetime import datetime

from pydantic import Field

from dischord.domain.model.common import DomainModel
from dischord.domain.value import PostId, ServerId, UserId


class Post(DomainModel):
    """A post inside a server.

    ``votes`` is the live sum of all vote values for the post. It is computed
    by the Store at read time and never persisted.
    """

    id: PostId
    server_id: ServerId
    author_id: UserId
    title: str
    body: str
    votes: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
