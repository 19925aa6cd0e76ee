"""Message entity."""

from datetime import datetime

from pydantic import Field

from dischord.domain.model.common import DomainModel
from dischord.domain.value import MessageId, ServerId, UserId


class Message(DomainModel):
    """A chat message in a server. Messages are append-only."""

    id: MessageId
    server_id: ServerId
    author_id: UserId
    content: str
    created_at: datetime = Field(default_factory=datetime.now)
