"""Server aggregate.

A server is a community that users join and post into.
"""

from datetime import datetime

from pydantic import Field

from dischord.domain.model.common import DomainModel
from dischord.domain.value import PostId, ServerId, UserId


class Server(DomainModel):
    """Server aggregate.

    ``member_ids`` and ``post_ids`` are derived: a Store fills them from the
    membership and post tables on every read and ignores them on write.
    """

    id: ServerId
    name: str
    owner_id: UserId
    member_ids: list[UserId] = Field(default_factory=list)
    post_ids: list[PostId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
