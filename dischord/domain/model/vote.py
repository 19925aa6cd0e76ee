"""Vote entity.

Each user holds at most one vote per post; casting again replaces the value.
"""

from dischord.domain.model.common import DomainModel
from dischord.domain.value import PostId, UserId, VoteValue


class Vote(DomainModel):
    """A user's vote on a post, keyed by (post_id, author_id)."""

    post_id: PostId
    author_id: UserId
    value: VoteValue = VoteValue.NONE
