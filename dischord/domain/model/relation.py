"""Pairwise relations between entities.

Both relations are idempotent: recording an existing pair is a no-op.
"""

from dischord.domain.model.common import DomainModel
from dischord.domain.value import ServerId, UserId


class Friendship(DomainModel):
    """Friendship between two users.

    Symmetric: recording (a, b) also records (b, a).
    """

    user_id: UserId
    friend_id: UserId


class Membership(DomainModel):
    """A user's membership in a server."""

    server_id: ServerId
    user_id: UserId
