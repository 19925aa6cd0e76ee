"""User entity."""

from datetime import datetime

from pydantic import Field

from dischord.domain.model.common import DomainModel
from dischord.domain.value import UserId


class User(DomainModel):
    """A registered user.

    Username and email are not unique; only the id is.
    """

    id: UserId
    username: str
    email: str
    created_at: datetime = Field(default_factory=datetime.now)
