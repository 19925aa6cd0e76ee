"""Domain layer DI providers."""

from dishka import Scope, provide

from dischord.domain.service import (
    MessageService,
    PostService,
    ServerService,
    UserService,
    VoteService,
)
from dischord.domain.store import Store
from dischord.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services are cheap and stateless, so each request gets fresh instances
    around the single APP-scoped Store.
    """

    scope = Scope.REQUEST

    @provide
    def get_user_service(self, store: Store) -> UserService:
        """Provide user domain service."""
        return UserService(store)

    @provide
    def get_server_service(self, store: Store) -> ServerService:
        """Provide server domain service."""
        return ServerService(store)

    @provide
    def get_post_service(self, store: Store) -> PostService:
        """Provide post domain service."""
        return PostService(store)

    @provide
    def get_vote_service(self, store: Store) -> VoteService:
        """Provide vote domain service."""
        return VoteService(store)

    @provide
    def get_message_service(self, store: Store) -> MessageService:
        """Provide message domain service."""
        return MessageService(store)
