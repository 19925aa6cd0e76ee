"""Server domain service."""

from datetime import datetime

import logfire

from dischord.domain.error import ValidationError
from dischord.domain.model import Membership, Server, User
from dischord.domain.value import ServerId, UserId, new_id

from .base import Service


class ServerService(Service):
    """Domain service for servers and memberships."""

    async def create_server(self, name: str, owner_id: UserId) -> Server:
        """Create a server and join its owner to it.

        Args:
            name: Server name
            owner_id: ID of the owning user

        Returns:
            Created server, with the owner as its only member

        Raises:
            ValidationError: If name or owner_id is empty
            NotFoundError: If the owner does not exist
        """
        if not name or not owner_id:
            raise ValidationError("name and owner_id are required")

        server = Server(
            id=ServerId(new_id()),
            name=name,
            owner_id=owner_id,
            created_at=datetime.now(),
        )
        with logfire.span(
            "server_service.create_server", server_id=server.id, owner_id=owner_id
        ):
            # Check the owner first so a missing owner leaves no orphan server
            await self.store.get_user(owner_id)
            await self.store.create_server(server)
            await self.store.join_server(server.id, owner_id)
            logfire.info(
                "Server created", server_id=server.id, name=name, owner_id=owner_id
            )
            return await self.store.get_server(server.id)

    async def get_server(self, server_id: ServerId) -> Server:
        """Get a server with its members and posts."""
        with logfire.span("server_service.get_server", server_id=server_id):
            return await self.store.get_server(server_id)

    async def join_server(self, server_id: ServerId, user_id: UserId) -> Membership:
        """Join a user to a server (idempotent).

        Raises:
            ValidationError: If user_id is empty
            NotFoundError: If the server or user does not exist
        """
        if not user_id:
            raise ValidationError("user_id is required")

        with logfire.span(
            "server_service.join_server", server_id=server_id, user_id=user_id
        ):
            membership = await self.store.join_server(server_id, user_id)
            logfire.info("User joined server", server_id=server_id, user_id=user_id)
            return membership

    async def get_members(self, server_id: ServerId) -> list[User]:
        """List users joined to a server."""
        with logfire.span("server_service.get_members", server_id=server_id):
            return await self.store.get_server_members(server_id)
