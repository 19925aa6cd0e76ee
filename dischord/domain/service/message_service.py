"""Message domain service."""

from datetime import datetime

import logfire

from dischord.domain.error import ValidationError
from dischord.domain.model import Message
from dischord.domain.value import MessageId, ServerId, UserId, new_id

from .base import Service


class MessageService(Service):
    """Domain service for server chat messages."""

    async def create_message(
        self, server_id: ServerId, author_id: UserId, content: str
    ) -> Message:
        """Append a message to a server.

        Raises:
            ValidationError: If author_id or content is empty
            NotFoundError: If the server does not exist
        """
        if not author_id or not content:
            raise ValidationError("author_id and content are required")

        message = Message(
            id=MessageId(new_id()),
            server_id=server_id,
            author_id=author_id,
            content=content,
            created_at=datetime.now(),
        )
        with logfire.span(
            "message_service.create_message", server_id=server_id, author=author_id
        ):
            created = await self.store.create_message(message)
            logfire.info(
                "Message created", message_id=created.id, server_id=server_id
            )
            return created

    async def list_messages(self, server_id: ServerId) -> list[Message]:
        """List a server's messages, oldest first."""
        with logfire.span("message_service.list_messages", server_id=server_id):
            return await self.store.get_messages_by_server(server_id)
