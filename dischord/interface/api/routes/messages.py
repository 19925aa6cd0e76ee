"""Chat message routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel

from dischord.domain.model import Message
from dischord.domain.service import MessageService
from dischord.domain.value import ServerId, UserId

router = APIRouter(
    prefix="/servers/{server_id}/messages",
    tags=["messages"],
    route_class=DishkaRoute,
)


class CreateMessageAPIRequest(BaseModel):
    """API request for posting a chat message."""

    author_id: str = ""
    content: str = ""


@router.post("", response_model=Message, status_code=status.HTTP_201_CREATED)
async def create_message(
    server_id: str,
    request: CreateMessageAPIRequest,
    message_service: FromDishka[MessageService],
) -> Message:
    """Append a message to a server's chat."""
    return await message_service.create_message(
        ServerId(server_id), UserId(request.author_id), request.content
    )


@router.get("", response_model=list[Message])
async def list_messages(
    server_id: str,
    message_service: FromDishka[MessageService],
) -> list[Message]:
    """List a server's messages, oldest first."""
    return await message_service.list_messages(ServerId(server_id))
