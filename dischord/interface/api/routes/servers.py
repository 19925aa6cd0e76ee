"""Server and membership routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel

from dischord.domain.model import Membership, Server, User
from dischord.domain.service import ServerService
from dischord.domain.value import ServerId, UserId

router = APIRouter(prefix="/servers", tags=["servers"], route_class=DishkaRoute)


class CreateServerAPIRequest(BaseModel):
    """API request for creating a server."""

    name: str = ""
    owner_id: str = ""


class JoinServerAPIRequest(BaseModel):
    """API request for joining a server."""

    user_id: str = ""


@router.post("", response_model=Server, status_code=status.HTTP_201_CREATED)
async def create_server(
    request: CreateServerAPIRequest,
    server_service: FromDishka[ServerService],
) -> Server:
    """Create a server owned (and joined) by an existing user.

    Args:
        request: Server name and owner ID
        server_service: Server service from DI

    Returns:
        Created server
    """
    return await server_service.create_server(request.name, UserId(request.owner_id))


@router.get("/{server_id}", response_model=Server)
async def get_server(
    server_id: str,
    server_service: FromDishka[ServerService],
) -> Server:
    """Get a server with its member and post IDs."""
    return await server_service.get_server(ServerId(server_id))


@router.post("/{server_id}/members", response_model=Membership)
async def join_server(
    server_id: str,
    request: JoinServerAPIRequest,
    server_service: FromDishka[ServerService],
) -> Membership:
    """Join a user to a server."""
    return await server_service.join_server(
        ServerId(server_id), UserId(request.user_id)
    )


@router.get("/{server_id}/members", response_model=list[User])
async def get_members(
    server_id: str,
    server_service: FromDishka[ServerService],
) -> list[User]:
    """List a server's members."""
    return await server_service.get_members(ServerId(server_id))
