"""User and friendship routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel

from dischord.domain.model import Friendship, User
from dischord.domain.service import UserService
from dischord.domain.value import UserId

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class CreateUserAPIRequest(BaseModel):
    """API request for creating a user."""

    username: str = ""
    email: str = ""


class AddFriendAPIRequest(BaseModel):
    """API request for befriending another user."""

    friend_id: str = ""


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserAPIRequest,
    user_service: FromDishka[UserService],
) -> User:
    """Register a new user.

    Args:
        request: Username and email
        user_service: User service from DI

    Returns:
        Created user with its generated ID
    """
    return await user_service.create_user(request.username, request.email)


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: str,
    user_service: FromDishka[UserService],
) -> User:
    """Get a user by ID."""
    return await user_service.get_user(UserId(user_id))


@router.post("/{user_id}/friends", response_model=Friendship)
async def add_friend(
    user_id: str,
    request: AddFriendAPIRequest,
    user_service: FromDishka[UserService],
) -> Friendship:
    """Befriend another user. Repeating the request is harmless."""
    return await user_service.add_friend(UserId(user_id), UserId(request.friend_id))


@router.get("/{user_id}/friends", response_model=list[User])
async def get_friends(
    user_id: str,
    user_service: FromDishka[UserService],
) -> list[User]:
    """List a user's friends."""
    return await user_service.get_friends(UserId(user_id))
