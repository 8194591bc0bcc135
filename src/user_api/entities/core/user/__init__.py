"""Entity package: User."""

from .entity import User, UserResponse
from .repository import UserRepository
from .requests import CreateUserRequest, SearchUserRequest, UpdateUserRequest

__all__ = [
    "User",
    "UserResponse",
    "UserRepository",
    "CreateUserRequest",
    "SearchUserRequest",
    "UpdateUserRequest",
]
