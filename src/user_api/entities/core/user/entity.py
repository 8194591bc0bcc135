"""User domain entity and its HTTP representation."""

from datetime import datetime
from typing import Any

from pydantic import Field

from src.user_api.entities.core._base import ApiModel, Entity


class User(Entity):
    """User entity representing an account in the system.

    ``username`` is unique by exact, case-sensitive match.
    """

    username: str = Field(min_length=1, description="Login name")
    email: str | None = Field(default=None, description="User's email address")
    first_name: str | None = Field(default=None, description="User's first name")
    last_name: str | None = Field(default=None, description="User's last name")

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.username == other.username
            and self.email == other.email
            and self.first_name == other.first_name
            and self.last_name == other.last_name
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.username,
            self.email,
            self.first_name,
            self.last_name,
        ))


class UserResponse(ApiModel):
    """User as returned by the API."""

    id: str
    username: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
