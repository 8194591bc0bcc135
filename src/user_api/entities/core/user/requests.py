"""Request payloads accepted by the user endpoints."""

from pydantic import Field

from src.user_api.entities.core._base import ApiModel


class CreateUserRequest(ApiModel):
    username: str | None = Field(default=None, description="Login name; must not be blank")
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class UpdateUserRequest(ApiModel):
    """Partial update; omitted or empty fields keep their stored value."""

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class SearchUserRequest(ApiModel):
    username: str | None = Field(
        default=None, description="Case-insensitive substring to look for"
    )
    page: int = 1
    page_size: int = 10
