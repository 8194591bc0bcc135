from datetime import UTC, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def utc_now() -> datetime:
    """Current UTC time truncated to the millisecond precision MongoDB stores."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


def as_utc(value: datetime) -> datetime:
    """Attach or convert to UTC; the driver returns naive UTC datetimes."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class ApiModel(BaseModel):
    """Base for models exchanged over HTTP: camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Entity(BaseModel):
    """Base entity with a store-generated identifier and audit timestamps."""

    id: str = PydanticField(description="Unique identifier for the entity")

    created_at: datetime = PydanticField(default_factory=utc_now)
    updated_at: datetime = PydanticField(default_factory=utc_now)


class PagedResponse(ApiModel, Generic[T]):
    """One page of results plus the total number of matching rows."""

    data: list[T] = PydanticField(default_factory=list)
    page: int = PydanticField(description="1-based page number")
    page_size: int = PydanticField(description="Requested page size")
    total_count: int = PydanticField(
        description="Total matching rows, independent of the page window"
    )
