"""User document layout in the ``users`` collection.

This is how the User entity is stored. It is kept apart from the domain
entity so the stored field names can follow the wire format while the
entity keeps Python naming.
"""

from datetime import datetime
from typing import Any

from bson import ObjectId

from src.user_api.entities.core._base import as_utc
from src.user_api.entities.core.user.entity import User
from src.user_api.entities.core.user.requests import CreateUserRequest

ID = "_id"
USERNAME = "username"
EMAIL = "email"
FIRST_NAME = "firstName"
LAST_NAME = "lastName"
CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"

# Patchable entity attribute -> stored field
PATCHABLE_FIELDS = {
    "email": EMAIL,
    "first_name": FIRST_NAME,
    "last_name": LAST_NAME,
}


def parse_object_id(value: str) -> ObjectId | None:
    """Return the ObjectId for ``value``, or None when it is not one."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def new_document(request: CreateUserRequest, now: datetime) -> dict[str, Any]:
    """Build the document inserted for a new user."""
    return {
        USERNAME: request.username,
        EMAIL: request.email,
        FIRST_NAME: request.first_name,
        LAST_NAME: request.last_name,
        CREATED_AT: now,
        UPDATED_AT: now,
    }


def to_entity(document: dict[str, Any]) -> User:
    return User(
        id=str(document[ID]),
        username=document[USERNAME],
        email=document.get(EMAIL),
        first_name=document.get(FIRST_NAME),
        last_name=document.get(LAST_NAME),
        created_at=as_utc(document[CREATED_AT]),
        updated_at=as_utc(document[UPDATED_AT]),
    )
