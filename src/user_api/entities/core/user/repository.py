"""User repository for data access operations."""

import re
from typing import Any

from loguru import logger
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from src.user_api.core.exceptions import DuplicateUsernameError
from src.user_api.entities.core._base import PagedResponse, utc_now
from src.user_api.entities.core.user import document as doc
from src.user_api.entities.core.user.entity import User
from src.user_api.entities.core.user.requests import CreateUserRequest, UpdateUserRequest

# Newest first; _id grows with insertion and breaks createdAt ties
_NEWEST_FIRST = [(doc.CREATED_AT, DESCENDING), (doc.ID, DESCENDING)]


class UserRepository:
    """Data-access layer for users.

    Each call is a single round trip to the store. Driver errors
    (``PyMongoError``) are not caught here and propagate to the caller.
    """

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def ensure_indexes(self) -> None:
        """Create the unique username index and the listing sort index."""
        self._collection.create_index(
            [(doc.USERNAME, ASCENDING)], unique=True, name="username_unique"
        )
        self._collection.create_index(_NEWEST_FIRST, name="created_at_desc")

    def get_by_id(self, user_id: str) -> User | None:
        object_id = doc.parse_object_id(user_id)
        if object_id is None:
            return None
        found = self._collection.find_one({doc.ID: object_id})
        return None if found is None else doc.to_entity(found)

    def get_by_username(self, username: str) -> User | None:
        found = self._collection.find_one({doc.USERNAME: username})
        return None if found is None else doc.to_entity(found)

    def list_paged(self, page: int, page_size: int) -> PagedResponse[User]:
        """Return one page of all users, most recently created first."""
        return self._find_paged({}, page, page_size)

    def search_paged(
        self, username_pattern: str, page: int, page_size: int
    ) -> PagedResponse[User]:
        """Return one page of users whose username contains ``username_pattern``.

        Matching is case-insensitive. The pattern is escaped, so characters
        such as ``.`` or ``*`` only match themselves.
        """
        query = {
            doc.USERNAME: {"$regex": re.escape(username_pattern), "$options": "i"}
        }
        return self._find_paged(query, page, page_size)

    def create(self, request: CreateUserRequest) -> User:
        """Insert a new user.

        Raises:
            DuplicateUsernameError: if the exact username is already taken.
        """
        if self._username_taken(request.username):
            raise DuplicateUsernameError(request.username)

        document = doc.new_document(request, utc_now())
        try:
            result = self._collection.insert_one(document)
        except DuplicateKeyError as e:
            # Lost a race with a concurrent create of the same username
            raise DuplicateUsernameError(request.username) from e

        document[doc.ID] = result.inserted_id
        user = doc.to_entity(document)
        logger.info("Created user {} ({})", user.username, user.id)
        return user

    def update_by_username(self, username: str, patch: UpdateUserRequest) -> User | None:
        """Apply a partial update and return the stored result.

        Only non-empty patch fields are written; ``updated_at`` always moves.
        Returns None when no user has this username.
        """
        changes: dict[str, Any] = {doc.UPDATED_AT: utc_now()}
        for attribute, field in doc.PATCHABLE_FIELDS.items():
            value = getattr(patch, attribute)
            if value:
                changes[field] = value

        updated = self._collection.find_one_and_update(
            {doc.USERNAME: username},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            return None
        return doc.to_entity(updated)

    def delete(self, user_id: str) -> bool:
        """Delete a user by id; True only if a document was removed."""
        object_id = doc.parse_object_id(user_id)
        if object_id is None:
            return False
        result = self._collection.delete_one({doc.ID: object_id})
        return result.deleted_count > 0

    def _username_taken(self, username: str) -> bool:
        return self._collection.find_one({doc.USERNAME: username}, {doc.ID: 1}) is not None

    def _find_paged(
        self, query: dict[str, Any], page: int, page_size: int
    ) -> PagedResponse[User]:
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")

        skip = (page - 1) * page_size
        total_count = self._collection.count_documents(query)
        if skip >= total_count:
            # Past the end; skip may also exceed the BSON int64 range here
            return PagedResponse[User](
                data=[], page=page, page_size=page_size, total_count=total_count
            )

        cursor = (
            self._collection.find(query)
            .sort(_NEWEST_FIRST)
            .skip(skip)
            .limit(page_size)
        )
        return PagedResponse[User](
            data=[doc.to_entity(found) for found in cursor],
            page=page,
            page_size=page_size,
            total_count=total_count,
        )
