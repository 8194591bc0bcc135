"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model and its API representation
- document.py: How the entity is stored in MongoDB
- requests.py: Payloads accepted by the HTTP layer
- repository.py: Data access layer
"""

from .core._base import PagedResponse
from .core.user import User, UserRepository, UserResponse

__all__ = [
    "PagedResponse",
    "User",
    "UserRepository",
    "UserResponse",
]
