"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Request

from src.user_api.api.http.app_data import ApplicationDependencies
from src.user_api.core.services import MongoService
from src.user_api.entities.core.user import UserRepository
from src.user_api.runtime.context import get_config


def get_database_service(request: Request) -> MongoService:
    """Get the MongoDB service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_user_repository(request: Request) -> UserRepository:
    """Get the user repository instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.user_repository


def normalize_page(page: int) -> int:
    """Pages are 1-based; anything lower becomes the first page."""
    return page if page >= 1 else 1


def normalize_page_size(page_size: int) -> int:
    """Replace an out-of-range page size with the configured default."""
    pagination = get_config().pagination
    if page_size < 1 or page_size > pagination.max_page_size:
        return pagination.default_page_size
    return page_size


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
