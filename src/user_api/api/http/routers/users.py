"""User API router: listing, search, creation and update."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from loguru import logger
from pymongo.errors import PyMongoError

from src.user_api.api.http.deps import (
    get_user_repository,
    is_blank,
    normalize_page,
    normalize_page_size,
)
from src.user_api.core.exceptions import DuplicateUsernameError
from src.user_api.entities.core._base import PagedResponse
from src.user_api.entities.core.user import (
    CreateUserRequest,
    SearchUserRequest,
    UpdateUserRequest,
    User,
    UserRepository,
    UserResponse,
)

router = APIRouter(prefix="/api/v1/users", tags=["users"])


def _to_response_page(page: PagedResponse[User]) -> PagedResponse[UserResponse]:
    return PagedResponse[UserResponse](
        data=[UserResponse.from_entity(user) for user in page.data],
        page=page.page,
        page_size=page.page_size,
        total_count=page.total_count,
    )


@router.get("", response_model=PagedResponse[UserResponse])
def list_users(
    page: int = Query(default=1),
    page_size: int = Query(default=10, alias="pageSize"),
    repository: UserRepository = Depends(get_user_repository),
) -> PagedResponse[UserResponse]:
    """Get all users with pagination, newest first."""
    result = repository.list_paged(normalize_page(page), normalize_page_size(page_size))
    return _to_response_page(result)


@router.post("/search", response_model=PagedResponse[UserResponse])
def search_users(
    search: SearchUserRequest,
    repository: UserRepository = Depends(get_user_repository),
) -> PagedResponse[UserResponse]:
    """Search users by username (partial match, case-insensitive)."""
    if is_blank(search.username):
        raise HTTPException(status_code=400, detail="Username is required")

    result = repository.search_paged(
        search.username,
        normalize_page(search.page),
        normalize_page_size(search.page_size),
    )
    return _to_response_page(result)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_request: CreateUserRequest,
    request: Request,
    response: Response,
    repository: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Create a new user."""
    if is_blank(user_request.username):
        raise HTTPException(status_code=400, detail="Username is required")

    try:
        user = repository.create(user_request)
    except DuplicateUsernameError as e:
        logger.warning("Rejected duplicate username {!r}", e.username)
        raise HTTPException(status_code=409, detail=str(e)) from e
    except PyMongoError as e:
        logger.exception("Error creating user")
        raise HTTPException(
            status_code=500, detail="An error occurred while creating the user"
        ) from e

    response.headers["Location"] = str(
        request.url_for("list_users").include_query_params(id=user.id)
    )
    return UserResponse.from_entity(user)


@router.put("/{username}", response_model=UserResponse)
def update_user(
    username: str,
    patch: UpdateUserRequest,
    repository: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Update user details by username."""
    if is_blank(username):
        raise HTTPException(status_code=400, detail="Username is required")

    user = repository.update_by_username(username, patch)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.from_entity(user)
