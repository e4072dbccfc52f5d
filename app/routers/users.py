# =============================================================================
# app/routers/users.py - User CRUD Endpoints
# =============================================================================
# List/create/read/update/delete for the users resource.
# Handlers only translate HTTP <-> UserService; failures are raised as
# StarterApiException subclasses and rendered by the handlers in main.py.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from app.dependencies import UserServiceDep
from core.models.envelope import ApiResponse, PaginatedResponse
from core.models.user import User, UserPayload

router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[User],
    response_model_exclude_none=True,
)
async def list_users(
    service: UserServiceDep,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 10,
    search: Annotated[str | None, Query(description="Match name or email (case-insensitive)")] = None,
):
    """
    List users with pagination.

    With `search`, only users whose name or email contains it are returned;
    `pagination.total` counts all matches.
    """
    users, pagination = service.list_users(page=page, limit=limit, search=search)
    return PaginatedResponse[User](success=True, data=users, pagination=pagination)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[User],
    response_model_exclude_none=True,
)
async def create_user(payload: UserPayload, service: UserServiceDep):
    """
    Create a user.

    `name` and `email` are required; the email must not be in use.
    """
    user = service.create_user(payload)
    return ApiResponse[User](success=True, data=user, message="User created successfully")


@router.get(
    "/{user_id}",
    response_model=ApiResponse[User],
    response_model_exclude_none=True,
)
async def get_user(
    user_id: Annotated[str, Path(description="User ID")],
    service: UserServiceDep,
):
    """Get one user."""
    user = service.get_user(user_id)
    return ApiResponse[User](success=True, data=user)


@router.put(
    "/{user_id}",
    response_model=ApiResponse[User],
    response_model_exclude_none=True,
)
async def update_user(
    user_id: Annotated[str, Path(description="User ID")],
    payload: UserPayload,
    service: UserServiceDep,
):
    """
    Update a user.

    `name` and `email` must be resupplied. `avatar` is left unchanged when
    omitted and cleared when sent as null.
    """
    user = service.update_user(user_id, payload)
    return ApiResponse[User](success=True, data=user, message="User updated successfully")


@router.delete(
    "/{user_id}",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
)
async def delete_user(
    user_id: Annotated[str, Path(description="User ID")],
    service: UserServiceDep,
):
    """Permanently delete a user."""
    service.delete_user(user_id)
    return ApiResponse[None](success=True, message="User deleted successfully")
