"""
User CRUD endpoints.

All routes go through IUserDirectory; the active backend (memory or
Supabase) is chosen by the service container.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from api.dependencies import get_user_directory

from .exceptions import UserRecordNotFoundError
from .interfaces import IUserDirectory
from .models import CreateUserRequest, ReplaceUserRequest, UpdateUserRequest, User

router = APIRouter()


@router.get("", response_model=list[User])
async def list_users(
    filter_: Optional[str] = Query(
        default=None,
        alias="filter",
        min_length=3,
        max_length=10,
        description="Field to filter on (username or displayName)",
    ),
    value: Optional[str] = Query(default=None, min_length=1, description="Substring to match"),
    directory: IUserDirectory = Depends(get_user_directory),
) -> list[User]:
    """
    List users.

    When both ``filter`` and ``value`` are given, only users whose field
    contains the value are returned.
    """
    return await directory.list_users(filter_, value)


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: str,
    directory: IUserDirectory = Depends(get_user_directory),
) -> User:
    """Get a single user by id."""
    parsed = directory.parse_id(user_id)
    user = await directory.find_by_id(parsed)
    if user is None:
        raise UserRecordNotFoundError(parsed)
    return user


@router.post("", response_model=User, status_code=201)
async def create_user(
    request: CreateUserRequest,
    directory: IUserDirectory = Depends(get_user_directory),
) -> User:
    """Register a new user."""
    return await directory.insert(request)


@router.put("/{user_id}", response_model=User)
async def replace_user(
    user_id: str,
    request: ReplaceUserRequest,
    directory: IUserDirectory = Depends(get_user_directory),
) -> User:
    """Replace a user's fields, keeping its id."""
    return await directory.replace(directory.parse_id(user_id), request)


@router.patch("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    directory: IUserDirectory = Depends(get_user_directory),
) -> User:
    """Merge the provided fields into a user."""
    return await directory.update(directory.parse_id(user_id), request)


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    directory: IUserDirectory = Depends(get_user_directory),
) -> Response:
    await directory.delete(directory.parse_id(user_id))
    return Response(status_code=200)
