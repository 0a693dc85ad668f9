"""
Users module data models.

User records are exposed over JSON with camelCase ``displayName`` to match
the public API; Python code uses ``display_name``.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

# Integer ids for the in-memory directory, generated strings (UUIDs) for Supabase.
UserId = Union[int, str]

# Query-string filter names accepted by GET /api/users, mapped to model fields.
FILTERABLE_FIELDS: dict[str, str] = {
    "username": "username",
    "displayName": "display_name",
    "display_name": "display_name",
}


class User(BaseModel):
    """
    A user record from the directory.

    ``password`` holds the stored credential (plaintext in the demo
    directory, an argon2 hash in Supabase). It is excluded from every
    serialization so it never leaves the process.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: UserId = Field(..., description="Directory-assigned identifier")
    username: str = Field(..., description="Unique login name")
    display_name: str = Field(default="", alias="displayName")
    password: str = Field(default="", exclude=True, repr=False)


def _check_not_empty(value: str) -> str:
    if not value:
        raise PydanticCustomError("empty", "Field must not be empty")
    return value


def _check_username(value: str) -> str:
    _check_not_empty(value)
    if not 5 <= len(value) <= 32:
        raise PydanticCustomError(
            "username_length",
            "Username must be at least 5 characters with a max of 32 characters",
        )
    return value


class ReplaceUserRequest(BaseModel):
    """
    Body for PUT /api/users/{id}.

    Only emptiness is checked on the username, so existing users whose
    names predate the registration length rule can still be replaced.
    """

    model_config = ConfigDict(populate_by_name=True)

    username: str
    display_name: str = Field(..., alias="displayName")
    password: Optional[str] = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return _check_not_empty(value)

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("empty", "Must have something")
        return value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value:
            raise PydanticCustomError("empty", "The password cannot be empty")
        return value


class CreateUserRequest(ReplaceUserRequest):
    """Body for POST /api/users; new usernames must be 5-32 characters."""

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return _check_username(value)


class UpdateUserRequest(BaseModel):
    """Body for PATCH /api/users/{id}; only provided fields are merged."""

    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    display_name: Optional[str] = Field(None, alias="displayName")
    password: Optional[str] = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _check_not_empty(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value:
            raise PydanticCustomError("empty", "The password cannot be empty")
        return value
