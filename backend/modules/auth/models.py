"""
Authentication module data models.
"""

from enum import Enum

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError


class VerifyFailure(str, Enum):
    """Why a credential check failed. Never sent to clients."""

    USER_NOT_FOUND = "user_not_found"
    BAD_CREDENTIALS = "bad_credentials"


class LoginRequest(BaseModel):
    """Credentials submitted to a login endpoint."""

    username: str
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("empty", "The username cannot be empty")
        return value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("empty", "The password cannot be empty")
        return value
