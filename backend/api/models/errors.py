"""
Error response models.

Standardized error responses for the API.
"""

from typing import Any, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    msg: str
    code: Optional[str] = None
    details: dict[str, Any] = {}


class FieldError(BaseModel):
    """One failed field of a request body or query string."""

    type: str = "field"
    location: str
    path: str
    msg: str


class ValidationErrorResponse(BaseModel):
    """Validation error response format."""

    error: list[FieldError]
