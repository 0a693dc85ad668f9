"""
Product endpoints.
"""

from fastapi import APIRouter

from api.middleware.auth import RequireCapabilityCookie
from api.models.errors import ErrorResponse

from .models import CATALOGUE, Product

router = APIRouter(responses={401: {"model": ErrorResponse}})


@router.get("", response_model=list[Product], dependencies=[RequireCapabilityCookie])
async def list_products() -> list[Product]:
    """
    List products.

    Requires the signed capability cookie set by GET /; 401 otherwise.
    """
    return list(CATALOGUE)
