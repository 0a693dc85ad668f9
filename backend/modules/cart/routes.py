"""
Cart endpoints.

The cart lives in the caller's server-side session, so it survives between
requests for as long as the session does.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from api.middleware.auth import get_session, require_principal
from api.models.errors import ErrorResponse
from modules.sessions.context import SessionContext
from modules.sessions.models import SessionState
from modules.users.models import User

logger = logging.getLogger(__name__)

router = APIRouter(responses={401: {"model": ErrorResponse}})


@router.post("", status_code=201)
async def add_to_cart(
    item: Any = Body(...),
    user: User = Depends(require_principal),
    session: SessionContext = Depends(get_session),
) -> Any:
    """Append the request body to the cart and echo it back."""

    def append_item(state: SessionState) -> None:
        state.add_to_cart(item)

    state = await session.update(append_item)
    logger.debug(f"User {user.id} cart now holds {len(state.cart)} item(s)")
    return item


@router.get("")
async def get_cart(
    user: User = Depends(require_principal),
    session: SessionContext = Depends(get_session),
) -> list[Any]:
    """Return the cart, empty if nothing was added yet."""
    state = await session.load()
    return list(state.cart) if state is not None else []
