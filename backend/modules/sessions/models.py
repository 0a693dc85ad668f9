"""
Server-side session state.

Every piece of data a request may keep between calls has a named field
with a default, instead of an open-ended dictionary.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from modules.users.models import User, UserId


class SessionState(BaseModel):
    """
    State stored under one session identifier.

    Fields:
        user: Full user record written by the direct-embedding login flow.
            Replaced wholesale on each login, cleared by destroying the session.
        principal_id: Reference written by the strategy-mediated login flow;
            re-expanded into a User on each request.
        cart: Items added through POST /api/cart, in arrival order.
            Only ever appended to.
        visited: Set by the root endpoint; never reset.
    """

    user: Optional[User] = None
    principal_id: Optional[UserId] = None
    cart: list[Any] = Field(default_factory=list)
    visited: bool = False

    def add_to_cart(self, item: Any) -> None:
        self.cart.append(item)
