"""
Authentication endpoints.

Each login flow gets the same three endpoints (login, status, logout) from
create_auth_router(); the app mounts one router per strategy.
"""

from typing import Callable

from fastapi import APIRouter, Depends, Response

from api.middleware.auth import get_session
from api.models.errors import ErrorResponse, ValidationErrorResponse
from modules.sessions.context import SessionContext
from modules.users.models import User

from .exceptions import NotAuthenticatedError
from .interfaces import IAuthStrategy
from .models import LoginRequest


def create_auth_router(
    get_strategy: Callable[[], IAuthStrategy],
    *,
    echo_user: bool,
    status_failure_message: str = "Unauthorized",
) -> APIRouter:
    """
    Build login/status/logout routes for one strategy.

    Args:
        get_strategy: FastAPI dependency returning the strategy
        echo_user: Return the user record from a successful login
            (otherwise an empty 200)
        status_failure_message: ``msg`` of the 401 returned by /status
    """
    router = APIRouter(responses={401: {"model": ErrorResponse}})

    @router.post("", response_model=None, responses={400: {"model": ValidationErrorResponse}})
    async def login(
        credentials: LoginRequest,
        session: SessionContext = Depends(get_session),
        strategy: IAuthStrategy = Depends(get_strategy),
    ):
        """
        Log in with username and password.

        Sets the session cookie on success; 401 with a generic message on
        any credential mismatch.
        """
        user = await strategy.login(session, credentials.username, credentials.password)
        if echo_user:
            return user
        return Response(status_code=200)

    @router.get("/status", response_model=User)
    async def status(
        session: SessionContext = Depends(get_session),
        strategy: IAuthStrategy = Depends(get_strategy),
    ) -> User:
        """Return the logged-in user, or 401."""
        user = await strategy.current_user(session)
        if user is None:
            raise NotAuthenticatedError(status_failure_message)
        return user

    @router.post("/logout", responses={400: {"model": ErrorResponse}})
    async def logout(
        session: SessionContext = Depends(get_session),
        strategy: IAuthStrategy = Depends(get_strategy),
    ) -> Response:
        """Destroy the session of the logged-in user."""
        if await strategy.current_user(session) is None:
            raise NotAuthenticatedError()
        await strategy.logout(session)
        return Response(status_code=200)

    return router
