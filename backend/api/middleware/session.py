"""
Server-side session middleware.

Reads the signed session identifier from the session cookie, attaches a
SessionContext to ``request.state.session`` and, once the handler has run,
sends a cookie back only if the session was written, or clears it if the
session was destroyed. Requests that never write produce no cookie.
"""

import logging
from typing import TYPE_CHECKING, Callable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from modules.sessions.context import SessionContext

if TYPE_CHECKING:
    from ..dependencies import ServiceContainer

logger = logging.getLogger(__name__)


class ServerSessionMiddleware(BaseHTTPMiddleware):
    """
    Binds each request to its server-side session.

    The container is looked up per request so tests can swap it without
    rebuilding the app.
    """

    def __init__(self, app: ASGIApp, get_container: Callable[[], "ServiceContainer"]):
        super().__init__(app)
        self._get_container = get_container

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        container = self._get_container()
        settings = container.settings
        signer = container.session_signer

        raw = request.cookies.get(settings.session_cookie_name)
        session_id = signer.unsign(raw)
        if raw and session_id is None:
            logger.warning("Ignoring session cookie with invalid signature")

        context = SessionContext(container.sessions, session_id)
        request.state.session = context

        response = await call_next(request)

        if context.destroyed:
            response.delete_cookie(
                settings.session_cookie_name,
                path="/",
                secure=settings.session_cookie_secure,
                httponly=True,
                samesite="lax",
            )
        elif context.modified and context.session_id:
            response.set_cookie(
                settings.session_cookie_name,
                signer.sign(context.session_id),
                max_age=settings.session_max_age,
                path="/",
                secure=settings.session_cookie_secure,
                httponly=True,
                samesite="lax",
            )
        return response
