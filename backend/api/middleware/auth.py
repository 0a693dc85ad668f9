"""
Request-level access gates.

- get_session: the SessionContext attached by ServerSessionMiddleware
- get_current_principal / require_principal: the logged-in user, whichever
  login flow produced it
- require_capability_cookie: the signed-cookie check guarding protected
  resources, independent of any session
"""

import hmac
import logging
from typing import Optional

from fastapi import Depends, Request

from shared.config import Settings
from shared.cookies import CookieSigner
from modules.auth.exceptions import NotAuthenticatedError
from modules.auth.strategies import SessionPrincipalResolver
from modules.products.exceptions import MissingCapabilityCookieError
from modules.sessions.context import SessionContext
from modules.users.models import User

from ..dependencies import (
    get_app_settings,
    get_capability_cookie_signer,
    get_principal_resolver,
)

logger = logging.getLogger(__name__)


def get_session(request: Request) -> SessionContext:
    """
    Dependency returning the request's session handle.

    Raises:
        RuntimeError: If ServerSessionMiddleware is not installed
    """
    session = getattr(request.state, "session", None)
    if session is None:
        raise RuntimeError("ServerSessionMiddleware is not installed")
    return session


async def get_current_principal(
    session: SessionContext = Depends(get_session),
    resolver: SessionPrincipalResolver = Depends(get_principal_resolver),
) -> Optional[User]:
    """
    Dependency that optionally extracts the logged-in user.

    Usage:
        @router.get("/public")
        async def public_route(user: Optional[User] = Depends(get_current_principal)):
            ...
    """
    return await resolver.resolve(session)


async def require_principal(
    user: Optional[User] = Depends(get_current_principal),
) -> User:
    """
    Dependency that requires a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(require_principal)):
            return {"user_id": user.id}
    """
    if user is None:
        raise NotAuthenticatedError()
    return user


async def require_capability_cookie(
    request: Request,
    signer: CookieSigner = Depends(get_capability_cookie_signer),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """
    Dependency that requires the signed capability cookie.

    A missing cookie, a bad signature, an expired signature and an
    unexpected value are all rejected the same way.
    """
    raw = request.cookies.get(settings.capability_cookie_name)
    value = signer.unsign(raw)
    if value is None or not hmac.compare_digest(value, settings.capability_cookie_value):
        if raw:
            logger.warning(f"Rejected {settings.capability_cookie_name} cookie on {request.url.path}")
        raise MissingCapabilityCookieError()
    return value


# Type alias for route-level dependencies
RequireCapabilityCookie = Depends(require_capability_cookie)
