"""
Root endpoint.

Marks the session as visited and hands out the signed capability cookie
that /api/products checks.
"""

from fastapi import APIRouter, Depends, Response

from shared.config import Settings
from shared.cookies import CookieSigner
from modules.sessions.context import SessionContext
from modules.sessions.models import SessionState

from ..dependencies import get_app_settings, get_capability_cookie_signer
from ..middleware.auth import get_session

router = APIRouter()


def _mark_visited(state: SessionState) -> None:
    state.visited = True


@router.get("/")
async def root(
    response: Response,
    session: SessionContext = Depends(get_session),
    signer: CookieSigner = Depends(get_capability_cookie_signer),
    settings: Settings = Depends(get_app_settings),
) -> dict[str, str]:
    await session.update(_mark_visited)
    response.set_cookie(
        settings.capability_cookie_name,
        signer.sign(settings.capability_cookie_value),
        max_age=settings.capability_cookie_max_age,
        path="/",
        httponly=True,
        samesite="lax",
    )
    return {"msg": "Hello World!"}
