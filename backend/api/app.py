"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import Settings
from shared.exceptions import InternalError, ShopfrontError
from shared.logging import configure_logging
from modules.auth.routes import create_auth_router
from modules.cart.routes import router as cart_router
from modules.products.routes import router as products_router
from modules.sessions.service import purge_sessions_periodically
from modules.users.routes import router as users_router

from .dependencies import (
    get_container,
    get_local_strategy,
    get_session_strategy,
    use_settings,
)
from .middleware.logging import RequestLoggingMiddleware
from .middleware.session import ServerSessionMiddleware
from .models.errors import FieldError, ValidationErrorResponse
from .routes import root

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    container = get_container()
    settings = container.settings
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    logger.info(f"User directory backend: {settings.user_directory}")
    purger = asyncio.create_task(
        purge_sessions_periodically(container.session_store, settings.session_purge_interval)
    )
    yield
    # Shutdown
    purger.cancel()
    with suppress(asyncio.CancelledError):
        await purger
    logger.info(f"Shutting down {settings.app_name}")


async def shopfront_error_handler(request: Request, exc: ShopfrontError) -> JSONResponse:
    """Map module exceptions to their HTTP status and a {msg, code, details} body."""
    if isinstance(exc, InternalError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every failed field, with 400 instead of FastAPI's 422."""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        errors.append(
            FieldError(
                location=loc[0] if loc else "body",
                path=".".join(loc[1:]),
                msg=error.get("msg", "Invalid value"),
            )
        )
    body = ValidationErrorResponse(error=errors)
    return JSONResponse(status_code=400, content=body.model_dump())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment-derived ones.
            The service container is rebuilt on them unless it already
            uses this exact object.

    Returns:
        Configured FastAPI instance
    """
    container = use_settings(settings) if settings is not None else get_container()
    settings = container.settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Session and signed-cookie authentication demo shop",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    app.add_exception_handler(ShopfrontError, shopfront_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Last added runs first: CORS, then request logging, then sessions.
    app.add_middleware(ServerSessionMiddleware, get_container=get_container)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Register routes
    app.include_router(root.router, tags=["root"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(
        create_auth_router(get_local_strategy, echo_user=False),
        prefix="/api/auth",
        tags=["auth"],
    )
    app.include_router(
        create_auth_router(
            get_session_strategy,
            echo_user=True,
            status_failure_message="BAD CREDENTIALS",
        ),
        prefix="/api/auth/session",
        tags=["auth"],
    )
    app.include_router(cart_router, prefix="/api/cart", tags=["cart"])
    app.include_router(products_router, prefix="/api/products", tags=["products"])

    return app


# Application instance for uvicorn
app = create_app()
