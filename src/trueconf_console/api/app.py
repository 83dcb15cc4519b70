"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from trueconf_console.api.auth import LoginRequired, login_required_handler
from trueconf_console.api.auth import router as auth_router
from trueconf_console.api.imports import router as imports_router
from trueconf_console.api.users import router as users_router
from trueconf_console.api.views import ErrorView, build_templates, render
from trueconf_console.app_logging import configure_logging
from trueconf_console.containers import AppContainer

_NOT_FOUND_MESSAGE = "Page Not Found"
_SERVER_ERROR_MESSAGE = "Internal Server Error"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    settings = container.settings
    configure_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.state.templates = build_templates()
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie="session",
        max_age=settings.session_max_age_seconds,
        https_only=settings.session_https_only,
    )

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(imports_router)
    app.add_exception_handler(LoginRequired, login_required_handler)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
        message = _NOT_FOUND_MESSAGE if exc.status_code == 404 else str(exc.detail)
        view = ErrorView(
            title="Error",
            current_path=request.url.path,
            message=message,
            status_code=exc.status_code,
        )
        return render(request, "error.html", view, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception) -> Response:
        logger.exception("Unhandled error on %s", request.url.path)
        view = ErrorView(
            title="Error",
            current_path=request.url.path,
            message=_SERVER_ERROR_MESSAGE,
            status_code=500,
        )
        return render(request, "error.html", view, status_code=500)

    return app
