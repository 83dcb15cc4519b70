"""Shared-password login gate."""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import RedirectResponse, Response

from trueconf_console.api.flash import add_flash
from trueconf_console.api.views import PageView, page_defaults, render

if TYPE_CHECKING:
    from trueconf_console.containers import AppContainer

router = APIRouter(tags=["auth"])

_logger = logging.getLogger(__name__)

SESSION_FLAG = "is_authenticated"


class LoginRequired(Exception):
    """Raised by protected routes when the session is not authenticated."""


def is_authenticated(request: Request) -> bool:
    return request.session.get(SESSION_FLAG) is True


async def require_auth(request: Request) -> None:
    """Ensure the browser session has passed the login gate."""
    if not is_authenticated(request):
        raise LoginRequired


async def login_required_handler(request: Request, exc: LoginRequired) -> Response:
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/login")
async def login_page(request: Request) -> Response:
    """Render the login form, or go to the dashboard when already signed in."""
    if is_authenticated(request):
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    return render(request, "login.html", PageView(**page_defaults(request, "Login")))


@router.post("/login")
async def login(request: Request, password: str = Form(default="")) -> Response:
    """Check the shared password and mark the session authenticated."""
    container: AppContainer = request.app.state.container
    expected = container.settings.app_password
    if password and hmac.compare_digest(password.encode(), expected.encode()):
        request.session[SESSION_FLAG] = True
        add_flash(request, "You have logged in successfully.", "success")
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    _logger.info("Rejected console login attempt")
    add_flash(request, "The password you entered is incorrect.", "error")
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/logout")
async def logout(request: Request) -> Response:
    """Clear the session and return to the login page."""
    request.session.clear()
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
