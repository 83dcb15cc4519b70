"""Dashboard, single-user creation and typeahead routes."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse, Response

from trueconf_console.api.auth import require_auth
from trueconf_console.api.flash import add_flash, keep_old_input
from trueconf_console.api.views import DashboardView, PageView, page_defaults, render
from trueconf_console.domain.errors import DirectoryError, ValidationError
from trueconf_console.domain.users import build_user_record

if TYPE_CHECKING:
    from trueconf_console.containers import AppContainer

router = APIRouter(dependencies=[Depends(require_auth)], tags=["users"])

MIN_TYPEAHEAD_LENGTH = 2


@router.get("/")
async def dashboard(request: Request, search: str = "", page: str = "1") -> Response:
    """Look up users by id and show one page of results."""
    container: AppContainer = request.app.state.container
    limit = container.settings.page_size
    current_page = _parse_page(page)
    view = DashboardView(
        **page_defaults(request, "Dashboard"),
        search_query=search,
        current_page=current_page,
    )
    if search:
        try:
            found = await container.directory_service.fetch_by_id(search)
        except DirectoryError:
            view.error = "Failed to fetch user data. Please try again."
        else:
            view.total_pages = math.ceil(len(found) / limit)
            start = (current_page - 1) * limit
            view.users = found[start : start + limit]
            if view.users:
                view.search_success_msg = f'Search for "{search}" found results.'
    return render(request, "index.html", view)


@router.get("/tambah")
async def create_user_page(request: Request) -> Response:
    return render(
        request, "tambah-user.html", PageView(**page_defaults(request, "Add User"))
    )


@router.post("/tambah")
async def create_user(  # noqa: PLR0913
    request: Request,
    id: str = Form(default=""),  # noqa: A002
    password: str = Form(default=""),
    display_name: str = Form(default=""),
    first_name: str = Form(default=""),
    last_name: str = Form(default=""),
    company: str = Form(default=""),
) -> Response:
    """Create one user from the form and jump to it on the dashboard."""
    container: AppContainer = request.app.state.container
    submitted = {
        "id": id,
        "display_name": display_name,
        "first_name": first_name,
        "last_name": last_name,
        "company": company,
    }
    try:
        record = build_user_record(
            user_id=id,
            password=password,
            email_domain=container.settings.email_domain,
            display_name=display_name,
            first_name=first_name,
            last_name=last_name,
            company=company,
        )
    except ValidationError as exc:
        add_flash(request, str(exc), "error")
        keep_old_input(request, submitted)
        return RedirectResponse("/tambah", status_code=status.HTTP_303_SEE_OTHER)

    try:
        await container.directory_service.create_user(record)
    except DirectoryError as exc:
        add_flash(request, f"Failed to add user: {exc.message}", "error")
        keep_old_input(request, submitted)
        return RedirectResponse("/tambah", status_code=status.HTTP_303_SEE_OTHER)

    add_flash(request, f'User "{record.id}" was added successfully.', "success")
    return RedirectResponse(
        f"/?search={quote(record.id, safe='')}",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/api/users/search")
async def search_users(request: Request, term: str = "") -> list[str]:
    """Return matching user ids for autocomplete."""
    if len(term) < MIN_TYPEAHEAD_LENGTH:
        return []
    container: AppContainer = request.app.state.container
    users = await container.directory_service.search(
        term, limit=container.settings.typeahead_limit
    )
    return [str(user["id"]) for user in users if user.get("id")]


def _parse_page(raw: str) -> int:
    try:
        page = int(raw)
    except ValueError:
        return 1
    return page if page > 0 else 1
