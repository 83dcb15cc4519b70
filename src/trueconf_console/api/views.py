"""Per-request view models and template rendering."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from trueconf_console.api.flash import pop_flashes, pop_old_input

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
DEFAULT_TITLE = "TrueConf User Manager"


@dataclass
class PageView:
    """Values shared by every rendered page."""

    title: str = DEFAULT_TITLE
    current_path: str = "/"
    flashes: list[dict[str, str]] = field(default_factory=list)
    old_input: dict[str, str] = field(default_factory=dict)
    error: str | None = None


@dataclass
class DashboardView(PageView):
    """Dashboard search results with pagination state."""

    users: list[dict[str, object]] = field(default_factory=list)
    search_query: str = ""
    current_page: int = 1
    total_pages: int = 0
    search_success_msg: str | None = None


@dataclass
class ImportView(PageView):
    """Import landing and review state."""

    active_tab: str = "download"
    users_to_review: list[dict[str, str]] = field(default_factory=list)


@dataclass
class ErrorView(PageView):
    message: str = ""
    status_code: int = 500


def page_defaults(request: Request, title: str) -> dict[str, object]:
    """Consume session notices for a page being rendered now."""
    return {
        "title": title,
        "current_path": request.url.path,
        "flashes": pop_flashes(request),
        "old_input": pop_old_input(request),
    }


def build_templates() -> Jinja2Templates:
    return Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request, template_name: str, view: PageView, status_code: int = 200
) -> HTMLResponse:
    """Render a template with an explicit view model."""
    templates: Jinja2Templates = request.app.state.templates
    return templates.TemplateResponse(
        request, template_name, asdict(view), status_code=status_code
    )
