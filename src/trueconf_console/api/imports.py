"""Spreadsheet import routes: template download, review and progress stream."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import RedirectResponse, Response, StreamingResponse

from trueconf_console.api.auth import require_auth
from trueconf_console.api.flash import add_flash
from trueconf_console.api.import_models import ProcessImportRequest
from trueconf_console.api.views import ImportView, page_defaults, render
from trueconf_console.domain.errors import ValidationError
from trueconf_console.domain.imports import ProgressEvent
from trueconf_console.services.imports import build_template, parse_workbook

if TYPE_CHECKING:
    from trueconf_console.containers import AppContainer

router = APIRouter(dependencies=[Depends(require_auth)], tags=["imports"])

_logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
TEMPLATE_FILENAME = "template-tambah-user.xlsx"
_UPLOAD_TAB = "/import?tab=upload"


@router.get("/import")
async def import_page(request: Request, tab: str = "download") -> Response:
    """Render the import landing page on the requested tab."""
    view = ImportView(**page_defaults(request, "Import Users"), active_tab=tab)
    return render(request, "import-user.html", view)


@router.get("/download-template")
async def download_template() -> Response:
    """Serve the empty import workbook."""
    return Response(
        content=build_template(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={TEMPLATE_FILENAME}"},
    )


@router.post("/import/review")
async def review_import(
    request: Request,
    user_file: UploadFile | None = File(default=None, alias="userFile"),
) -> Response:
    """Parse an uploaded workbook and show the rows for confirmation."""
    content = await user_file.read() if user_file is not None else b""
    if not content:
        add_flash(request, "No file found. Please upload an Excel file.", "error")
        return RedirectResponse(_UPLOAD_TAB, status_code=status.HTTP_303_SEE_OTHER)

    try:
        rows = parse_workbook(content)
    except ValidationError as exc:
        _logger.info("Rejected import file %s: %s", user_file.filename, exc)
        add_flash(request, str(exc), "error")
        return RedirectResponse(_UPLOAD_TAB, status_code=status.HTTP_303_SEE_OTHER)

    view = ImportView(
        **page_defaults(request, "Review Import Data"),
        active_tab="review",
        users_to_review=[asdict(row) for row in rows],
    )
    return render(request, "import-user.html", view)


@router.post("/import/process-stream")
async def process_import(
    payload: ProcessImportRequest, request: Request
) -> StreamingResponse:
    """Create the confirmed rows one by one, streaming progress as SSE."""
    container: AppContainer = request.app.state.container
    rows = [user.to_row() for user in payload.users]
    events = container.import_service.process(rows)
    return StreamingResponse(
        _sse(events),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


async def _sse(events: AsyncIterator[ProgressEvent]) -> AsyncIterator[str]:
    async for event in events:
        yield f"data: {json.dumps(event.to_dict())}\n\n"
