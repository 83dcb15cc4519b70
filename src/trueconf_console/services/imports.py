"""Spreadsheet import pipeline for bulk user creation."""

import io
import logging
import zipfile
from collections.abc import AsyncIterator
from dataclasses import dataclass

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from trueconf_console.domain.errors import ConsoleError, ValidationError
from trueconf_console.domain.imports import (
    TEMPLATE_COLUMNS,
    ImportSummary,
    ProgressEvent,
)
from trueconf_console.domain.users import ImportRow, record_from_row
from trueconf_console.services.directory import DirectoryService

_logger = logging.getLogger(__name__)

_COLUMN_WIDTHS = {"A": 25, "B": 20, "C": 30, "D": 25, "E": 25, "F": 30}
_SEPARATOR = "-" * 43

UNREADABLE_FILE_MESSAGE = (
    "Failed to process the Excel file. Make sure the format is correct."
)
HEADER_MISMATCH_MESSAGE = (
    "The Excel header does not match the expected format. "
    "Please use the provided template."
)


def build_template() -> bytes:
    """Return an empty import workbook containing only the header row."""
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Template"
    worksheet.append(list(TEMPLATE_COLUMNS))
    for column, width in _COLUMN_WIDTHS.items():
        worksheet.column_dimensions[column].width = width
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def parse_workbook(content: bytes) -> list[ImportRow]:
    """Parse and validate an uploaded workbook.

    Only the first worksheet is read. The whole batch is rejected when the
    header differs from the template or a non-blank row lacks an id or a
    password.
    """
    try:
        workbook = load_workbook(io.BytesIO(content), data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise ValidationError(UNREADABLE_FILE_MESSAGE) from exc

    try:
        worksheet = workbook.worksheets[0]
        rows = list(worksheet.iter_rows(values_only=True))
    finally:
        workbook.close()

    if not rows:
        raise ValidationError(HEADER_MISMATCH_MESSAGE)
    header = _pad(rows[0])
    if tuple(header) != TEMPLATE_COLUMNS:
        raise ValidationError(HEADER_MISMATCH_MESSAGE)

    parsed: list[ImportRow] = []
    for row_number, values in enumerate(rows[1:], start=2):
        cells = [_cell_text(value) for value in _pad(values)]
        row = ImportRow(
            id=cells[0].strip(),
            password=cells[1],
            display_name=cells[2],
            first_name=cells[3],
            last_name=cells[4],
            company=cells[5],
        )
        if row.is_blank():
            continue
        if not row.id or not row.password:
            raise ValidationError(
                f"Invalid data on row {row_number}. "
                "The 'id' and 'password' columns are required."
            )
        parsed.append(row)
    return parsed


@dataclass
class ImportService:
    """Drives sequential creation of confirmed import rows."""

    directory_service: DirectoryService
    email_domain: str

    async def process(self, rows: list[ImportRow]) -> AsyncIterator[ProgressEvent]:
        """Create each row in order, yielding progress events as it goes."""
        if not rows:
            yield ProgressEvent(log="No user data to process.", done=True)
            return

        summary = ImportSummary(total=len(rows))
        _logger.info("Starting bulk import of %s users", summary.total)
        yield ProgressEvent(log=f"Starting to add {summary.total} users...")

        for row in rows:
            yield ProgressEvent(log=_SEPARATOR)
            yield ProgressEvent(log=f"Adding user: {row.id}")
            try:
                record = record_from_row(row, self.email_domain)
                result = await self.directory_service.create_user(record)
            except ConsoleError as exc:
                summary.failed += 1
                yield ProgressEvent(
                    log=f'FAILED: User "{row.id}" could not be created. Reason: {exc}'
                )
                continue
            summary.succeeded += 1
            created_id = _created_id(result)
            if created_id:
                yield ProgressEvent(
                    log=f'SUCCESS: User "{created_id}" was processed.'
                )
            else:
                yield ProgressEvent(
                    log=(
                        f'SUCCESS: User "{row.id}" was processed, '
                        "but the response was unexpected."
                    )
                )

        _logger.info(
            "Bulk import finished: %s succeeded, %s failed",
            summary.succeeded,
            summary.failed,
        )
        yield ProgressEvent(log=_SEPARATOR)
        yield ProgressEvent(
            log=(
                f"Import finished: {summary.succeeded} succeeded, "
                f"{summary.failed} failed."
            )
        )
        yield ProgressEvent(done=True)


def _pad(values: tuple[object, ...]) -> list[object]:
    """Return exactly the template-width slice of a row."""
    width = len(TEMPLATE_COLUMNS)
    cells = list(values[:width])
    return cells + [None] * (width - len(cells))


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _created_id(result: object) -> str | None:
    if not isinstance(result, dict):
        return None
    user = result.get("user")
    if isinstance(user, dict) and user.get("id"):
        return str(user["id"])
    return None
