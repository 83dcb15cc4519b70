"""Request models for the import confirmation step."""

from pydantic import BaseModel, Field

from trueconf_console.domain.users import ImportRow


class ImportRowPayload(BaseModel):
    """A reviewed spreadsheet row posted back by the browser."""

    id: str = ""
    password: str = ""
    display_name: str | None = ""
    first_name: str | None = ""
    last_name: str | None = ""
    company: str | None = ""

    def to_row(self) -> ImportRow:
        return ImportRow(
            id=self.id.strip(),
            password=self.password,
            display_name=self.display_name or "",
            first_name=self.first_name or "",
            last_name=self.last_name or "",
            company=self.company or "",
        )


class ProcessImportRequest(BaseModel):
    """Confirmed import batch."""

    users: list[ImportRowPayload] = Field(default_factory=list)
