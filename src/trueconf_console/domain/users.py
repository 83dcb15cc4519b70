"""User domain models."""

from dataclasses import asdict, dataclass

from trueconf_console.domain.errors import ValidationError


@dataclass(frozen=True)
class ImportRow:
    """A spreadsheet row awaiting confirmation."""

    id: str
    password: str
    display_name: str = ""
    first_name: str = ""
    last_name: str = ""
    company: str = ""

    def is_blank(self) -> bool:
        """Return true for trailing rows with no identifying data."""
        return not self.id and not self.password and not self.display_name


@dataclass(frozen=True)
class UserRecord:
    """User account payload accepted by the TrueConf users API."""

    id: str
    login_name: str
    password: str
    display_name: str
    first_name: str
    last_name: str
    company: str
    email: str
    uid: str
    is_active: int = 1
    status: int = 0
    avatar: str | None = None
    groups: list[str] | None = None
    mobile_phone: str = ""
    work_phone: str = ""
    home_phone: str = ""

    def to_payload(self) -> dict[str, object]:
        """Return the JSON body for a create request."""
        return asdict(self)


def build_user_record(  # noqa: PLR0913
    *,
    user_id: str | None,
    password: str | None,
    email_domain: str,
    display_name: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    company: str | None = None,
) -> UserRecord:
    """Build a complete user record, applying defaults for optional fields."""
    cleaned_id = (user_id or "").strip()
    if not cleaned_id or not password:
        raise ValidationError("User ID and password are required.")
    address = f"{cleaned_id}@{email_domain}"
    return UserRecord(
        id=cleaned_id,
        login_name=cleaned_id,
        password=password,
        display_name=display_name or "",
        first_name=first_name or "",
        last_name=last_name or "",
        company=company or "",
        email=address,
        uid=address,
    )


def record_from_row(row: ImportRow, email_domain: str) -> UserRecord:
    """Convert a confirmed import row into a user record."""
    return build_user_record(
        user_id=row.id,
        password=row.password,
        email_domain=email_domain,
        display_name=row.display_name,
        first_name=row.first_name,
        last_name=row.last_name,
        company=row.company,
    )
