"""Import pipeline domain models."""

from dataclasses import dataclass

TEMPLATE_COLUMNS = (
    "id",
    "password",
    "display_name",
    "first_name",
    "last_name",
    "company",
)


@dataclass(frozen=True)
class ProgressEvent:
    """One server-sent progress notice for a bulk import run."""

    log: str | None = None
    done: bool = False

    def to_dict(self) -> dict[str, object]:
        """Serialize the event for the progress stream."""
        data: dict[str, object] = {}
        if self.log is not None:
            data["log"] = self.log
        if self.done:
            data["done"] = True
        return data


@dataclass
class ImportSummary:
    """Running counters for a bulk import run."""

    total: int
    succeeded: int = 0
    failed: int = 0
