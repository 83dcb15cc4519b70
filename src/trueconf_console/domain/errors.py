"""Error types shared across the console."""


class ConsoleError(Exception):
    """Base class for console errors."""


class ValidationError(ConsoleError):
    """Input failed validation (missing fields, malformed spreadsheet)."""


class DirectoryError(ConsoleError):
    """The TrueConf directory service call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(DirectoryError):
    """The directory service answered 404 for a single lookup."""
