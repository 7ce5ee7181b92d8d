from __future__ import annotations

from pathlib import Path


class ExportError(RuntimeError):
    """Base class for every failure raised while exporting a Bear note."""


class InvalidLinkError(ExportError):
    """Raised when a Bear link cannot be parsed or carries no note id."""

    def __init__(self, link: str) -> None:
        super().__init__(f"Invalid Bear link: {link}")
        self.link = link


class ConfigurationError(ExportError):
    """Raised when required configuration is missing or malformed."""


class StoreUnavailableError(ExportError):
    """Raised when the Bear database cannot be opened read-only."""

    def __init__(self, database_path: Path, reason: str) -> None:
        super().__init__(f"Failed to open Bear database {database_path}: {reason}")
        self.database_path = database_path


class NotFoundError(ExportError):
    def __init__(self, note_id: str) -> None:
        super().__init__(f"Note with ID {note_id} not found")
        self.note_id = note_id


class QueryError(ExportError):
    """Raised for any lookup failure other than a missing note."""


class FileSystemError(ExportError):
    """Raised when the bundle cannot be written. Partial writes are left in place."""

    def __init__(self, bundle_path: Path, reason: str) -> None:
        super().__init__(f"Failed to write bundle {bundle_path}: {reason}")
        self.bundle_path = bundle_path
