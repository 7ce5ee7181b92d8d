from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from dataclasses import dataclass
from typing import Any, Optional

from .config import EnvConfig
from .errors import NotFoundError, QueryError, StoreUnavailableError

logger = logging.getLogger(__name__)

NOTE_QUERY = "SELECT * FROM `ZSFNOTE` WHERE `ZUNIQUEIDENTIFIER` = ?"
DEFAULT_TITLE = "Untitled Note"


@dataclass(frozen=True)
class NoteRecord:
    identifier: str
    title: Optional[str]
    body: Optional[str]
    modification_marker: Any

    @property
    def display_title(self) -> str:
        return self.title or DEFAULT_TITLE

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "NoteRecord":
        return cls(
            identifier=row["ZUNIQUEIDENTIFIER"]
            ,title=row["ZTITLE"]
            ,body=row["ZTEXT"]
            ,modification_marker=row["ZMODIFICATIONDATE"]
        )


class NoteStore:
    """Read-only lookup of notes in Bear's SQLite database.

    Every call to :meth:`fetch` opens and closes its own connection so that
    edits made by Bear between calls are always seen.
    """

    def __init__(self, config: EnvConfig) -> None:
        self.config = config

    def _connect(self) -> sqlite3.Connection:
        database_path = self.config.require_database_path()
        uri = f"{database_path.resolve().as_uri()}?mode=ro"
        try:
            connection = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as exc:
            raise StoreUnavailableError(database_path, str(exc)) from exc
        connection.row_factory = sqlite3.Row
        return connection

    def fetch(self, note_id: str) -> NoteRecord:
        """Return the note whose ZUNIQUEIDENTIFIER matches ``note_id``."""

        with closing(self._connect()) as connection:
            try:
                row = connection.execute(NOTE_QUERY, (note_id,)).fetchone()
            except sqlite3.Error as exc:
                raise QueryError(f"Database query failed: {exc}") from exc

        if row is None:
            raise NotFoundError(note_id)
        try:
            record = NoteRecord.from_row(row)
        except IndexError as exc:
            raise QueryError(f"Unexpected ZSFNOTE schema: {exc}") from exc
        logger.debug("Fetched note %s (modified %s)", note_id, record.modification_marker)
        return record
