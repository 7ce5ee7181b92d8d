"""
Shared pytest fixtures for bear_textbundle tests.
"""
import sqlite3
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from bear_textbundle.config import EnvConfig
from bear_textbundle.store import NoteRecord


ZSFNOTE_SCHEMA = """
CREATE TABLE ZSFNOTE (
    Z_PK INTEGER PRIMARY KEY,
    ZUNIQUEIDENTIFIER VARCHAR,
    ZTITLE VARCHAR,
    ZTEXT VARCHAR,
    ZMODIFICATIONDATE TIMESTAMP
)
"""


class BearDatabase:
    """Minimal stand-in for Bear's database.sqlite with a ZSFNOTE table."""

    def __init__(self, path: Path) -> None:
        self.path = path
        with sqlite3.connect(path) as conn:
            conn.execute(ZSFNOTE_SCHEMA)
        conn.close()

    def upsert(self, identifier, title, text, modified) -> None:
        with sqlite3.connect(self.path) as conn:
            conn.execute("DELETE FROM ZSFNOTE WHERE ZUNIQUEIDENTIFIER = ?", (identifier,))
            conn.execute(
                "INSERT INTO ZSFNOTE (ZUNIQUEIDENTIFIER, ZTITLE, ZTEXT, ZMODIFICATIONDATE) VALUES (?, ?, ?, ?)",
                (identifier, title, text, modified),
            )
        conn.close()


class FakeClock:
    """Virtual clock: sleeping advances time instantly."""

    def __init__(self, start: float = 0.0) -> None:
        self.time = start
        self.sleeps = []

    def now(self) -> float:
        return self.time

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.time += seconds

    def advance(self, seconds: float) -> None:
        self.time += seconds


class FakeStore:
    """Returns queued records or raises queued errors, one per fetch."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.fetched = []
        self.on_fetch = None

    def push(self, *responses) -> None:
        self.responses.extend(responses)

    def fetch(self, note_id: str) -> NoteRecord:
        self.fetched.append(note_id)
        if self.on_fetch:
            self.on_fetch()
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def bear_db(temp_dir) -> BearDatabase:
    """Bear database holding the sample note ABC123."""
    db = BearDatabase(temp_dir / "database.sqlite")
    db.upsert("ABC123", "My Note", "meta\n---\n# Hi\n![p](file:///tmp/p.png)", 700000000.5)
    return db


@pytest.fixture
def env_config(bear_db, temp_dir) -> EnvConfig:
    """Config pointing at the sample database with image rewriting enabled."""
    return EnvConfig(database_path=bear_db.path, image_path=temp_dir / "images")


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_record():
    def _make(marker, body="---\n# Hi", title="My Note", identifier="ABC123"):
        return NoteRecord(identifier=identifier, title=title, body=body, modification_marker=marker)
    return _make


@pytest.fixture
def store_factory():
    return FakeStore
