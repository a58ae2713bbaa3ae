"""Shared test fixtures."""

import sqlite3
from pathlib import Path

import pytest

from lexicon_search.core.database.schema import connect, create_schema
from lexicon_search.core.database.store import SqliteContentStore
from lexicon_search.core.importer.loader import import_source_dir
from lexicon_search.service import LexiconService
from tests.unit.fakes import FixedClock
from tests.unit.sample_data import TODAY, write_source


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    return write_source(tmp_path / "source")


@pytest.fixture
def populated_db(source_dir: Path) -> sqlite3.Connection:
    """Return an in-memory DB with the sample dictionary imported."""
    conn = connect(":memory:")
    create_schema(conn)
    import_source_dir(conn, source_dir)
    return conn


@pytest.fixture
def store(populated_db: sqlite3.Connection) -> SqliteContentStore:
    return SqliteContentStore(populated_db)


@pytest.fixture
def service(store: SqliteContentStore) -> LexiconService:
    return LexiconService(store, clock=FixedClock(TODAY))
