"""Tests for the JSON import pipeline."""

import json
import sqlite3
from pathlib import Path

import pytest

from lexicon_search.core.database.schema import connect, create_schema
from lexicon_search.core.importer.loader import import_source_dir
from tests.unit.sample_data import DICTIONARY_SOURCE, write_source


@pytest.fixture
def conn() -> sqlite3.Connection:
    conn = connect(":memory:")
    create_schema(conn)
    return conn


def _count(conn: sqlite3.Connection, table: str) -> int:
    return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


def test_import_loads_all_files(conn: sqlite3.Connection, source_dir: Path) -> None:
    stats = import_source_dir(conn, source_dir)
    assert stats.files_imported == 2
    assert stats.files_skipped == 0
    assert stats.words_imported == 11
    assert _count(conn, "words") == 11
    assert _count(conn, "examples") == 1
    assert _count(conn, "notes") == 2


def test_unchanged_files_are_skipped(conn: sqlite3.Connection, source_dir: Path) -> None:
    import_source_dir(conn, source_dir)
    stats = import_source_dir(conn, source_dir)
    assert stats.files_imported == 0
    assert stats.files_skipped == 2
    assert _count(conn, "words") == 11


def test_force_reimports_without_duplicating(conn: sqlite3.Connection, source_dir: Path) -> None:
    import_source_dir(conn, source_dir)
    stats = import_source_dir(conn, source_dir, force=True)
    assert stats.files_imported == 2
    assert _count(conn, "words") == 11
    assert _count(conn, "meanings") == 12


def test_changed_file_replaces_its_words(conn: sqlite3.Connection, source_dir: Path) -> None:
    import_source_dir(conn, source_dir)
    (source_dir / "p.json").write_text(json.dumps({"words": [{"lemma": "poto"}]}))

    stats = import_source_dir(conn, source_dir)
    assert stats.files_imported == 1
    lemmas = {r[0] for r in conn.execute("SELECT lemma FROM words WHERE source_file = 'p.json'")}
    assert lemmas == {"poto"}


def test_invalid_file_is_skipped(conn: sqlite3.Connection, tmp_path: Path) -> None:
    source = write_source(
        tmp_path / "src",
        {"bad.json": {"words": [{"lemma": "x", "status": "bogus"}]}, **DICTIONARY_SOURCE},
    )
    stats = import_source_dir(conn, source)
    assert stats.files_imported == 2
    assert _count(conn, "words") == 11


def test_missing_source_dir_raises(conn: sqlite3.Connection, tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        import_source_dir(conn, tmp_path / "nope")


def test_top_level_list_file_is_skipped(conn: sqlite3.Connection, tmp_path: Path) -> None:
    source = write_source(tmp_path / "src")
    (source / "list.json").write_text(json.dumps([{"lemma": "once"}]))
    stats = import_source_dir(conn, source)
    assert stats.files_imported == 2
    assert _count(conn, "words") == 11
