"""Tests for database schema."""

import sqlite3

from lexicon_search.core.database.schema import (
    connect,
    create_schema,
    get_metadata,
    get_schema_version,
    migrate_schema,
    set_metadata,
)


def _tables(conn: sqlite3.Connection) -> set[str]:
    return {
        row[0]
        for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    }


def test_create_schema_creates_content_tables() -> None:
    conn = connect(":memory:")
    create_schema(conn)
    assert {"words", "meanings", "examples", "notes", "metadata", "sync_state"} <= _tables(conn)


def test_migrate_schema_on_empty_db_creates_schema_and_sets_version() -> None:
    conn = sqlite3.connect(":memory:")
    assert get_schema_version(conn) is None
    migrate_schema(conn)
    assert get_schema_version(conn) == 1


def test_migrate_schema_registers_functions_on_existing_db() -> None:
    conn = sqlite3.connect(":memory:")
    migrate_schema(conn)
    assert conn.execute("SELECT fold('Ñandú')").fetchone()[0] == "ñandu"


def test_es_collation_orders_enye_after_n() -> None:
    conn = connect(":memory:")
    rows = conn.execute(
        "SELECT v FROM (SELECT 'once' AS v UNION SELECT 'ñandú' UNION SELECT 'nube') "
        "ORDER BY v COLLATE es"
    ).fetchall()
    assert [r[0] for r in rows] == ["nube", "ñandú", "once"]


def test_fold_passes_null_through() -> None:
    conn = connect(":memory:")
    assert conn.execute("SELECT fold(NULL)").fetchone()[0] is None


def test_deleting_a_word_cascades_to_meanings() -> None:
    conn = connect(":memory:")
    create_schema(conn)
    conn.execute(
        "INSERT INTO words (id, lemma, letter, created_at, updated_at) VALUES (1, 'once', 'o', 0, 0)"
    )
    conn.execute("INSERT INTO meanings (word_id, number, meaning) VALUES (1, 1, 'Merienda')")
    conn.execute("DELETE FROM words WHERE id = 1")
    assert conn.execute("SELECT COUNT(*) FROM meanings").fetchone()[0] == 0


def test_metadata_round_trip() -> None:
    conn = connect(":memory:")
    create_schema(conn)
    assert get_metadata(conn, "imported_by") is None
    set_metadata(conn, "imported_by", "test")
    assert get_metadata(conn, "imported_by") == "test"
