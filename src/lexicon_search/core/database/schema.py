"""SQLite schema creation and migration for the dictionary content store."""

import sqlite3
from pathlib import Path

from lexicon_search.core.collation import compare, fold

SCHEMA_VERSION = 1

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS words (
    id INTEGER PRIMARY KEY,
    lemma TEXT NOT NULL,
    root TEXT,
    letter TEXT NOT NULL,
    variant TEXT,
    status TEXT NOT NULL DEFAULT 'imported',
    created_by INTEGER,
    assigned_to INTEGER,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL,
    source_file TEXT
);

CREATE TABLE IF NOT EXISTS meanings (
    id INTEGER PRIMARY KEY,
    word_id INTEGER NOT NULL,
    number INTEGER NOT NULL,
    origin TEXT,
    meaning TEXT NOT NULL,
    observation TEXT,
    remission TEXT,
    grammar_categ TEXT,
    social_valuation TEXT,
    social_mark TEXT,
    style_mark TEXT,
    inten_mark TEXT,
    geo_mark TEXT,
    chrono_mark TEXT,
    freq_mark TEXT,
    dictionary TEXT,
    FOREIGN KEY (word_id) REFERENCES words(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS examples (
    id INTEGER PRIMARY KEY,
    meaning_id INTEGER NOT NULL,
    value TEXT NOT NULL,
    author TEXT,
    title TEXT,
    source TEXT,
    date TEXT,
    page TEXT,
    FOREIGN KEY (meaning_id) REFERENCES meanings(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS notes (
    id INTEGER PRIMARY KEY,
    word_id INTEGER NOT NULL,
    username TEXT,
    note TEXT NOT NULL,
    created_at INTEGER NOT NULL,
    FOREIGN KEY (word_id) REFERENCES words(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_words_lemma ON words(lemma);
CREATE INDEX IF NOT EXISTS idx_words_letter_status ON words(letter, status);
CREATE INDEX IF NOT EXISTS idx_words_source ON words(source_file);
CREATE INDEX IF NOT EXISTS idx_meanings_word ON meanings(word_id, number);
CREATE INDEX IF NOT EXISTS idx_examples_meaning ON examples(meaning_id);
CREATE INDEX IF NOT EXISTS idx_notes_word ON notes(word_id);

CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS sync_state (
    source_file TEXT PRIMARY KEY,
    last_import_at INTEGER,
    source_hash TEXT
);
"""


def register_functions(conn: sqlite3.Connection) -> None:
    """Install the ``es`` collation and the ``fold()`` SQL function."""
    conn.create_collation("es", compare)
    conn.create_function("fold", 1, lambda s: fold(s) if s is not None else None, deterministic=True)
    conn.execute("PRAGMA foreign_keys = ON")


def connect(db_path: Path | str) -> sqlite3.Connection:
    """Open the content store with collation and functions registered.

    The connection may be handed to worker threads; callers serialize access.
    """
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    register_functions(conn)
    return conn


def create_schema(conn: sqlite3.Connection) -> None:
    """Create all tables and indexes."""
    register_functions(conn)
    conn.executescript(_SCHEMA_SQL)
    conn.execute(
        "INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)",
        ("schema_version", str(SCHEMA_VERSION)),
    )
    conn.commit()


def get_schema_version(conn: sqlite3.Connection) -> int | None:
    """Return the current schema version, or None if metadata table doesn't exist."""
    try:
        row = conn.execute(
            "SELECT value FROM metadata WHERE key = 'schema_version'"
        ).fetchone()
    except sqlite3.OperationalError:
        return None
    return int(row[0]) if row else None


def migrate_schema(conn: sqlite3.Connection) -> None:
    """Create or migrate the database schema to the latest version."""
    register_functions(conn)
    version = get_schema_version(conn)
    if version is None:
        create_schema(conn)


def get_metadata(conn: sqlite3.Connection, key: str) -> str | None:
    row = conn.execute("SELECT value FROM metadata WHERE key = ?", (key,)).fetchone()
    return row[0] if row else None


def set_metadata(conn: sqlite3.Connection, key: str, value: str) -> None:
    conn.execute("INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)", (key, value))
    conn.commit()
