"""Orchestrate importing dictionary JSON exports into SQLite."""

import hashlib
import json
import sqlite3
import time
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from lexicon_search.core.importer.json_reader import WordRecord, parse_export_data
from lexicon_search.models.vocabulary import MARKER_COLUMNS, MarkerKey


@dataclass(frozen=True)
class ImportStats:
    """Summary of an import operation."""

    files_imported: int
    files_skipped: int
    words_imported: int


def _file_hash(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()


def _should_reimport(conn: sqlite3.Connection, source_file: str, source_hash: str) -> bool:
    row = conn.execute(
        "SELECT source_hash FROM sync_state WHERE source_file = ?",
        (source_file,),
    ).fetchone()
    if row is None:
        return True
    return row[0] != source_hash


_MARKER_COLUMN_LIST = [MARKER_COLUMNS[key] for key in MarkerKey]


def insert_words(
    conn: sqlite3.Connection,
    records: list[WordRecord],
    *,
    source_file: str | None = None,
) -> None:
    """Insert word records with their meanings, examples and notes."""
    now_ms = int(time.time() * 1000)
    meaning_sql = (
        "INSERT INTO meanings (word_id, number, origin, meaning, observation, remission, "
        f"grammar_categ, dictionary, {', '.join(_MARKER_COLUMN_LIST)}) "
        f"VALUES ({', '.join('?' for _ in range(8 + len(_MARKER_COLUMN_LIST)))})"
    )
    for record in records:
        word_id = conn.execute(
            """INSERT INTO words
               (lemma, root, letter, variant, status, created_by, assigned_to,
                created_at, updated_at, source_file)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                record.lemma, record.root, record.letter, record.variant, record.status,
                record.created_by, record.assigned_to, now_ms, now_ms, source_file,
            ),
        ).lastrowid

        for m in record.meanings:
            meaning_id = conn.execute(
                meaning_sql,
                (
                    word_id, m.number, m.origin, m.meaning, m.observation, m.remission,
                    m.grammar_category, m.dictionary,
                    *(m.markers.get(key) for key in MarkerKey),
                ),
            ).lastrowid
            conn.executemany(
                """INSERT INTO examples (meaning_id, value, author, title, source, date, page)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                [
                    (meaning_id, e.value, e.author, e.title, e.source, e.date, e.page)
                    for e in m.examples
                ],
            )

        conn.executemany(
            "INSERT INTO notes (word_id, username, note, created_at) VALUES (?, ?, ?, ?)",
            [(word_id, n.username, n.note, n.created_at or now_ms) for n in record.notes],
        )


def import_source_dir(
    conn: sqlite3.Connection,
    source_dir: Path,
    *,
    force: bool = False,
) -> ImportStats:
    """Import all .json export files from source_dir into the database.

    Args:
        conn: SQLite connection (schema must already exist).
        source_dir: Directory containing export files.
        force: Re-import even if source file hasn't changed.

    Returns:
        ImportStats with counts of imported/skipped files.
    """
    if not source_dir.is_dir():
        msg = f"Source directory not found: {source_dir}"
        raise FileNotFoundError(msg)

    files_imported = 0
    files_skipped = 0
    total_words = 0

    for json_path in sorted(source_dir.glob("*.json")):
        source_file = json_path.name
        source_hash = _file_hash(json_path)

        if not force and not _should_reimport(conn, source_file, source_hash):
            files_skipped += 1
            continue

        try:
            records = parse_export_data(json.loads(json_path.read_text(encoding="utf-8")))
        except (ValueError, TypeError):
            logger.exception("Skipping {}: invalid export data", source_file)
            continue

        try:
            # Words, meanings, examples and notes cascade from words.
            conn.execute("DELETE FROM words WHERE source_file = ?", (source_file,))
            insert_words(conn, records, source_file=source_file)
            conn.execute(
                """INSERT OR REPLACE INTO sync_state
                   (source_file, last_import_at, source_hash)
                   VALUES (?, ?, ?)""",
                (source_file, int(time.time() * 1000), source_hash),
            )
            conn.commit()
        except Exception:
            conn.rollback()
            logger.exception("Failed to import {}", source_file)
            continue

        files_imported += 1
        total_words += len(records)
        logger.debug("Imported {} ({} words)", source_file, len(records))

    logger.info(
        "Import complete: {} imported, {} skipped, {} total words",
        files_imported, files_skipped, total_words,
    )
    return ImportStats(
        files_imported=files_imported,
        files_skipped=files_skipped,
        words_imported=total_words,
    )
