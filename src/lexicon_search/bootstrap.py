"""Open the archive database for long-running servers."""

from pathlib import Path

from loguru import logger

from lexicon_search.config import DATABASE_FILENAME, resolve_archive_dir, resolve_source_dir
from lexicon_search.core.database.schema import connect, migrate_schema
from lexicon_search.core.database.store import SqliteContentStore
from lexicon_search.core.importer.loader import import_source_dir


def open_archive(
    archive_dir: Path | None = None,
    source_dir: Path | None = None,
) -> SqliteContentStore:
    """Open (creating if needed) the archive and import changed source files.

    Args:
        archive_dir: Database directory; defaults to LEXICON_ARCHIVE_DIR.
        source_dir: Export directory to auto-import; defaults to LEXICON_SOURCE_DIR.
    """
    archive_dir = archive_dir or resolve_archive_dir()
    archive_dir.mkdir(parents=True, exist_ok=True)
    conn = connect(archive_dir / DATABASE_FILENAME)
    migrate_schema(conn)

    source_dir = source_dir or resolve_source_dir()
    if source_dir is not None and source_dir.is_dir():
        stats = import_source_dir(conn, source_dir)
        if stats.files_imported > 0:
            logger.info("Auto-imported {} files", stats.files_imported)

    return SqliteContentStore(conn)
