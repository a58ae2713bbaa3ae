"""Configuration constants for lexicon-search."""

import os
from pathlib import Path

# Search request bounds.
MAX_QUERY_LENGTH: int = 100
MAX_FILTER_OPTIONS: int = 10
DEFAULT_PAGE: int = 1
DEFAULT_LIMIT: int = 20
MAX_LIMIT: int = 1000
MAX_LEMMA_LENGTH: int = 100

# Content statuses. Only PUBLISHED_STATUS is visible outside editor mode.
PUBLISHED_STATUS: str = "published"
STATUS_OPTIONS: list[str] = [
    "imported",
    "included",
    "preredacted",
    "redacted",
    "reviewed",
    "published",
    "archaic",
    "quarantined",
]

# Alphabet of the dictionary, in collation order (Spanish, with ñ).
LETTERS: list[str] = list("abcdefghijklmnñopqrstuvwxyz")

# Letter used for the word of the day when the hashed letter has no entries.
FALLBACK_LETTER: str = "o"

# Candidate pool cap when collecting words of a single letter.
WORD_OF_THE_DAY_POOL_SIZE: int = 1000

# Rate limiting: requests per window, per client address.
RATE_LIMIT_WINDOW_SECONDS: float = 60.0
RATE_LIMIT_REQUESTS: int = 100
RATE_LIMIT_META_REQUESTS: int = 200
RATE_LIMIT_MAX_CLIENTS: int = 1000

# Header names supplied by the upstream session proxy.
EDITOR_MODE_HEADER: str = "x-editor-mode"
USER_ROLE_HEADER: str = "x-user-role"

# Default archive location (directory holding lexicon.db).
DEFAULT_ARCHIVE_DIR: Path = Path("~/.local/share/lexicon-search").expanduser()

DATABASE_FILENAME: str = "lexicon.db"


def resolve_archive_dir() -> Path:
    """Return the database directory, honouring LEXICON_ARCHIVE_DIR."""
    archive_dir_env = os.environ.get("LEXICON_ARCHIVE_DIR")
    return Path(archive_dir_env).expanduser() if archive_dir_env else DEFAULT_ARCHIVE_DIR


def resolve_source_dir() -> Path | None:
    """Return the import source directory from LEXICON_SOURCE_DIR, if set."""
    source_dir_env = os.environ.get("LEXICON_SOURCE_DIR")
    return Path(source_dir_env).expanduser() if source_dir_env else None
