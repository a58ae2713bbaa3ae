"""Spanish collation helpers shared by SQL ordering and in-Python sorting.

Primary-level comparison ignores case and diacritics, except that ``ñ`` is a
letter of its own ordered between ``n`` and ``o``. Ties at the primary level
are broken by the case-folded text and then the raw text so that the order is
total and stable.
"""

import unicodedata
from collections.abc import Iterable

_COMBINING_TILDE = "\u0303"


def fold(text: str) -> str:
    """Lowercase and strip diacritics, keeping ``ñ``."""
    out: list[str] = []
    for ch in unicodedata.normalize("NFD", text.casefold()):
        if unicodedata.combining(ch):
            if ch == _COMBINING_TILDE and out and out[-1] == "n":
                out[-1] = "ñ"
            continue
        out.append(ch)
    return "".join(out)


def _weight(ch: str) -> int:
    if ch == "ñ":
        return ord("n") * 2 + 1
    return ord(ch) * 2


def sort_key(text: str) -> tuple[tuple[int, ...], str, str]:
    """Return a key ordering ``text`` the way a Spanish reader expects."""
    return tuple(_weight(ch) for ch in fold(text)), text.casefold(), text


def compare(a: str, b: str) -> int:
    """Three-way comparison, usable as an SQLite collation."""
    ka, kb = sort_key(a), sort_key(b)
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def sorted_unique(values: Iterable[str | None]) -> tuple[str, ...]:
    """Drop empty values and duplicates, then sort in Spanish order."""
    return tuple(sorted({v for v in values if v}, key=sort_key))
