"""Error types raised by the search core and rendered by the outer surfaces."""

from typing import Any


class LexiconError(Exception):
    """Base class for all lexicon-search errors.

    Each subclass carries a stable machine-readable ``reason`` and the HTTP
    status it maps to, so every surface (HTTP, MCP, CLI) reports the same thing.
    """

    reason: str = "internal_error"
    status_code: int = 500

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message, "reason": self.reason}
        if self.field is not None:
            payload["field"] = self.field
        return payload


class ValidationError(LexiconError):
    """Client input that can never succeed as given."""

    reason = "invalid_input"
    status_code = 400


class QueryTooLong(ValidationError):
    reason = "query_too_long"


class TooManyFilterOptions(ValidationError):
    reason = "too_many_filter_options"


class InvalidPagination(ValidationError):
    reason = "invalid_pagination"


class InvalidLemma(ValidationError):
    reason = "invalid_lemma"


class LemmaTooLong(ValidationError):
    reason = "lemma_too_long"


class RateLimited(LexiconError):
    reason = "rate_limited"
    status_code = 429

    def __init__(self) -> None:
        super().__init__("Too Many Requests")


class WordNotFound(LexiconError):
    reason = "word_not_found"
    status_code = 404

    def __init__(self, lemma: str) -> None:
        super().__init__("Word not found", field="lemma")
        self.lemma = lemma


class ContentStoreUnavailable(LexiconError):
    """The content store failed or timed out. The message never names the query."""

    reason = "internal_error"
    status_code = 500

    def __init__(self) -> None:
        super().__init__("Internal server error")


class WordOfTheDayUnavailable(LexiconError):
    """No published word exists for the hashed letter nor the fallback letter."""

    reason = "word_of_the_day_unavailable"
    status_code = 500
