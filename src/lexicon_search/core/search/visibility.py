"""Decide which content statuses a request may see."""

from lexicon_search.config import PUBLISHED_STATUS
from lexicon_search.models.filters import (
    StatusFilter,
    StatusPresent,
    StatusScope,
    VisibilityContext,
)

PUBLISHED_ONLY = StatusScope(frozenset({PUBLISHED_STATUS}))
UNRESTRICTED = StatusScope(None)


def resolve_status_scope(context: VisibilityContext, status: StatusFilter) -> StatusScope:
    """Return the status scope for a list search.

    Editor mode may see every status. Outside editor mode only published
    content is eligible. An explicit non-empty ``status`` narrows whichever
    scope applies; an explicit empty one adds no constraint. The role does not
    change read visibility.
    """
    base = UNRESTRICTED if context.editor_mode else PUBLISHED_ONLY
    if not isinstance(status, StatusPresent) or not status.value:
        return base
    if base.statuses is None:
        return StatusScope(frozenset({status.value}))
    return StatusScope(base.statuses & {status.value})


def can_include_drafts(context: VisibilityContext, *, preview: bool) -> bool:
    """Whether a single-lemma lookup may return unpublished content.

    This is the preview carve-out: any authenticated role asking for a
    preview sees the draft of that one entry. It never applies to list search.
    """
    return context.editor_mode or (preview and context.role is not None)
