"""Tests for status visibility rules."""

from lexicon_search.core.search.visibility import (
    PUBLISHED_ONLY,
    UNRESTRICTED,
    can_include_drafts,
    resolve_status_scope,
)
from lexicon_search.models.filters import (
    STATUS_ABSENT,
    Role,
    StatusPresent,
    StatusScope,
    VisibilityContext,
)

PUBLIC = VisibilityContext()
EDITOR = VisibilityContext(editor_mode=True)


def test_public_sees_only_published() -> None:
    assert resolve_status_scope(PUBLIC, STATUS_ABSENT) == PUBLISHED_ONLY


def test_role_without_editor_mode_does_not_widen_list_search() -> None:
    context = VisibilityContext(role=Role.ADMIN)
    assert resolve_status_scope(context, STATUS_ABSENT) == PUBLISHED_ONLY


def test_editor_mode_is_unrestricted() -> None:
    assert resolve_status_scope(EDITOR, STATUS_ABSENT) == UNRESTRICTED
    assert resolve_status_scope(EDITOR, STATUS_ABSENT).unrestricted


def test_editor_status_filter_narrows() -> None:
    scope = resolve_status_scope(EDITOR, StatusPresent("redacted"))
    assert scope == StatusScope(frozenset({"redacted"}))


def test_empty_status_adds_no_constraint() -> None:
    assert resolve_status_scope(EDITOR, StatusPresent("")) == UNRESTRICTED
    assert resolve_status_scope(PUBLIC, StatusPresent("")) == PUBLISHED_ONLY


def test_public_status_filter_cannot_reveal_drafts() -> None:
    scope = resolve_status_scope(PUBLIC, StatusPresent("redacted"))
    assert not scope.allows("redacted")
    assert not scope.allows("published")


def test_preview_requires_a_role() -> None:
    assert not can_include_drafts(PUBLIC, preview=True)
    assert can_include_drafts(VisibilityContext(role=Role.LEXICOGRAPHER), preview=True)
    assert not can_include_drafts(VisibilityContext(role=Role.LEXICOGRAPHER), preview=False)
    assert can_include_drafts(EDITOR, preview=False)


def test_unknown_role_is_treated_as_anonymous() -> None:
    assert Role.parse("wizard") is None
    assert Role.parse(" Editor ") is Role.EDITOR
    assert Role.parse(None) is None
