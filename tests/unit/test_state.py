from datetime import UTC, datetime, timedelta

import pytest

from litarchive.domain.entities import ContentItem, ContentKind, ContentStatus
from litarchive.domain.errors import IllegalTransitionError
from litarchive.domain.state import (
    TRANSITIONS,
    allowed_targets,
    can_transition,
    find_edge,
    transition,
)

DRAFT = ContentStatus.DRAFT
PENDING = ContentStatus.PENDING
PUBLISHED = ContentStatus.PUBLISHED
REJECTED = ContentStatus.REJECTED
ARCHIVED = ContentStatus.ARCHIVED

FLAGS = {"allow_resubmit": True}


def make_item(status=DRAFT, kind=ContentKind.BLOG, **kwargs):
    return ContentItem(kind=kind, title="T", slug="t", author_id="u1", status=status, **kwargs)


def test_content_item_defaults():
    item = ContentItem(kind=ContentKind.POEM, title="Hello", slug="hello", author_id="u1")
    assert item.status == DRAFT
    assert item.views == 0
    assert item.featured is False
    assert item.slug_pinned is False
    assert item.published_at is None


@pytest.mark.parametrize("status", list(ContentStatus))
def test_self_transitions_never_legal(status):
    for kind in ContentKind:
        assert can_transition(status, status, kind, flags=FLAGS) is False


def test_moderated_edges_only_for_moderated_kinds():
    assert can_transition(DRAFT, PENDING, ContentKind.BLOG) is True
    assert can_transition(DRAFT, PENDING, ContentKind.POEM) is False
    assert can_transition(REJECTED, PENDING, ContentKind.BLOG, flags=FLAGS) is True
    assert can_transition(REJECTED, PENDING, ContentKind.SONG, flags=FLAGS) is False


def test_moderated_kinds_are_configurable():
    assert can_transition(DRAFT, PENDING, ContentKind.POEM, moderated_kinds=[ContentKind.POEM])


def test_resubmit_needs_flag():
    assert find_edge(REJECTED, PENDING, ContentKind.BLOG) is None
    assert find_edge(REJECTED, PENDING, ContentKind.BLOG, flags={"allow_resubmit": False}) is None
    edge = find_edge(REJECTED, PENDING, ContentKind.BLOG, flags=FLAGS)
    assert edge is not None and edge.action == "resubmit"


def test_edges_carry_permissions():
    assert TRANSITIONS[(PENDING, PUBLISHED)].permission == "content:moderate"
    assert TRANSITIONS[(DRAFT, PUBLISHED)].permission == "content:publish"
    assert TRANSITIONS[(DRAFT, PENDING)].action == "submit"


def test_allowed_targets():
    assert set(allowed_targets(PENDING, ContentKind.BLOG)) == {PUBLISHED, REJECTED}
    assert set(allowed_targets(PUBLISHED, ContentKind.POEM)) == {ARCHIVED, DRAFT}
    assert set(allowed_targets(DRAFT, ContentKind.POEM)) == {PUBLISHED}
    assert allowed_targets(ARCHIVED, ContentKind.BLOG, flags=FLAGS) == []
    assert allowed_targets(REJECTED, ContentKind.BLOG, flags=FLAGS) == [PENDING]


def test_reachable_statuses_from_draft():
    seen = {DRAFT}
    frontier = [DRAFT]
    while frontier:
        current = frontier.pop()
        for nxt in allowed_targets(current, ContentKind.BLOG, flags=FLAGS):
            if nxt not in seen:
                seen.add(nxt)
                frontier.append(nxt)
    assert seen == set(ContentStatus)


def test_transition_sets_published_at_once():
    t0 = datetime(2026, 1, 1, tzinfo=UTC)
    t1 = t0 + timedelta(days=3)
    t2 = t1 + timedelta(days=3)

    published = transition(make_item(PENDING), PUBLISHED, t0)
    assert published.published_at == t0
    assert published.updated_at == t0

    draft = transition(published, DRAFT, t1)
    assert draft.published_at == t0

    again = transition(draft, PUBLISHED, t2)
    assert again.published_at == t0
    assert again.updated_at == t2


def test_transition_returns_new_item():
    item = make_item(PENDING)
    out = transition(item, REJECTED, datetime(2026, 1, 1, tzinfo=UTC))
    assert item.status == PENDING
    assert out.status == REJECTED
    assert out.published_at is None


def test_transition_rejects_self():
    with pytest.raises(IllegalTransitionError):
        transition(make_item(DRAFT), DRAFT, datetime(2026, 1, 1, tzinfo=UTC))


@pytest.mark.parametrize("kind", [ContentKind.BLOG, ContentKind.VIDEO, ContentKind.AUDIO])
def test_media_and_blog_accept_submissions_by_default(kind):
    assert can_transition(DRAFT, PENDING, kind) is True
