from collections.abc import Collection
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from litarchive.domain.entities import ContentItem, ContentKind, ContentStatus
from litarchive.domain.errors import IllegalTransitionError

DRAFT = ContentStatus.DRAFT
PENDING = ContentStatus.PENDING
PUBLISHED = ContentStatus.PUBLISHED
REJECTED = ContentStatus.REJECTED
ARCHIVED = ContentStatus.ARCHIVED

# Kinds the public may submit for review
MODERATED_KINDS = (ContentKind.BLOG, ContentKind.VIDEO, ContentKind.AUDIO)


@dataclass(frozen=True)
class Edge:
    """One legal status change and the permission it requires."""

    action: str
    permission: str
    moderated_only: bool = False
    optional_flag: str | None = None


TRANSITIONS: dict[tuple[ContentStatus, ContentStatus], Edge] = {
    (DRAFT, PENDING): Edge("submit", "content:submit", moderated_only=True),
    (DRAFT, PUBLISHED): Edge("publish", "content:publish"),
    (PENDING, PUBLISHED): Edge("approve", "content:moderate"),
    (PENDING, REJECTED): Edge("reject", "content:moderate"),
    (PUBLISHED, ARCHIVED): Edge("archive", "content:publish"),
    (PUBLISHED, DRAFT): Edge("unpublish", "content:publish"),
    (REJECTED, PENDING): Edge(
        "resubmit", "content:resubmit", moderated_only=True, optional_flag="allow_resubmit"
    ),
}


def find_edge(
    current: ContentStatus,
    new: ContentStatus,
    kind: ContentKind,
    moderated_kinds: Collection[ContentKind] = MODERATED_KINDS,
    flags: dict[str, bool] | None = None,
) -> Edge | None:
    """
    Return the edge for current -> new if it is legal for this kind, else None.
    Self-transitions are never legal.
    """
    edge = TRANSITIONS.get((current, new))
    if edge is None:
        return None
    if edge.moderated_only and kind not in moderated_kinds:
        return None
    if edge.optional_flag and not (flags or {}).get(edge.optional_flag, False):
        return None
    return edge


def can_transition(
    current: ContentStatus,
    new: ContentStatus,
    kind: ContentKind,
    moderated_kinds: Collection[ContentKind] = MODERATED_KINDS,
    flags: dict[str, bool] | None = None,
) -> bool:
    return find_edge(current, new, kind, moderated_kinds, flags) is not None


def allowed_targets(
    current: ContentStatus,
    kind: ContentKind,
    moderated_kinds: Collection[ContentKind] = MODERATED_KINDS,
    flags: dict[str, bool] | None = None,
) -> list[ContentStatus]:
    return [
        to
        for (frm, to) in TRANSITIONS
        if frm == current and can_transition(frm, to, kind, moderated_kinds, flags)
    ]


def transition(item: ContentItem, new_status: ContentStatus, now: datetime) -> ContentItem:
    """
    Return a NEW ContentItem with the updated status and timestamps.

    The caller has already validated the edge with find_edge(). published_at
    is written on the first entry into PUBLISHED and never cleared afterwards.
    """
    if item.status == new_status:
        raise IllegalTransitionError(f"Item is already {new_status.value}")

    updates: dict[str, Any] = {"status": new_status, "updated_at": now}
    if new_status == PUBLISHED and item.published_at is None:
        updates["published_at"] = now

    return item.model_copy(update=updates)
