"""Moderation component models - frozen dataclass inputs and outputs."""

from dataclasses import dataclass
from uuid import UUID

from litarchive.domain.entities import Actor, ContentItem, ContentKind


@dataclass(frozen=True)
class SubmitInput:
    """A public submission; created directly in PENDING."""

    kind: ContentKind
    title: str
    body: str
    actor: Actor | None
    excerpt: str = ""
    category_id: str | None = None


@dataclass(frozen=True)
class DecisionInput:
    """Approve or reject input."""

    item_id: UUID
    actor: Actor | None
    reason: str | None = None


@dataclass(frozen=True)
class ResubmitInput:
    item_id: UUID
    actor: Actor | None


@dataclass(frozen=True)
class PendingQueueInput:
    actor: Actor | None
    kind: ContentKind | None = None
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True)
class ModerationOutput:
    item: ContentItem


@dataclass(frozen=True)
class PendingQueueOutput:
    items: list[ContentItem]
    total: int
