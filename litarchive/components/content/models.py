"""
Content catalogue input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from litarchive.domain.entities import Actor, ContentItem, ContentKind, ContentStatus

# --- Input Models ---


@dataclass(frozen=True)
class CreateContentInput:
    """Input for admin-authored content (created in DRAFT)."""

    kind: ContentKind
    title: str
    actor: Actor | None
    body: str = ""
    excerpt: str = ""
    slug: str | None = None
    category_id: str | None = None
    book_id: str | None = None
    featured: bool = False


@dataclass(frozen=True)
class UpdateContentInput:
    """
    Input for editing content fields.

    Only keys in EDITABLE_FIELDS are honoured; status changes go through the
    workflow component.
    """

    item_id: UUID
    actor: Actor | None
    updates: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SetFeaturedInput:
    item_id: UUID
    featured: bool
    actor: Actor | None


@dataclass(frozen=True)
class DeleteContentInput:
    item_id: UUID
    actor: Actor | None


@dataclass(frozen=True)
class GetAdminContentInput:
    item_id: UUID
    actor: Actor | None


@dataclass(frozen=True)
class GetPublicContentInput:
    kind: ContentKind
    slug: str
    count_view: bool = True


@dataclass(frozen=True)
class ListPublicContentInput:
    kind: ContentKind
    category_id: str | None = None
    featured: bool | None = None
    limit: int = 20
    offset: int = 0


@dataclass(frozen=True)
class ListAdminContentInput:
    actor: Actor | None
    kind: ContentKind | None = None
    status: ContentStatus | None = None
    limit: int = 50
    offset: int = 0


# --- Output Models ---


@dataclass(frozen=True)
class ContentOutput:
    content: ContentItem


@dataclass(frozen=True)
class ContentListOutput:
    items: list[ContentItem]
    total: int
    limit: int
    offset: int
