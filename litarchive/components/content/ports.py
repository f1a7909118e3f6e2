"""
Content catalogue port definitions.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from litarchive.domain.entities import Actor, ContentItem, ContentKind, ContentStatus


class ContentStorePort(Protocol):
    """Store interface for content persistence."""

    def get(self, item_id: UUID) -> ContentItem | None:
        """Get content by ID."""
        ...

    def find_by_slug(self, namespace: str, slug: str) -> ContentItem | None:
        """Get content by slug within a namespace."""
        ...

    def slug_taken(self, namespace: str, slug: str, exclude_id: UUID | None = None) -> bool:
        ...

    def create(self, item: ContentItem, namespace: str) -> ContentItem:
        """Insert a new item. Raises ConflictError if the slug is taken."""
        ...

    def update(self, item: ContentItem) -> ContentItem:
        """
        Persist editable fields (title, body, excerpt, slug, category, book,
        featured). Status and views are never written here.
        Raises ConflictError on slug collision, NotFound if missing.
        """
        ...

    def delete(self, item_id: UUID) -> bool:
        """Delete an item and its likes. Returns False if it did not exist."""
        ...

    def list_items(
        self,
        *,
        kinds: Sequence[ContentKind] | None = None,
        status: ContentStatus | None = None,
        category_id: str | None = None,
        featured: bool | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[ContentItem], int]:
        """List content with filters. Returns (items, total_count)."""
        ...

    def increment_views(self, item_id: UUID) -> int | None:
        ...


class PolicyPort(Protocol):
    def require(self, actor: Actor | None, action: str, resource: Any = None) -> None:
        ...


class TimePort(Protocol):
    def now_utc(self) -> datetime:
        ...
