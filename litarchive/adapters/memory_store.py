"""
In-memory publication store.

Implements PublicationStorePort for tests and local experiments. A single
re-entrant lock stands in for the database's write lock, so each method is
atomic with respect to the others.
"""

import threading
from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from litarchive.domain.entities import (
    ContentItem,
    ContentKind,
    ContentStatus,
    LikeState,
    TransitionRecord,
)
from litarchive.domain.errors import ConflictError, NotFound
from litarchive.domain.state import transition


class InMemoryPublicationStore:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._items: dict[UUID, ContentItem] = {}
        self._namespaces: dict[UUID, str] = {}
        self._likes: set[tuple[str, UUID]] = set()
        self._like_requests: dict[str, tuple[str, UUID, bool]] = {}
        self._transitions: list[TransitionRecord] = []
        self._visitor_sessions: set[tuple[str, str]] = set()
        self._visitor_totals: dict[str, int] = {}

    # --- content ---

    def get(self, item_id: UUID) -> ContentItem | None:
        with self._lock:
            item = self._items.get(item_id)
            return item.model_copy() if item else None

    def find_by_slug(self, namespace: str, slug: str) -> ContentItem | None:
        with self._lock:
            for item_id, ns in self._namespaces.items():
                item = self._items[item_id]
                if ns == namespace and item.slug == slug:
                    return item.model_copy()
            return None

    def slug_taken(self, namespace: str, slug: str, exclude_id: UUID | None = None) -> bool:
        with self._lock:
            return any(
                ns == namespace and self._items[item_id].slug == slug and item_id != exclude_id
                for item_id, ns in self._namespaces.items()
            )

    def create(self, item: ContentItem, namespace: str) -> ContentItem:
        with self._lock:
            if item.id in self._items:
                raise ConflictError(f"Content {item.id} already exists")
            if self.slug_taken(namespace, item.slug):
                raise ConflictError(f"Slug '{item.slug}' already exists in '{namespace}'")
            self._items[item.id] = item.model_copy()
            self._namespaces[item.id] = namespace
            return item.model_copy()

    def update(self, item: ContentItem) -> ContentItem:
        with self._lock:
            current = self._items.get(item.id)
            if current is None:
                raise NotFound(f"Content {item.id} not found")
            if self.slug_taken(self._namespaces[item.id], item.slug, exclude_id=item.id):
                raise ConflictError(f"Slug '{item.slug}' already exists")
            # Status, views and published_at are owned by the workflow and counters
            stored = item.model_copy(
                update={
                    "status": current.status,
                    "views": current.views,
                    "published_at": current.published_at,
                    "author_id": current.author_id,
                    "kind": current.kind,
                    "created_at": current.created_at,
                }
            )
            self._items[item.id] = stored
            return stored.model_copy()

    def delete(self, item_id: UUID) -> bool:
        with self._lock:
            if self._items.pop(item_id, None) is None:
                return False
            self._namespaces.pop(item_id, None)
            self._likes = {like for like in self._likes if like[1] != item_id}
            self._like_requests = {
                k: v for k, v in self._like_requests.items() if v[1] != item_id
            }
            self._transitions = [t for t in self._transitions if t.content_id != item_id]
            return True

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
        with self._lock:
            items = [
                i
                for i in self._items.values()
                if (kinds is None or i.kind in kinds)
                and (status is None or i.status == status)
                and (category_id is None or i.category_id == category_id)
                and (featured is None or i.featured == featured)
            ]
            items.sort(key=lambda i: i.published_at or i.created_at, reverse=True)
            page = [i.model_copy() for i in items[offset : offset + limit]]
            return page, len(items)

    # --- workflow ---

    def compare_and_set_status(
        self,
        item_id: UUID,
        expected: ContentStatus,
        new_status: ContentStatus,
        now: datetime,
        record: TransitionRecord,
    ) -> ContentItem | None:
        with self._lock:
            current = self._items.get(item_id)
            if current is None or current.status != expected:
                return None
            updated = transition(current, new_status, now)
            self._items[item_id] = updated
            self.add_transition(record)
            return updated.model_copy()

    def add_transition(self, record: TransitionRecord) -> None:
        with self._lock:
            self._transitions.append(record)

    def list_transitions(self, item_id: UUID) -> list[TransitionRecord]:
        with self._lock:
            records = [t for t in self._transitions if t.content_id == item_id]
            return sorted(records, key=lambda t: t.created_at)

    # --- counters ---

    def increment_views(self, item_id: UUID) -> int | None:
        with self._lock:
            item = self._items.get(item_id)
            if item is None:
                return None
            views = item.views + 1
            self._items[item_id] = item.model_copy(update={"views": views})
            return views

    def _like_count(self, item_id: UUID) -> int:
        return sum(1 for like in self._likes if like[1] == item_id)

    def toggle_like(
        self,
        user_id: str,
        item_id: UUID,
        now: datetime,
        request_key: str | None = None,
    ) -> LikeState | None:
        with self._lock:
            if item_id not in self._items:
                return None
            if request_key is not None and request_key in self._like_requests:
                _, _, liked = self._like_requests[request_key]
                return LikeState(liked=liked, like_count=self._like_count(item_id))

            key = (user_id, item_id)
            if key in self._likes:
                self._likes.discard(key)
                liked = False
            else:
                self._likes.add(key)
                liked = True

            if request_key is not None:
                self._like_requests = {
                    k: v for k, v in self._like_requests.items() if v[:2] != (user_id, item_id)
                }
                self._like_requests[request_key] = (user_id, item_id, liked)
            return LikeState(liked=liked, like_count=self._like_count(item_id))

    def like_state(self, user_id: str | None, item_id: UUID) -> LikeState | None:
        with self._lock:
            if item_id not in self._items:
                return None
            liked = user_id is not None and (user_id, item_id) in self._likes
            return LikeState(liked=liked, like_count=self._like_count(item_id))

    def record_visitor(self, window_key: str, session_token: str, now: datetime) -> tuple[bool, int]:
        with self._lock:
            key = (window_key, session_token)
            counted = key not in self._visitor_sessions
            if counted:
                self._visitor_sessions.add(key)
                self._visitor_totals[window_key] = self._visitor_totals.get(window_key, 0) + 1
            return counted, self._visitor_totals.get(window_key, 0)

    def visitor_total(self, window_key: str) -> int:
        with self._lock:
            return self._visitor_totals.get(window_key, 0)
