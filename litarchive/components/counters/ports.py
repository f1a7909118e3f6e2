"""
Counter component port definitions.

Every mutating method here must be a single atomic operation in the store;
the component never reads a counter, adds to it and writes it back.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from litarchive.domain.entities import LikeState


class CounterStorePort(Protocol):
    """Store interface for views, likes and visitor counts."""

    def increment_views(self, item_id: UUID) -> int | None:
        """
        Atomically add 1 to the item's views.

        Returns the new count, or None if the item does not exist.
        """
        ...

    def toggle_like(
        self,
        user_id: str,
        item_id: UUID,
        now: datetime,
        request_key: str | None = None,
    ) -> LikeState | None:
        """
        Delete the (user, item) like if present, else insert it, in one transaction.

        A request_key already applied returns the recorded outcome without
        toggling again. Returns None if the item does not exist.
        """
        ...

    def like_state(self, user_id: str | None, item_id: UUID) -> LikeState | None:
        """Current like state for a user (anonymous -> liked False)."""
        ...

    def record_visitor(self, window_key: str, session_token: str, now: datetime) -> tuple[bool, int]:
        """
        Count the session once per window.

        Returns (counted, total) where counted is False for a repeat token.
        """
        ...

    def visitor_total(self, window_key: str) -> int:
        """Total visitors recorded in the window."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
