"""
Counter component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

# --- Input Models ---


@dataclass(frozen=True)
class IncrementViewInput:
    item_id: UUID


@dataclass(frozen=True)
class ToggleLikeInput:
    """
    Input for toggling a like.

    ``request_key`` identifies one client submission; a double-submitted
    request carrying the same key is applied once.
    """

    item_id: UUID
    user_id: str | None
    request_key: str | None = None


@dataclass(frozen=True)
class LikeStateInput:
    item_id: UUID
    user_id: str | None = None


@dataclass(frozen=True)
class RecordVisitorInput:
    session_token: str


# --- Output Models ---


@dataclass(frozen=True)
class ViewCountOutput:
    item_id: UUID
    views: int


@dataclass(frozen=True)
class LikeOutput:
    liked: bool
    like_count: int


@dataclass(frozen=True)
class VisitorOutput:
    total: int
    counted: bool
    window: str
