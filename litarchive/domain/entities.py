from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(UTC)


# --- Enums ---


class ContentKind(str, Enum):
    POEM = "poem"
    SONG = "song"
    PROSE = "prose"
    BLOG = "blog"
    VIDEO = "video"
    AUDIO = "audio"


class ContentStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    PUBLISHED = "PUBLISHED"
    REJECTED = "REJECTED"
    ARCHIVED = "ARCHIVED"


# --- Identity ---


class Actor(BaseModel):
    """Caller identity as asserted by the external identity provider."""

    user_id: str
    role: str = "USER"


# --- Content ---


class ContentItem(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    kind: ContentKind
    title: str
    slug: str
    slug_pinned: bool = False
    body: str = ""
    excerpt: str = ""
    status: ContentStatus = ContentStatus.DRAFT

    author_id: str
    category_id: str | None = None
    book_id: str | None = None

    views: int = 0
    featured: bool = False

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    published_at: datetime | None = None


class TransitionRecord(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    content_id: UUID
    from_status: ContentStatus
    to_status: ContentStatus
    actor_id: str
    reason: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)


class LikeState(BaseModel):
    liked: bool
    like_count: int
