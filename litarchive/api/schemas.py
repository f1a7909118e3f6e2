from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from litarchive.domain.entities import ContentKind, ContentStatus


# --- Content Items ---
class ContentCreateRequest(BaseModel):
    kind: ContentKind
    title: str
    body: str = ""
    excerpt: str = ""
    slug: str | None = None
    category_id: str | None = None
    book_id: str | None = None
    featured: bool = False


class ContentUpdateRequest(BaseModel):
    title: str | None = None
    body: str | None = None
    excerpt: str | None = None
    slug: str | None = None  # setting a slug pins it
    category_id: str | None = None
    book_id: str | None = None


class ContentItemResponse(BaseModel):
    id: UUID
    kind: ContentKind
    title: str
    slug: str
    slug_pinned: bool
    body: str
    excerpt: str
    status: ContentStatus
    author_id: str
    category_id: str | None = None
    book_id: str | None = None
    views: int
    featured: bool
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None


class PublicContentResponse(BaseModel):
    id: UUID
    kind: ContentKind
    title: str
    slug: str
    body: str
    excerpt: str
    category_id: str | None = None
    book_id: str | None = None
    views: int
    featured: bool
    published_at: datetime | None = None


class ContentListResponse(BaseModel):
    items: list[ContentItemResponse]
    total: int
    limit: int
    offset: int


class PublicContentListResponse(BaseModel):
    items: list[PublicContentResponse]
    total: int
    limit: int
    offset: int


# --- Workflow ---
class ContentTransitionRequest(BaseModel):
    status: ContentStatus
    action: str | None = None
    reason: str | None = None


class FeaturedRequest(BaseModel):
    featured: bool


class TransitionRecordResponse(BaseModel):
    id: UUID
    content_id: UUID
    from_status: ContentStatus
    to_status: ContentStatus
    actor_id: str
    reason: str | None = None
    created_at: datetime


# --- Moderation ---
class SubmissionRequest(BaseModel):
    title: str
    body: str
    excerpt: str = ""
    category_id: str | None = None


class DecisionRequest(BaseModel):
    reason: str | None = None


class PendingQueueResponse(BaseModel):
    items: list[ContentItemResponse]
    total: int


# --- Engagement ---
class LikeRequest(BaseModel):
    request_key: str | None = Field(default=None, max_length=200)


class LikeResponse(BaseModel):
    liked: bool
    like_count: int


class VisitorRequest(BaseModel):
    session_token: str


class VisitorResponse(BaseModel):
    total: int
    counted: bool
    window: str
