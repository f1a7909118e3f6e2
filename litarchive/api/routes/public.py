from uuid import UUID

from fastapi import APIRouter, Depends

from litarchive.adapters.clock import SystemClock
from litarchive.adapters.sqlite.store import SQLitePublicationStore
from litarchive.api.deps import get_clock, get_optional_actor, get_rules, get_store
from litarchive.api.schemas import (
    LikeRequest,
    LikeResponse,
    PublicContentListResponse,
    PublicContentResponse,
    VisitorRequest,
    VisitorResponse,
)
from litarchive.components.content import (
    GetPublicContentInput,
    ListPublicContentInput,
    run_get_public,
    run_list_public,
)
from litarchive.components.counters import (
    LikeStateInput,
    RecordVisitorInput,
    ToggleLikeInput,
    run_like_state,
    run_record_visitor,
    run_toggle_like,
    run_visitor_total,
)
from litarchive.domain.entities import Actor, ContentItem, ContentKind, ContentStatus
from litarchive.domain.errors import NotFound
from litarchive.rules.models import Rules

router = APIRouter()


def _require_published(store: SQLitePublicationStore, item_id: UUID) -> None:
    item = store.get(item_id)
    if item is None or item.status != ContentStatus.PUBLISHED:
        raise NotFound("Content not found")


# Fixed paths are registered before /{kind} so they are not read as a kind.


@router.get("/visitor", response_model=VisitorResponse)
def get_visitor_total(
    store: SQLitePublicationStore = Depends(get_store),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> VisitorResponse:
    result = run_visitor_total(store=store, time=clock, rules=rules.visitors)
    return VisitorResponse(total=result.total, counted=result.counted, window=result.window)


@router.post("/visitor", response_model=VisitorResponse)
def record_visitor(
    req: VisitorRequest,
    store: SQLitePublicationStore = Depends(get_store),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> VisitorResponse:
    """Count this browser session once; repeat calls return the total unchanged."""
    result = run_record_visitor(
        RecordVisitorInput(session_token=req.session_token),
        store=store,
        time=clock,
        rules=rules.visitors,
    )
    return VisitorResponse(total=result.total, counted=result.counted, window=result.window)


@router.get("/content/{item_id}/like", response_model=LikeResponse)
def get_like_state(
    item_id: UUID,
    actor: Actor | None = Depends(get_optional_actor),
    store: SQLitePublicationStore = Depends(get_store),
) -> LikeResponse:
    _require_published(store, item_id)
    result = run_like_state(
        LikeStateInput(item_id=item_id, user_id=actor.user_id if actor else None), store=store
    )
    return LikeResponse(liked=result.liked, like_count=result.like_count)


@router.post("/content/{item_id}/like", response_model=LikeResponse)
def toggle_like(
    item_id: UUID,
    req: LikeRequest | None = None,
    actor: Actor | None = Depends(get_optional_actor),
    store: SQLitePublicationStore = Depends(get_store),
    clock: SystemClock = Depends(get_clock),
) -> LikeResponse:
    """Toggle the caller's like. Anonymous callers get 401 login_required."""
    _require_published(store, item_id)
    result = run_toggle_like(
        ToggleLikeInput(
            item_id=item_id,
            user_id=actor.user_id if actor else None,
            request_key=req.request_key if req else None,
        ),
        store=store,
        time=clock,
    )
    return LikeResponse(liked=result.liked, like_count=result.like_count)


@router.get("/{kind}", response_model=PublicContentListResponse)
def list_published(
    kind: ContentKind,
    category_id: str | None = None,
    featured: bool | None = None,
    limit: int = 20,
    offset: int = 0,
    store: SQLitePublicationStore = Depends(get_store),
) -> PublicContentListResponse:
    result = run_list_public(
        ListPublicContentInput(
            kind=kind, category_id=category_id, featured=featured, limit=limit, offset=offset
        ),
        store=store,
    )
    return PublicContentListResponse.model_validate(
        {
            "items": [i.model_dump() for i in result.items],
            "total": result.total,
            "limit": result.limit,
            "offset": result.offset,
        }
    )


@router.get("/{kind}/{slug}", response_model=PublicContentResponse)
def get_published(
    kind: ContentKind,
    slug: str,
    store: SQLitePublicationStore = Depends(get_store),
    rules: Rules = Depends(get_rules),
) -> ContentItem:
    """Published item by slug; counts one view."""
    return run_get_public(GetPublicContentInput(kind=kind, slug=slug), store=store, rules=rules).content
