from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from litarchive.adapters.clock import SystemClock
from litarchive.adapters.sqlite.store import SQLitePublicationStore
from litarchive.api.deps import (
    get_clock,
    get_current_actor,
    get_policy,
    get_rules,
    get_store,
    get_workflow,
)
from litarchive.api.schemas import (
    ContentCreateRequest,
    ContentItemResponse,
    ContentListResponse,
    ContentTransitionRequest,
    ContentUpdateRequest,
    FeaturedRequest,
    TransitionRecordResponse,
)
from litarchive.components.content import (
    CreateContentInput,
    DeleteContentInput,
    GetAdminContentInput,
    ListAdminContentInput,
    SetFeaturedInput,
    UpdateContentInput,
    run_create,
    run_delete,
    run_get_admin,
    run_list_admin,
    run_set_featured,
    run_update,
)
from litarchive.components.workflow import HistoryInput, TransitionInput, WorkflowComponent
from litarchive.domain.entities import Actor, ContentItem, ContentKind, ContentStatus
from litarchive.domain.policy import PolicyEngine
from litarchive.rules.models import Rules

router = APIRouter()


@router.get("", response_model=ContentListResponse)
def list_content(
    kind: ContentKind | None = None,
    status: ContentStatus | None = None,
    limit: int = 50,
    offset: int = 0,
    actor: Actor = Depends(get_current_actor),
    store: SQLitePublicationStore = Depends(get_store),
    policy: PolicyEngine = Depends(get_policy),
) -> ContentListResponse:
    """List content in every status for admins."""
    result = run_list_admin(
        ListAdminContentInput(actor=actor, kind=kind, status=status, limit=limit, offset=offset),
        store=store,
        policy=policy,
    )
    return ContentListResponse.model_validate(
        {
            "items": [i.model_dump() for i in result.items],
            "total": result.total,
            "limit": result.limit,
            "offset": result.offset,
        }
    )


@router.post("", response_model=ContentItemResponse, status_code=status.HTTP_201_CREATED)
def create_content(
    req: ContentCreateRequest,
    actor: Actor = Depends(get_current_actor),
    store: SQLitePublicationStore = Depends(get_store),
    policy: PolicyEngine = Depends(get_policy),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> ContentItem:
    """Create a new DRAFT content item."""
    inp = CreateContentInput(
        kind=req.kind,
        title=req.title,
        actor=actor,
        body=req.body,
        excerpt=req.excerpt,
        slug=req.slug,
        category_id=req.category_id,
        book_id=req.book_id,
        featured=req.featured,
    )
    return run_create(inp, store=store, policy=policy, time=clock, rules=rules).content


@router.get("/{item_id}", response_model=ContentItemResponse)
def get_content(
    item_id: UUID,
    actor: Actor = Depends(get_current_actor),
    store: SQLitePublicationStore = Depends(get_store),
    policy: PolicyEngine = Depends(get_policy),
) -> ContentItem:
    return run_get_admin(
        GetAdminContentInput(item_id=item_id, actor=actor), store=store, policy=policy
    ).content


@router.put("/{item_id}", response_model=ContentItemResponse)
def update_content(
    item_id: UUID,
    req: ContentUpdateRequest,
    actor: Actor = Depends(get_current_actor),
    store: SQLitePublicationStore = Depends(get_store),
    policy: PolicyEngine = Depends(get_policy),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> ContentItem:
    """Edit fields; status changes go through /transition."""
    inp = UpdateContentInput(
        item_id=item_id, actor=actor, updates=req.model_dump(exclude_unset=True)
    )
    return run_update(inp, store=store, policy=policy, time=clock, rules=rules).content


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_content(
    item_id: UUID,
    actor: Actor = Depends(get_current_actor),
    store: SQLitePublicationStore = Depends(get_store),
    policy: PolicyEngine = Depends(get_policy),
) -> Response:
    run_delete(DeleteContentInput(item_id=item_id, actor=actor), store=store, policy=policy)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{item_id}/transition", response_model=ContentItemResponse)
def transition_content(
    item_id: UUID,
    req: ContentTransitionRequest,
    actor: Actor = Depends(get_current_actor),
    workflow: WorkflowComponent = Depends(get_workflow),
) -> ContentItem:
    """Move an item along the status workflow (publish, archive, unpublish...)."""
    inp = TransitionInput(
        item_id=item_id,
        to_status=req.status,
        actor=actor,
        action=req.action,
        reason=req.reason,
    )
    return workflow.run_transition(inp).item


@router.post("/{item_id}/featured", response_model=ContentItemResponse)
def set_featured(
    item_id: UUID,
    req: FeaturedRequest,
    actor: Actor = Depends(get_current_actor),
    store: SQLitePublicationStore = Depends(get_store),
    policy: PolicyEngine = Depends(get_policy),
    clock: SystemClock = Depends(get_clock),
) -> ContentItem:
    inp = SetFeaturedInput(item_id=item_id, featured=req.featured, actor=actor)
    return run_set_featured(inp, store=store, policy=policy, time=clock).content


@router.get("/{item_id}/history", response_model=list[TransitionRecordResponse])
def get_history(
    item_id: UUID,
    actor: Actor = Depends(get_current_actor),
    workflow: WorkflowComponent = Depends(get_workflow),
) -> list[TransitionRecordResponse]:
    records = workflow.run_history(HistoryInput(item_id=item_id, actor=actor)).records
    return [TransitionRecordResponse.model_validate(r.model_dump()) for r in records]
