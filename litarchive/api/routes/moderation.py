from uuid import UUID

from fastapi import APIRouter, Depends

from litarchive.api.deps import get_current_actor, get_moderation
from litarchive.api.schemas import ContentItemResponse, DecisionRequest, PendingQueueResponse
from litarchive.components.moderation import (
    DecisionInput,
    ModerationComponent,
    PendingQueueInput,
)
from litarchive.domain.entities import Actor, ContentItem, ContentKind

router = APIRouter()


@router.get("/pending", response_model=PendingQueueResponse)
def pending_queue(
    kind: ContentKind | None = None,
    limit: int = 50,
    offset: int = 0,
    actor: Actor = Depends(get_current_actor),
    moderation: ModerationComponent = Depends(get_moderation),
) -> PendingQueueResponse:
    """Submissions awaiting a decision."""
    result = moderation.run_pending_queue(
        PendingQueueInput(actor=actor, kind=kind, limit=limit, offset=offset)
    )
    return PendingQueueResponse.model_validate(
        {"items": [i.model_dump() for i in result.items], "total": result.total}
    )


@router.post("/{item_id}/approve", response_model=ContentItemResponse)
def approve(
    item_id: UUID,
    actor: Actor = Depends(get_current_actor),
    moderation: ModerationComponent = Depends(get_moderation),
) -> ContentItem:
    return moderation.run_approve(DecisionInput(item_id=item_id, actor=actor)).item


@router.post("/{item_id}/reject", response_model=ContentItemResponse)
def reject(
    item_id: UUID,
    req: DecisionRequest | None = None,
    actor: Actor = Depends(get_current_actor),
    moderation: ModerationComponent = Depends(get_moderation),
) -> ContentItem:
    reason = req.reason if req else None
    return moderation.run_reject(DecisionInput(item_id=item_id, actor=actor, reason=reason)).item
