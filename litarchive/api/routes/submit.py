from uuid import UUID

from fastapi import APIRouter, Depends, status

from litarchive.api.deps import get_moderation, get_optional_actor
from litarchive.api.schemas import ContentItemResponse, SubmissionRequest
from litarchive.components.moderation import ModerationComponent, ResubmitInput, SubmitInput
from litarchive.domain.entities import Actor, ContentItem, ContentKind

router = APIRouter()


@router.post("/{kind}", response_model=ContentItemResponse, status_code=status.HTTP_201_CREATED)
def submit(
    kind: ContentKind,
    req: SubmissionRequest,
    actor: Actor | None = Depends(get_optional_actor),
    moderation: ModerationComponent = Depends(get_moderation),
) -> ContentItem:
    """Public submission; lands in PENDING for review."""
    inp = SubmitInput(
        kind=kind,
        title=req.title,
        body=req.body,
        actor=actor,
        excerpt=req.excerpt,
        category_id=req.category_id,
    )
    return moderation.run_submit(inp).item


@router.post("/{item_id}/resubmit", response_model=ContentItemResponse)
def resubmit(
    item_id: UUID,
    actor: Actor | None = Depends(get_optional_actor),
    moderation: ModerationComponent = Depends(get_moderation),
) -> ContentItem:
    return moderation.run_resubmit(ResubmitInput(item_id=item_id, actor=actor)).item
