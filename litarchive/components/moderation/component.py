"""
Moderation component - public submissions and admin decisions.

submit -> PENDING; approve -> PUBLISHED; reject -> REJECTED;
resubmit (author) -> PENDING.

The role check is delegated to the injected policy. The pipeline fails
closed: no transition is attempted unless the policy has accepted the actor.
"""

import logging

from litarchive.components.content import ContentStorePort, clamp_page, insert_new_item
from litarchive.components.workflow.models import TransitionInput
from litarchive.components.workflow.ports import ClockPort
from litarchive.domain.entities import ContentStatus
from litarchive.domain.errors import IllegalTransitionError, InvalidInput, Unauthenticated
from litarchive.rules.models import Rules

from .models import (
    DecisionInput,
    ModerationOutput,
    PendingQueueInput,
    PendingQueueOutput,
    ResubmitInput,
    SubmitInput,
)
from .ports import PolicyPort, WorkflowPort

logger = logging.getLogger(__name__)


class ModerationComponent:
    """Component routing submissions between authors and moderators."""

    def __init__(
        self,
        workflow: WorkflowPort,
        store: ContentStorePort,
        policy: PolicyPort,
        clock: ClockPort,
        rules: Rules,
    ) -> None:
        self._workflow = workflow
        self._store = store
        self._policy = policy
        self._clock = clock
        self._rules = rules

    def run_submit(self, input_data: SubmitInput) -> ModerationOutput:
        """Create a public submission awaiting review."""
        if input_data.actor is None:
            raise Unauthenticated("Sign in to submit")
        if not self._rules.is_moderated(input_data.kind):
            raise IllegalTransitionError(
                f"{input_data.kind.value} does not accept public submissions"
            )
        self._policy.require(input_data.actor, "content:submit_new")

        if not input_data.body or not input_data.body.strip():
            raise InvalidInput("Body is required")

        item = insert_new_item(
            store=self._store,
            rules=self._rules,
            now=self._clock.now_utc(),
            kind=input_data.kind,
            title=input_data.title,
            author=input_data.actor,
            status=ContentStatus.PENDING,
            body=input_data.body,
            excerpt=input_data.excerpt,
            category_id=input_data.category_id,
        )
        logger.info("submission %s received from %s", item.id, input_data.actor.user_id)
        return ModerationOutput(item=item)

    def _decide(
        self, input_data: DecisionInput, to_status: ContentStatus, action: str
    ) -> ModerationOutput:
        # Fail closed before touching the item
        if input_data.actor is None:
            raise Unauthenticated("Sign in to moderate")
        self._policy.require(input_data.actor, "content:moderate")

        result = self._workflow.run_transition(
            TransitionInput(
                item_id=input_data.item_id,
                to_status=to_status,
                actor=input_data.actor,
                action=action,
                reason=input_data.reason,
            )
        )
        return ModerationOutput(item=result.item)

    def run_approve(self, input_data: DecisionInput) -> ModerationOutput:
        return self._decide(input_data, ContentStatus.PUBLISHED, "approve")

    def run_reject(self, input_data: DecisionInput) -> ModerationOutput:
        return self._decide(input_data, ContentStatus.REJECTED, "reject")

    def run_resubmit(self, input_data: ResubmitInput) -> ModerationOutput:
        """Author sends a rejected item back for review."""
        if input_data.actor is None:
            raise Unauthenticated("Sign in to resubmit")

        result = self._workflow.run_transition(
            TransitionInput(
                item_id=input_data.item_id,
                to_status=ContentStatus.PENDING,
                actor=input_data.actor,
                action="resubmit",
            )
        )
        return ModerationOutput(item=result.item)

    def run_pending_queue(self, input_data: PendingQueueInput) -> PendingQueueOutput:
        """Items awaiting a decision, for moderators."""
        self._policy.require(input_data.actor, "content:moderate")

        kinds = [input_data.kind] if input_data.kind else list(self._rules.content.moderated_kinds)
        limit, offset = clamp_page(input_data.limit, input_data.offset)
        items, total = self._store.list_items(
            kinds=kinds,
            status=ContentStatus.PENDING,
            limit=limit,
            offset=offset,
        )
        return PendingQueueOutput(items=items, total=total)
