"""
Workflow component - content status lifecycle.

State machine (see litarchive.domain.state.TRANSITIONS):
- DRAFT -> PENDING (submit; moderated kinds, author)
- DRAFT -> PUBLISHED (publish; admin)
- PENDING -> PUBLISHED | REJECTED (approve | reject; admin)
- PUBLISHED -> ARCHIVED | DRAFT (archive | unpublish; admin)
- REJECTED -> PENDING (resubmit; moderated kinds, author, when enabled)

Writes are compare-and-set on the current status, so of two conflicting
writers the second receives IllegalTransitionError.
"""

import logging

from litarchive.domain.entities import TransitionRecord
from litarchive.domain.errors import IllegalTransitionError, NotFound, Unauthenticated
from litarchive.domain.state import find_edge
from litarchive.rules.models import Rules

from .models import HistoryInput, HistoryOutput, TransitionInput, TransitionOutput
from .ports import ClockPort, PolicyPort, WorkflowStorePort

logger = logging.getLogger(__name__)


class WorkflowComponent:
    """Component enforcing legal status transitions."""

    def __init__(
        self,
        store: WorkflowStorePort,
        policy: PolicyPort,
        clock: ClockPort,
        rules: Rules,
    ) -> None:
        self._store = store
        self._policy = policy
        self._clock = clock
        self._rules = rules

    def run(self, input_data: TransitionInput | HistoryInput) -> TransitionOutput | HistoryOutput:
        """Main dispatcher - routes to appropriate handler based on input type."""
        if isinstance(input_data, TransitionInput):
            return self.run_transition(input_data)
        elif isinstance(input_data, HistoryInput):
            return self.run_history(input_data)
        else:
            raise TypeError(f"Unknown input type: {type(input_data)}")

    def run_transition(self, input_data: TransitionInput) -> TransitionOutput:
        """Apply one status change on behalf of an actor."""
        if input_data.actor is None:
            raise Unauthenticated("Sign in to change content status")

        item = self._store.get(input_data.item_id)
        if item is None:
            raise NotFound(f"Content {input_data.item_id} not found")

        edge = find_edge(
            item.status,
            input_data.to_status,
            item.kind,
            self._rules.content.moderated_kinds,
            self._rules.workflow.flags(),
        )
        if edge is None or (input_data.action and edge.action != input_data.action):
            verb = input_data.action or f"move to {input_data.to_status.value}"
            raise IllegalTransitionError(
                f"Cannot {verb}: {item.kind.value} is {item.status.value}"
            )

        self._policy.require(input_data.actor, edge.permission, item)

        now = self._clock.now_utc()
        record = TransitionRecord(
            content_id=item.id,
            from_status=item.status,
            to_status=input_data.to_status,
            actor_id=input_data.actor.user_id,
            reason=input_data.reason,
            created_at=now,
        )
        updated = self._store.compare_and_set_status(
            item.id, item.status, input_data.to_status, now, record
        )
        if updated is None:
            raise IllegalTransitionError(
                f"Content {item.id} changed status concurrently; {edge.action} not applied"
            )

        logger.info(
            "content %s: %s -> %s (%s by %s)",
            item.id,
            item.status.value,
            updated.status.value,
            edge.action,
            record.actor_id,
        )
        return TransitionOutput(item=updated, record=record)

    def run_history(self, input_data: HistoryInput) -> HistoryOutput:
        """Return the audit trail of status changes for an item."""
        item = self._store.get(input_data.item_id)
        if item is None:
            raise NotFound(f"Content {input_data.item_id} not found")

        self._policy.require(input_data.actor, "content:edit", item)
        return HistoryOutput(records=tuple(self._store.list_transitions(item.id)))
