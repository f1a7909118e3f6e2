"""Workflow component port definitions - protocols for dependencies."""

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from litarchive.domain.entities import Actor, ContentItem, ContentStatus, TransitionRecord


class WorkflowStorePort(Protocol):
    """Protocol for the status-related store operations."""

    def get(self, item_id: UUID) -> ContentItem | None:
        """Retrieve a content item by ID."""
        ...

    def compare_and_set_status(
        self,
        item_id: UUID,
        expected: ContentStatus,
        new_status: ContentStatus,
        now: datetime,
        record: TransitionRecord,
    ) -> ContentItem | None:
        """
        Move the item to new_status only if it is still in expected.

        Sets published_at on entry into PUBLISHED when it is unset and stores
        the transition record in the same write. Returns the updated item, or
        None if the current status no longer matches.
        """
        ...

    def add_transition(self, record: TransitionRecord) -> None:
        """Append a transition record to the audit trail."""
        ...

    def list_transitions(self, item_id: UUID) -> list[TransitionRecord]:
        """Transition records for an item, oldest first."""
        ...


class PolicyPort(Protocol):
    """Protocol for authorization checks."""

    def require(self, actor: Actor | None, action: str, resource: Any = None) -> None:
        """Raise Unauthenticated/Unauthorized unless the actor may act."""
        ...


class ClockPort(Protocol):
    """Protocol for time operations."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...
