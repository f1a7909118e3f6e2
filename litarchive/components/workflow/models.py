"""Workflow component models - frozen dataclass inputs and outputs."""

from dataclasses import dataclass
from uuid import UUID

from litarchive.domain.entities import Actor, ContentItem, ContentStatus, TransitionRecord


@dataclass(frozen=True)
class TransitionInput:
    """
    Input for a status change.

    ``action`` pins the expected edge (e.g. "approve"), so that a request to
    approve cannot silently take a different edge into the same target.
    """

    item_id: UUID
    to_status: ContentStatus
    actor: Actor | None
    action: str | None = None
    reason: str | None = None


@dataclass(frozen=True)
class TransitionOutput:
    item: ContentItem
    record: TransitionRecord


@dataclass(frozen=True)
class HistoryInput:
    item_id: UUID
    actor: Actor | None


@dataclass(frozen=True)
class HistoryOutput:
    records: tuple[TransitionRecord, ...]
