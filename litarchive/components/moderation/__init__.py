"""Moderation component - public submissions and admin decisions."""

from litarchive.components.moderation.component import ModerationComponent
from litarchive.components.moderation.models import (
    DecisionInput,
    ModerationOutput,
    PendingQueueInput,
    PendingQueueOutput,
    ResubmitInput,
    SubmitInput,
)
from litarchive.components.moderation.ports import PolicyPort, WorkflowPort

__all__ = [
    # Component
    "ModerationComponent",
    # Models
    "SubmitInput",
    "DecisionInput",
    "ResubmitInput",
    "PendingQueueInput",
    "ModerationOutput",
    "PendingQueueOutput",
    # Ports
    "WorkflowPort",
    "PolicyPort",
]
