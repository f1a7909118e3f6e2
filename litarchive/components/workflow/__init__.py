"""Workflow component - content status lifecycle."""

from litarchive.components.workflow.component import WorkflowComponent
from litarchive.components.workflow.models import (
    HistoryInput,
    HistoryOutput,
    TransitionInput,
    TransitionOutput,
)
from litarchive.components.workflow.ports import ClockPort, PolicyPort, WorkflowStorePort

__all__ = [
    # Component
    "WorkflowComponent",
    # Models
    "TransitionInput",
    "TransitionOutput",
    "HistoryInput",
    "HistoryOutput",
    # Ports
    "WorkflowStorePort",
    "PolicyPort",
    "ClockPort",
]
