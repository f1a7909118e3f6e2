"""Moderation component port definitions - protocols for dependencies."""

from typing import Any, Protocol

from litarchive.components.workflow.models import TransitionInput, TransitionOutput
from litarchive.domain.entities import Actor


class WorkflowPort(Protocol):
    """The status workflow the pipeline delegates transitions to."""

    def run_transition(self, input_data: TransitionInput) -> TransitionOutput:
        ...


class PolicyPort(Protocol):
    """External authorization collaborator."""

    def require(self, actor: Actor | None, action: str, resource: Any = None) -> None:
        ...
