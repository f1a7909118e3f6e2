from typing import Protocol

from litarchive.components.content.ports import ContentStorePort
from litarchive.components.counters.ports import CounterStorePort
from litarchive.components.slugs.ports import SlugStorePort
from litarchive.components.workflow.ports import WorkflowStorePort


class PublicationStorePort(
    ContentStorePort,
    WorkflowStorePort,
    CounterStorePort,
    SlugStorePort,
    Protocol,
):
    """
    The whole persistence boundary of the publication core.

    Each component depends only on its own slice; adapters implement all of it.
    """
