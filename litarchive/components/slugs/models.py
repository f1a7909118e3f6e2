"""
Slug allocator input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class AllocateSlugInput:
    """
    Input for allocating a slug.

    When ``explicit`` is given it is used verbatim (after normalization) and
    never suffixed; a collision is a conflict.
    """

    title: str
    namespace: str
    exclude_id: UUID | None = None
    explicit: str | None = None


@dataclass(frozen=True)
class AllocateSlugOutput:
    slug: str
    pinned: bool
    suffix: int = 1
