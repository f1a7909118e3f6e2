"""
Slug allocator port definitions.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID


class SlugStorePort(Protocol):
    """Read access to the slugs already used in a namespace."""

    def slug_taken(self, namespace: str, slug: str, exclude_id: UUID | None = None) -> bool:
        """True if another item (not exclude_id) in the namespace uses the slug."""
        ...
