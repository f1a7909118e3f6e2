"""
Slug allocator - URL-safe, namespace-unique identifiers from titles.

Titles are normalized by ``litarchive.domain.slugify``. A free token is used
as-is; otherwise ``-2``, ``-3`` ... are appended until the namespace has no
other item with that slug. Explicit (admin-typed) slugs are pinned and are
never suffixed.
"""

from __future__ import annotations

from litarchive.domain.errors import ConflictError, InvalidInput
from litarchive.domain.slugify import normalize, with_suffix
from litarchive.rules.models import SlugRules

from .models import AllocateSlugInput, AllocateSlugOutput
from .ports import SlugStorePort

DEFAULT_RULES = SlugRules()


def _trim(token: str, max_length: int) -> str:
    return token[:max_length].strip("-")


def run_allocate(
    inp: AllocateSlugInput,
    *,
    store: SlugStorePort,
    rules: SlugRules | None = None,
) -> AllocateSlugOutput:
    """
    Allocate a slug for a title in a namespace.

    Raises:
        InvalidInput: explicit slug normalizes to nothing.
        ConflictError: explicit slug is taken, or no free suffix within max_suffix.
    """
    rules = rules or DEFAULT_RULES

    if inp.explicit is not None:
        slug = _trim(normalize(inp.explicit), rules.max_length)
        if not slug:
            raise InvalidInput("Slug must contain letters or digits")
        if store.slug_taken(inp.namespace, slug, inp.exclude_id):
            raise ConflictError(f"Slug '{slug}' already exists in '{inp.namespace}'")
        return AllocateSlugOutput(slug=slug, pinned=True)

    base = _trim(normalize(inp.title, transliterate=rules.transliterate), rules.max_length)
    if not base:
        base = rules.fallback

    for n in range(1, rules.max_suffix + 1):
        # Room for the "-n" suffix within max_length
        room = rules.max_length - (len(f"-{n}") if n > 1 else 0)
        candidate = with_suffix(_trim(base, room) or rules.fallback, n)
        if not store.slug_taken(inp.namespace, candidate, inp.exclude_id):
            return AllocateSlugOutput(slug=candidate, pinned=False, suffix=n)

    raise ConflictError(f"No free slug for '{base}' in '{inp.namespace}'")
