"""
Content catalogue - admin CRUD and public read access.

Handles slug allocation on create/edit and the public visibility rule: only
PUBLISHED items are ever returned by public queries. Status is changed only
through the workflow component.

Slug pinning: a slug regenerates from the title on edit until an admin sets
one explicitly; from then on it is pinned and only changes by another
explicit edit.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from litarchive.components.counters import record_view_safely
from litarchive.components.slugs import AllocateSlugInput, run_allocate
from litarchive.domain.entities import Actor, ContentItem, ContentKind, ContentStatus
from litarchive.domain.errors import ConflictError, InvalidInput, NotFound, Unauthenticated
from litarchive.rules.models import Rules

from .models import (
    ContentListOutput,
    ContentOutput,
    CreateContentInput,
    DeleteContentInput,
    GetAdminContentInput,
    GetPublicContentInput,
    ListAdminContentInput,
    ListPublicContentInput,
    SetFeaturedInput,
    UpdateContentInput,
)
from .ports import ContentStorePort, PolicyPort, TimePort

EDITABLE_FIELDS = frozenset({"title", "body", "excerpt", "slug", "category_id", "book_id"})

MAX_PAGE_SIZE = 100


# --- Helpers ---


def clamp_page(limit: int, offset: int) -> tuple[int, int]:
    return max(1, min(limit, MAX_PAGE_SIZE)), max(0, offset)


def make_excerpt(body: str, length: int) -> str:
    text = " ".join(body.split())
    return text if len(text) <= length else text[:length].rstrip() + "…"


def _require_title(title: str | None) -> str:
    if not title or not title.strip():
        raise InvalidInput("Title is required")
    return title.strip()


def insert_new_item(
    *,
    store: ContentStorePort,
    rules: Rules,
    now: datetime,
    kind: ContentKind,
    title: str,
    author: Actor,
    status: ContentStatus,
    body: str = "",
    excerpt: str = "",
    explicit_slug: str | None = None,
    category_id: str | None = None,
    book_id: str | None = None,
    featured: bool = False,
) -> ContentItem:
    """
    Allocate a slug and insert a new item in the given initial status.

    Shared by admin creation (DRAFT) and public submission (PENDING).
    """
    namespace = rules.namespace_for(kind)
    title = _require_title(title)

    # A lost insert means another writer took that slug; re-allocate.
    attempts = rules.slugs.max_suffix
    for attempt in range(1, attempts + 1):
        allocated = run_allocate(
            AllocateSlugInput(title=title, namespace=namespace, explicit=explicit_slug),
            store=store,
            rules=rules.slugs,
        )
        item = ContentItem(
            kind=kind,
            title=title,
            slug=allocated.slug,
            slug_pinned=allocated.pinned,
            body=body,
            excerpt=excerpt or make_excerpt(body, rules.content.excerpt_length),
            status=status,
            author_id=author.user_id,
            category_id=category_id,
            book_id=book_id,
            featured=featured,
            created_at=now,
            updated_at=now,
        )
        try:
            return store.create(item, namespace)
        except ConflictError:
            # Explicit slugs are never re-allocated
            if allocated.pinned or attempt == attempts:
                raise

    raise ConflictError(f"Could not allocate a slug for '{title}'")


# --- Component Entry Points ---


def run_create(
    inp: CreateContentInput,
    *,
    store: ContentStorePort,
    policy: PolicyPort,
    time: TimePort,
    rules: Rules,
) -> ContentOutput:
    """Create admin-authored content in DRAFT."""
    policy.require(inp.actor, "content:create")
    if inp.actor is None:
        raise Unauthenticated("Sign in to create content")

    item = insert_new_item(
        store=store,
        rules=rules,
        now=time.now_utc(),
        kind=inp.kind,
        title=inp.title,
        author=inp.actor,
        status=ContentStatus.DRAFT,
        body=inp.body,
        excerpt=inp.excerpt,
        explicit_slug=inp.slug,
        category_id=inp.category_id,
        book_id=inp.book_id,
        featured=inp.featured,
    )
    return ContentOutput(content=item)


def run_update(
    inp: UpdateContentInput,
    *,
    store: ContentStorePort,
    policy: PolicyPort,
    time: TimePort,
    rules: Rules,
) -> ContentOutput:
    """
    Edit content fields.

    An explicit ``slug`` pins the slug; a title change regenerates an
    unpinned slug. Unknown keys and ``status`` are ignored.
    """
    item = store.get(inp.item_id)
    if item is None:
        raise NotFound(f"Content {inp.item_id} not found")

    policy.require(inp.actor, "content:edit", item)

    updates: dict[str, Any] = {k: v for k, v in inp.updates.items() if k in EDITABLE_FIELDS}
    if "title" in updates:
        updates["title"] = _require_title(updates["title"])

    namespace = rules.namespace_for(item.kind)
    explicit_slug = updates.pop("slug", None)

    if explicit_slug is not None:
        allocated = run_allocate(
            AllocateSlugInput(
                title=updates.get("title", item.title),
                namespace=namespace,
                exclude_id=item.id,
                explicit=explicit_slug,
            ),
            store=store,
            rules=rules.slugs,
        )
        updates["slug"] = allocated.slug
        updates["slug_pinned"] = True
    elif "title" in updates and updates["title"] != item.title and not item.slug_pinned:
        allocated = run_allocate(
            AllocateSlugInput(title=updates["title"], namespace=namespace, exclude_id=item.id),
            store=store,
            rules=rules.slugs,
        )
        updates["slug"] = allocated.slug

    if "body" in updates and "excerpt" not in updates and not item.excerpt:
        updates["excerpt"] = make_excerpt(updates["body"] or "", rules.content.excerpt_length)

    updates["updated_at"] = time.now_utc()
    updated = item.model_copy(update=updates)
    return ContentOutput(content=store.update(updated))


def run_set_featured(
    inp: SetFeaturedInput,
    *,
    store: ContentStorePort,
    policy: PolicyPort,
    time: TimePort,
) -> ContentOutput:
    """Toggle the featured flag; independent of status."""
    item = store.get(inp.item_id)
    if item is None:
        raise NotFound(f"Content {inp.item_id} not found")

    policy.require(inp.actor, "content:feature", item)

    updated = item.model_copy(update={"featured": inp.featured, "updated_at": time.now_utc()})
    return ContentOutput(content=store.update(updated))


def run_delete(
    inp: DeleteContentInput,
    *,
    store: ContentStorePort,
    policy: PolicyPort,
) -> None:
    """Delete an item; its likes go with it."""
    item = store.get(inp.item_id)
    if item is None:
        raise NotFound(f"Content {inp.item_id} not found")

    policy.require(inp.actor, "content:delete", item)

    if not store.delete(item.id):
        raise NotFound(f"Content {inp.item_id} not found")


def run_get_admin(
    inp: GetAdminContentInput,
    *,
    store: ContentStorePort,
    policy: PolicyPort,
) -> ContentOutput:
    item = store.get(inp.item_id)
    if item is None:
        raise NotFound(f"Content {inp.item_id} not found")
    policy.require(inp.actor, "content:edit", item)
    return ContentOutput(content=item)


def run_list_admin(
    inp: ListAdminContentInput,
    *,
    store: ContentStorePort,
    policy: PolicyPort,
) -> ContentListOutput:
    policy.require(inp.actor, "content:edit")
    limit, offset = clamp_page(inp.limit, inp.offset)
    items, total = store.list_items(
        kinds=[inp.kind] if inp.kind else None,
        status=inp.status,
        limit=limit,
        offset=offset,
    )
    return ContentListOutput(items=items, total=total, limit=limit, offset=offset)


def run_get_public(
    inp: GetPublicContentInput,
    *,
    store: ContentStorePort,
    rules: Rules,
) -> ContentOutput:
    """
    Published item by slug, counting one view.

    Anything not PUBLISHED is reported as NotFound. A failed view increment
    does not prevent the item from being returned.
    """
    item = store.find_by_slug(rules.namespace_for(inp.kind), inp.slug)
    if item is None or item.kind != inp.kind or item.status != ContentStatus.PUBLISHED:
        raise NotFound("Content not found")

    if inp.count_view:
        views = record_view_safely(item.id, store=store)
        if views is not None:
            item = item.model_copy(update={"views": views})

    return ContentOutput(content=item)


def run_list_public(
    inp: ListPublicContentInput,
    *,
    store: ContentStorePort,
) -> ContentListOutput:
    """Published items of one kind, newest publication first."""
    limit, offset = clamp_page(inp.limit, inp.offset)
    items, total = store.list_items(
        kinds=[inp.kind],
        status=ContentStatus.PUBLISHED,
        category_id=inp.category_id,
        featured=inp.featured,
        limit=limit,
        offset=offset,
    )
    return ContentListOutput(items=items, total=total, limit=limit, offset=offset)
