"""
Unit tests for the slug allocator component.
"""

from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from litarchive.components.slugs import AllocateSlugInput, run_allocate
from litarchive.domain.errors import ConflictError, InvalidInput
from litarchive.rules.models import SlugRules

# --- Test Fixtures ---


class FakeSlugStore:
    """In-memory slug registry keyed by (namespace, slug)."""

    def __init__(self) -> None:
        self.slugs: dict[tuple[str, str], UUID] = {}

    def add(self, namespace: str, slug: str, item_id: UUID | None = None) -> UUID:
        item_id = item_id or uuid4()
        self.slugs[(namespace, slug)] = item_id
        return item_id

    def slug_taken(self, namespace: str, slug: str, exclude_id: UUID | None = None) -> bool:
        owner = self.slugs.get((namespace, slug))
        return owner is not None and owner != exclude_id


@pytest.fixture
def store() -> FakeSlugStore:
    return FakeSlugStore()


# --- Allocation from titles ---


class TestAllocateFromTitle:
    def test_free_title_used_as_is(self, store: FakeSlugStore) -> None:
        out = run_allocate(AllocateSlugInput(title="Evening Rain", namespace="writing"), store=store)
        assert out.slug == "evening-rain"
        assert out.pinned is False
        assert out.suffix == 1

    def test_collision_appends_numeric_suffix(self, store: FakeSlugStore) -> None:
        store.add("writing", "evening-rain")
        store.add("writing", "evening-rain-2")

        out = run_allocate(AllocateSlugInput(title="Evening Rain", namespace="writing"), store=store)

        assert out.slug == "evening-rain-3"
        assert out.suffix == 3

    def test_two_colliding_titles_get_distinct_slugs(self, store: FakeSlugStore) -> None:
        first = run_allocate(AllocateSlugInput(title="Mother", namespace="writing"), store=store)
        store.add("writing", first.slug)
        second = run_allocate(AllocateSlugInput(title="mother!", namespace="writing"), store=store)

        assert first.slug != second.slug
        assert second.slug == "mother-2"

    def test_namespaces_are_independent(self, store: FakeSlugStore) -> None:
        store.add("writing", "spring")

        out = run_allocate(AllocateSlugInput(title="Spring", namespace="blog"), store=store)

        assert out.slug == "spring"

    def test_own_slug_is_not_a_collision(self, store: FakeSlugStore) -> None:
        item_id = store.add("blog", "hello")

        out = run_allocate(
            AllocateSlugInput(title="Hello", namespace="blog", exclude_id=item_id), store=store
        )

        assert out.slug == "hello"

    def test_bengali_title_kept_literally(self, store: FakeSlugStore) -> None:
        out = run_allocate(AllocateSlugInput(title="আমার সোনার বাংলা", namespace="writing"), store=store)
        assert out.slug == "আমার-সোনার-বাংলা"

    def test_bengali_title_transliterated_when_enabled(self, store: FakeSlugStore) -> None:
        out = run_allocate(
            AllocateSlugInput(title="কবিতা", namespace="writing"),
            store=store,
            rules=SlugRules(transliterate=True),
        )
        assert out.slug == "kobita"

    def test_unusable_title_falls_back(self, store: FakeSlugStore) -> None:
        out = run_allocate(AllocateSlugInput(title="!!!", namespace="blog"), store=store)
        assert out.slug == "item"

    def test_long_title_truncated(self, store: FakeSlugStore) -> None:
        out = run_allocate(
            AllocateSlugInput(title="word " * 50, namespace="blog"),
            store=store,
            rules=SlugRules(max_length=20),
        )
        assert len(out.slug) <= 20
        assert not out.slug.endswith("-")

    def test_suffixed_slug_stays_within_max_length(self, store: FakeSlugStore) -> None:
        rules = SlugRules(max_length=20)
        inp = AllocateSlugInput(title="word " * 50, namespace="blog")
        first = run_allocate(inp, store=store, rules=rules)
        store.add("blog", first.slug)

        second = run_allocate(inp, store=store, rules=rules)

        assert first.slug == "word-word-word-word"
        assert second.slug == "word-word-word-wor-2"
        assert len(second.slug) <= 20

    def test_exhausted_suffixes_conflict(self, store: FakeSlugStore) -> None:
        store.add("blog", "dup")
        store.add("blog", "dup-2")

        with pytest.raises(ConflictError):
            run_allocate(
                AllocateSlugInput(title="dup", namespace="blog"),
                store=store,
                rules=SlugRules(max_suffix=2),
            )


# --- Explicit slugs ---


class TestExplicitSlug:
    def test_explicit_slug_is_pinned(self, store: FakeSlugStore) -> None:
        out = run_allocate(
            AllocateSlugInput(title="Ignored", namespace="blog", explicit="My Custom Slug"),
            store=store,
        )
        assert out.slug == "my-custom-slug"
        assert out.pinned is True

    def test_explicit_collision_raises_conflict(self, store: FakeSlugStore) -> None:
        store.add("blog", "taken")

        with pytest.raises(ConflictError):
            run_allocate(
                AllocateSlugInput(title="x", namespace="blog", explicit="taken"), store=store
            )

    def test_explicit_same_item_allowed(self, store: FakeSlugStore) -> None:
        item_id = store.add("blog", "taken")

        out = run_allocate(
            AllocateSlugInput(title="x", namespace="blog", explicit="taken", exclude_id=item_id),
            store=store,
        )

        assert out.slug == "taken"

    def test_explicit_empty_slug_rejected(self, store: FakeSlugStore) -> None:
        with pytest.raises(InvalidInput):
            run_allocate(AllocateSlugInput(title="x", namespace="blog", explicit="???"), store=store)
