"""Rules file loading and schema validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from litarchive.domain.entities import ContentKind
from litarchive.rules.loader import load_rules

NAMESPACES = (
    "  namespaces: {poem: writing, song: writing, prose: writing, "
    "blog: blog, video: video, audio: audio}\n"
)


def write(tmp_path: Path, text: str, name: str = "rules.yaml") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_project_rules_load(rules):
    assert rules.namespace_for(ContentKind.POEM) == "writing"
    assert rules.namespace_for(ContentKind.BLOG) == "blog"
    assert rules.is_moderated(ContentKind.BLOG)
    assert rules.is_moderated(ContentKind.VIDEO)
    assert rules.is_moderated(ContentKind.AUDIO)
    assert not rules.is_moderated(ContentKind.SONG)
    assert rules.visitors.window == "all_time"
    assert rules.visitors.initial_count == 15234
    assert rules.workflow.flags() == {"allow_resubmit": True}


def test_kinds_in_namespace(rules):
    assert set(rules.kinds_in_namespace("writing")) == {
        ContentKind.POEM,
        ContentKind.SONG,
        ContentKind.PROSE,
    }


def test_defaults_fill_optional_sections(tmp_path: Path):
    rules = load_rules(write(tmp_path, "content:\n" + NAMESPACES + "rbac:\n  roles: {}\n"))

    assert rules.content.moderated_kinds == [ContentKind.BLOG, ContentKind.VIDEO, ContentKind.AUDIO]
    assert rules.slugs.max_suffix == 1000
    assert rules.slugs.transliterate is False
    assert rules.abac.content_rules == []


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_rules(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path: Path):
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_rules(write(tmp_path, "content: [unclosed\n"))


def test_missing_namespace_rejected(tmp_path: Path):
    text = "content:\n  namespaces: {poem: writing}\nrbac:\n  roles: {}\n"
    with pytest.raises(ValueError, match="validation failed"):
        load_rules(write(tmp_path, text))


def test_unknown_visitor_window_rejected(tmp_path: Path):
    text = "content:\n" + NAMESPACES + "rbac:\n  roles: {}\nvisitors:\n  window: hourly\n"
    with pytest.raises(ValueError):
        load_rules(write(tmp_path, text))


def test_rules_embedded_in_markdown(tmp_path: Path):
    text = (
        "# Archive rules\n\nSome prose.\n\n```yaml\n"
        "content:\n" + NAMESPACES + "rbac:\n  roles: {ADMIN: ['*']}\n"
        "```\n\nTrailing notes.\n"
    )
    rules = load_rules(write(tmp_path, text, "rules.md"))

    assert rules.rbac.roles == {"ADMIN": ["*"]}
