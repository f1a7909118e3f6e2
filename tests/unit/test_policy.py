from pathlib import Path
from types import SimpleNamespace

import pytest

from litarchive.domain.entities import Actor
from litarchive.domain.errors import Unauthenticated, Unauthorized
from litarchive.domain.policy import PolicyEngine
from litarchive.rules.loader import load_rules
from litarchive.rules.models import Rules


@pytest.fixture
def engine(rules: Rules) -> PolicyEngine:
    return PolicyEngine(rules)


def owned_by(user_id: str) -> SimpleNamespace:
    return SimpleNamespace(author_id=user_id)


def test_admin_wildcard(engine):
    admin = Actor(user_id="a", role="ADMIN")
    assert engine.check_permission(admin, "content:delete") is True
    assert engine.check_permission(admin, "content:moderate") is True
    assert engine.check_permission(admin, "anything:really") is True


def test_only_admin_roles_may_moderate(engine, rules):
    moderators = {
        role for role in rules.rbac.roles
        if engine.check_permission(Actor(user_id="x", role=role), "content:moderate")
    }
    assert moderators == {"SUPER_ADMIN", "ADMIN"}


def test_role_is_case_insensitive(engine):
    assert engine.check_permission(Actor(user_id="a", role="super_admin"), "content:moderate")


def test_editor_permissions(engine):
    editor = Actor(user_id="e", role="EDITOR")
    assert engine.check_permission(editor, "content:publish") is True
    assert engine.check_permission(editor, "content:moderate") is False
    assert engine.check_permission(editor, "content:delete") is False


def test_unknown_role_has_nothing(engine):
    assert engine.check_permission(Actor(user_id="x", role="GHOST"), "content:submit_new") is False


def test_anonymous_denied(engine):
    assert engine.check_permission(None, "content:submit_new") is False


def test_abac_owner_may_resubmit(engine):
    author = Actor(user_id="u1", role="USER")

    assert engine.check_permission(author, "content:resubmit", owned_by("u1")) is True
    assert engine.check_permission(author, "content:resubmit", owned_by("u2")) is False
    # Ownership never grants moderation
    assert engine.check_permission(author, "content:moderate", owned_by("u1")) is False


def test_abac_needs_a_resource(engine):
    assert engine.check_permission(Actor(user_id="u1"), "content:resubmit") is False


def test_require_distinguishes_missing_identity(engine):
    with pytest.raises(Unauthenticated) as exc_info:
        engine.require(None, "content:moderate")
    assert exc_info.value.code == "login_required"

    with pytest.raises(Unauthorized) as exc_info:
        engine.require(Actor(user_id="u1"), "content:moderate")
    assert exc_info.value.code == "forbidden"


def test_require_passes_silently(engine):
    assert engine.require(Actor(user_id="a", role="ADMIN"), "content:moderate") is None


def test_public_permissions_allow_anonymous(tmp_path: Path):
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text(
        """
content:
  namespaces: {poem: writing, song: writing, prose: writing, blog: blog, video: video, audio: audio}
rbac:
  roles:
    EDITOR: ["content:*"]
  public_permissions: ["content:read"]
abac:
  content_rules:
    - if: {role_in: [EDITOR], owns_content: true}
      allow: ["content:archive_own"]
""",
        encoding="utf-8",
    )
    engine = PolicyEngine(load_rules(rules_file))
    editor = Actor(user_id="e", role="EDITOR")

    assert engine.check_permission(None, "content:read") is True
    engine.require(None, "content:read")
    # Scoped wildcard
    assert engine.check_permission(editor, "content:edit") is True
    assert engine.check_permission(editor, "users:edit") is False


def test_abac_role_in_predicate(tmp_path: Path):
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text(
        """
content:
  namespaces: {poem: writing, song: writing, prose: writing, blog: blog, video: video, audio: audio}
rbac:
  roles: {}
abac:
  content_rules:
    - if: {role_in: [EDITOR], owns_content: true}
      allow: ["content:archive_own"]
    - if: {time_of_day: night}
      allow: ["content:anything"]
""",
        encoding="utf-8",
    )
    engine = PolicyEngine(load_rules(rules_file))

    assert engine.check_permission(Actor(user_id="e", role="EDITOR"), "content:archive_own", owned_by("e"))
    assert not engine.check_permission(Actor(user_id="u", role="USER"), "content:archive_own", owned_by("u"))
    # Unknown predicates never grant access
    assert not engine.check_permission(Actor(user_id="u"), "content:anything", owned_by("u"))
