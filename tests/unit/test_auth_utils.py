from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from litarchive.api.auth_utils import ALGORITHM, SECRET_KEY, actor_from_token, issue_token
from litarchive.domain.entities import Actor
from litarchive.domain.errors import Unauthenticated


def test_round_trip_keeps_role():
    actor = actor_from_token(issue_token(Actor(user_id="u-1", role="ADMIN")))

    assert actor == Actor(user_id="u-1", role="ADMIN")


def test_expired_token_rejected():
    long_ago = datetime.now(UTC) - timedelta(days=3)
    token = issue_token(Actor(user_id="u-1"), now_utc=long_ago)

    with pytest.raises(Unauthenticated):
        actor_from_token(token)


def test_foreign_signature_rejected():
    token = jwt.encode({"sub": "u-1"}, "some-other-key", algorithm=ALGORITHM)

    with pytest.raises(Unauthenticated):
        actor_from_token(token)


def test_missing_role_defaults_to_reader():
    token = jwt.encode({"sub": "u-1"}, SECRET_KEY, algorithm=ALGORITHM)

    assert actor_from_token(token).role == "USER"


def test_missing_subject_rejected():
    token = jwt.encode({"role": "ADMIN"}, SECRET_KEY, algorithm=ALGORITHM)

    with pytest.raises(Unauthenticated, match="payload"):
        actor_from_token(token)
