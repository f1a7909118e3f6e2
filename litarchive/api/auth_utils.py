import os
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from litarchive.domain.entities import Actor
from litarchive.domain.errors import Unauthenticated

SECRET_KEY = os.environ.get("ARCHIVE_SECRET_KEY", "dev-secret-unsafe")
ALGORITHM = "HS256"
TOKEN_TTL = timedelta(hours=24)
DEFAULT_ROLE = "USER"


def issue_token(
    actor: Actor,
    ttl: timedelta | None = None,
    now_utc: datetime | None = None,
) -> str:
    """
    Sign an identity token for an actor.

    Production tokens come from the identity provider; this exists for
    operator tooling and tests.
    """
    issued = now_utc or datetime.now(UTC)
    claims = {
        "sub": actor.user_id,
        "role": actor.role,
        "iat": issued,
        "exp": issued + (ttl or TOKEN_TTL),
    }
    return jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)


def actor_from_token(token: str) -> Actor:
    """Verify a bearer token and map its claims to an Actor.

    Raises Unauthenticated for a bad signature, an expired token or a
    missing subject. A missing role claim means an ordinary reader.
    """
    try:
        claims = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise Unauthenticated("Invalid token") from e

    user_id = claims.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise Unauthenticated("Invalid token payload")

    role = claims.get("role")
    return Actor(user_id=user_id, role=role if isinstance(role, str) and role else DEFAULT_ROLE)
