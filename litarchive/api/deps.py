import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from litarchive.adapters.clock import SystemClock
from litarchive.adapters.sqlite.store import SQLitePublicationStore
from litarchive.api.auth_utils import actor_from_token
from litarchive.components.moderation import ModerationComponent
from litarchive.components.workflow import WorkflowComponent
from litarchive.domain.entities import Actor
from litarchive.domain.errors import Unauthenticated
from litarchive.domain.policy import PolicyEngine
from litarchive.rules.loader import load_rules
from litarchive.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("ARCHIVE_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "archive.db")
        self.rules_path = Path(
            os.environ.get("ARCHIVE_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Store ---
def get_store(settings: Settings = Depends(get_settings)) -> SQLitePublicationStore:
    return SQLitePublicationStore(settings.db_path)


# --- Services ---
def get_policy(rules: Rules = Depends(get_rules)) -> PolicyEngine:
    return PolicyEngine(rules)


def get_clock() -> SystemClock:
    return SystemClock()


def get_workflow(
    store: SQLitePublicationStore = Depends(get_store),
    policy: PolicyEngine = Depends(get_policy),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> WorkflowComponent:
    return WorkflowComponent(store=store, policy=policy, clock=clock, rules=rules)


def get_moderation(
    workflow: WorkflowComponent = Depends(get_workflow),
    store: SQLitePublicationStore = Depends(get_store),
    policy: PolicyEngine = Depends(get_policy),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> ModerationComponent:
    return ModerationComponent(
        workflow=workflow, store=store, policy=policy, clock=clock, rules=rules
    )


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


async def get_optional_actor(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Actor | None:
    """
    Caller identity from the access token, or None for anonymous callers.

    The HttpOnly cookie takes precedence over the Authorization header. A
    token that is present but invalid is rejected rather than treated as
    anonymous.
    """
    cookie_token = request.cookies.get("access_token")
    if cookie_token and cookie_token.startswith("Bearer "):
        token = cookie_token.split(" ")[1]

    if not token:
        return None

    return actor_from_token(token)


async def get_current_actor(
    actor: Annotated[Actor | None, Depends(get_optional_actor)],
) -> Actor:
    if actor is None:
        raise Unauthenticated("Not authenticated")
    return actor
