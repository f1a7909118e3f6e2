"""
Counter component - views, likes and visitor counts.

Invariants:
- views never decrease; each increment is one atomic store operation
- a like is a unique (user, item) pair, toggled by delete-else-insert
- a session token is counted at most once per visitor window
"""

from __future__ import annotations

import logging
from datetime import datetime
from uuid import UUID

from litarchive.domain.errors import InvalidInput, NotFound, Unauthenticated
from litarchive.rules.models import VisitorRules

from .models import (
    IncrementViewInput,
    LikeOutput,
    LikeStateInput,
    RecordVisitorInput,
    ToggleLikeInput,
    ViewCountOutput,
    VisitorOutput,
)
from .ports import CounterStorePort, TimePort

logger = logging.getLogger(__name__)

DEFAULT_VISITOR_RULES = VisitorRules()

MAX_SESSION_TOKEN_LENGTH = 200


# --- Pure Functions ---


def window_key(now: datetime, window: str) -> str:
    """
    Key of the counting window containing ``now``.

    >>> window_key(datetime(2026, 3, 9), "month")
    '2026-03'
    """
    if window == "all_time":
        return "all"
    if window == "year":
        return now.strftime("%Y")
    if window == "month":
        return now.strftime("%Y-%m")
    if window == "day":
        return now.strftime("%Y-%m-%d")
    raise ValueError(f"Unknown visitor window: {window}")


def _baseline(rules: VisitorRules) -> int:
    return rules.initial_count if rules.window == "all_time" else 0


# --- Views ---


def run_increment_view(inp: IncrementViewInput, *, store: CounterStorePort) -> ViewCountOutput:
    """
    Add exactly one view.

    The caller (detail page loader) invokes this at most once per render.
    Raises NotFound for an unknown item.
    """
    views = store.increment_views(inp.item_id)
    if views is None:
        raise NotFound(f"Content {inp.item_id} not found")
    return ViewCountOutput(item_id=inp.item_id, views=views)


def record_view_safely(item_id: UUID, *, store: CounterStorePort) -> int | None:
    """
    Increment views for page rendering; failures are logged and ignored.

    Returns the new count, or None when the increment did not happen.
    """
    try:
        return run_increment_view(IncrementViewInput(item_id=item_id), store=store).views
    except Exception:
        logger.exception("View increment failed for content %s", item_id)
        return None


# --- Likes ---


def run_toggle_like(
    inp: ToggleLikeInput,
    *,
    store: CounterStorePort,
    time: TimePort,
) -> LikeOutput:
    """
    Toggle the caller's like on an item.

    Raises:
        Unauthenticated: no user identity (UI should prompt for sign-in).
        NotFound: unknown item.
    """
    if not inp.user_id:
        raise Unauthenticated("Sign in to like content")

    # Request keys are client-chosen; scope them to the (user, item) pair
    request_key = f"{inp.user_id}:{inp.item_id}:{inp.request_key}" if inp.request_key else None
    state = store.toggle_like(inp.user_id, inp.item_id, time.now_utc(), request_key)
    if state is None:
        raise NotFound(f"Content {inp.item_id} not found")

    return LikeOutput(liked=state.liked, like_count=state.like_count)


def run_like_state(inp: LikeStateInput, *, store: CounterStorePort) -> LikeOutput:
    state = store.like_state(inp.user_id, inp.item_id)
    if state is None:
        raise NotFound(f"Content {inp.item_id} not found")
    return LikeOutput(liked=state.liked, like_count=state.like_count)


# --- Visitors ---


def run_record_visitor(
    inp: RecordVisitorInput,
    *,
    store: CounterStorePort,
    time: TimePort,
    rules: VisitorRules | None = None,
) -> VisitorOutput:
    """
    Count a browser session once per window and return the running total.

    The session boundary belongs to the caller (e.g. browser session storage);
    repeat calls with the same token return the total unchanged.
    """
    rules = rules or DEFAULT_VISITOR_RULES
    token = (inp.session_token or "").strip()
    if not token:
        raise InvalidInput("session_token is required")
    if len(token) > MAX_SESSION_TOKEN_LENGTH:
        raise InvalidInput("session_token is too long")

    now = time.now_utc()
    key = window_key(now, rules.window)
    counted, total = store.record_visitor(key, token, now)
    return VisitorOutput(total=total + _baseline(rules), counted=counted, window=key)


def run_visitor_total(
    *,
    store: CounterStorePort,
    time: TimePort,
    rules: VisitorRules | None = None,
) -> VisitorOutput:
    rules = rules or DEFAULT_VISITOR_RULES
    key = window_key(time.now_utc(), rules.window)
    return VisitorOutput(total=store.visitor_total(key) + _baseline(rules), counted=False, window=key)
