"""
Counter component - views, likes and session-deduplicated visitor counts.
"""

from .component import (
    record_view_safely,
    run_increment_view,
    run_like_state,
    run_record_visitor,
    run_toggle_like,
    run_visitor_total,
    window_key,
)
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

__all__ = [
    # Component functions
    "run_increment_view",
    "record_view_safely",
    "run_toggle_like",
    "run_like_state",
    "run_record_visitor",
    "run_visitor_total",
    # Pure functions
    "window_key",
    # Models
    "IncrementViewInput",
    "ToggleLikeInput",
    "LikeStateInput",
    "RecordVisitorInput",
    "ViewCountOutput",
    "LikeOutput",
    "VisitorOutput",
    # Ports
    "CounterStorePort",
    "TimePort",
]
