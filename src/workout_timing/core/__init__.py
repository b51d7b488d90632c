"""
Pure computation engines for workout-timing.

Re-exports the operations callers normally need; see the individual
modules for helpers.
"""

from .aggregates import calculate_aggregates_from_sets, prepare_planned_updates
from .estimated_time import (
    calculate_plan_estimated_total_time_seconds,
    calculate_scope_estimated_time_seconds,
    get_exercise_estimated_time_seconds,
    summarize_plan_estimate,
)
from .timer import calculate_timer_updates

__all__ = [
    "calculate_aggregates_from_sets",
    "prepare_planned_updates",
    "calculate_plan_estimated_total_time_seconds",
    "calculate_scope_estimated_time_seconds",
    "get_exercise_estimated_time_seconds",
    "summarize_plan_estimate",
    "calculate_timer_updates",
]
