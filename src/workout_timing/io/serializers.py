"""
JSON serialization for workout-timing models.

Handles conversion between dataclasses and the snake_case rows used by the
plan and session services.  Key presence is significant: a key that is
absent becomes UNSET, a key that is present (even with null or 0) is
"provided".
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from ..core.models import (
    UNSET,
    ExerciseTimeParams,
    PlanEstimate,
    PlannedParamsInput,
    PlanExercise,
    SessionExerciseAggregateInput,
    SessionExerciseAggregates,
    SetLog,
    TimerResult,
    TimerState,
    TimerUpdate,
    is_provided,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is non-negative.

    Args:
        value: Value to validate
        name: Name for error message

    Returns:
        The value if valid

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def _require_mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _provided(data: dict[str, Any], key: str) -> Any:
    """Return data[key], or UNSET when the key is absent."""
    return data[key] if key in data else UNSET


def _optional_int(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{key} must be a number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{key} must be a whole number, got {value!r}")
    return int(value)


def _optional_float(data: dict[str, Any], key: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{key} must be a number, got {value!r}")
    return float(value)


def _timestamp_to_json(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def load_json_file(path: str | Path) -> Any:
    """
    Read a JSON document from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the file is not valid JSON
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {path}: {e}") from e


# =============================================================================
# PLANS
# =============================================================================

def plan_exercise_from_dict(data: dict[str, Any]) -> PlanExercise:
    """
    Convert a plan exercise row to a PlanExercise.

    The explicit estimate is the row's own estimated_set_time_seconds, or
    the library exercise's value when the row has none.  Planned numbers
    are passed through as-is; the engine decides what is estimable.

    Raises:
        ValidationError: If the row is not an object
    """
    _require_mapping(data, "Plan exercise")

    explicit = data.get("estimated_set_time_seconds")
    if explicit is None:
        explicit = data.get("exercise_estimated_set_time_seconds")

    scope_id = data.get("scope_id")
    title = data.get("exercise_title") or data.get("title")

    return PlanExercise(
        params=ExerciseTimeParams(
            series=data.get("planned_sets"),
            reps=data.get("planned_reps"),
            duration_seconds=data.get("planned_duration_seconds"),
            rest_between_sets_seconds=data.get("planned_rest_seconds"),
            rest_after_series_seconds=data.get("planned_rest_after_series_seconds"),
            explicit_estimated_set_time_seconds=explicit,
            is_unilateral=bool(data.get("exercise_is_unilateral") or False),
        ),
        scope_id=str(scope_id) if scope_id is not None else None,
        scope_repeat_count=data.get("scope_repeat_count"),
        title=str(title) if title else None,
    )


def plan_exercises_from_data(data: Any) -> list[PlanExercise]:
    """
    Convert a plan document to plan exercises.

    Accepts either a bare list of rows or an object with an "exercises" list.

    Raises:
        ValidationError: If the document has neither shape
    """
    if isinstance(data, dict):
        data = data.get("exercises")
    if not isinstance(data, list):
        raise ValidationError("Plan must be a list of exercises or an object with an 'exercises' list")
    return [plan_exercise_from_dict(row) for row in data]


def load_plan_file(path: str | Path) -> list[PlanExercise]:
    """Load plan exercises from a JSON file."""
    return plan_exercises_from_data(load_json_file(path))


def plan_estimate_to_dict(estimate: PlanEstimate) -> dict[str, Any]:
    """Convert a PlanEstimate to a JSON-compatible dict."""
    return {
        "estimated_total_time_seconds": estimate.total_seconds,
        "lines": [
            {
                "label": line.label,
                "scope_id": line.scope_id,
                "exercise_count": line.exercise_count,
                "repeat_count": line.repeat_count,
                "estimated_time_seconds": line.seconds,
            }
            for line in estimate.lines
        ],
    }


# =============================================================================
# SESSION EXERCISES
# =============================================================================

def set_log_from_dict(data: dict[str, Any], position: int = 1) -> SetLog:
    """
    Convert a set log row to a SetLog.

    Args:
        data: Dict representation
        position: 1-based position used when set_number is absent

    Raises:
        ValidationError: If data is invalid
    """
    _require_mapping(data, "Set log")

    set_number = _optional_int(data, "set_number")
    reps = _optional_int(data, "reps")
    duration = _optional_int(data, "duration_seconds")
    weight = _optional_float(data, "weight_kg")
    side = _optional_int(data, "side_number")

    for name, value in (("reps", reps), ("duration_seconds", duration), ("weight_kg", weight)):
        if value is not None:
            validate_non_negative(value, name)

    try:
        return SetLog(
            set_number=set_number if set_number is not None else position,
            reps=reps,
            duration_seconds=duration,
            weight_kg=weight,
            side_number=side,
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def set_log_to_dict(set_log: SetLog) -> dict[str, Any]:
    """Convert a SetLog to a JSON-compatible dict."""
    return {
        "set_number": set_log.set_number,
        "reps": set_log.reps,
        "duration_seconds": set_log.duration_seconds,
        "weight_kg": set_log.weight_kg,
        "side_number": set_log.side_number,
    }


def aggregate_input_from_dict(data: dict[str, Any]) -> SessionExerciseAggregateInput:
    """
    Convert a session exercise payload to aggregation input.

    A null "sets" is treated like an empty list.

    Raises:
        ValidationError: If the payload or any set log is invalid
    """
    _require_mapping(data, "Session exercise")

    raw_sets = data.get("sets") or []
    if not isinstance(raw_sets, list):
        raise ValidationError("sets must be a list")

    return SessionExerciseAggregateInput(
        actual_count_sets=_provided(data, "actual_count_sets"),
        actual_sum_reps=_provided(data, "actual_sum_reps"),
        actual_duration_seconds=_provided(data, "actual_duration_seconds"),
        sets=[set_log_from_dict(row, i) for i, row in enumerate(raw_sets, 1)],
    )


def planned_params_from_dict(data: dict[str, Any]) -> PlannedParamsInput:
    """Convert a session exercise payload to the planned fields it provides."""
    _require_mapping(data, "Session exercise")
    return PlannedParamsInput(
        planned_sets=_provided(data, "planned_sets"),
        planned_reps=_provided(data, "planned_reps"),
        planned_duration_seconds=_provided(data, "planned_duration_seconds"),
        planned_rest_seconds=_provided(data, "planned_rest_seconds"),
    )


def aggregates_to_dict(aggregates: SessionExerciseAggregates) -> dict[str, Any]:
    """Convert aggregates to the stored column names."""
    return {
        "actual_sets": aggregates.actual_sets,
        "actual_reps": aggregates.actual_reps,
        "actual_duration_seconds": aggregates.actual_duration_seconds,
    }


# =============================================================================
# TIMER
# =============================================================================

def timer_state_from_dict(data: dict[str, Any]) -> TimerState:
    """Convert a stored session record to its timer state."""
    _require_mapping(data, "Session")
    return TimerState(
        active_duration_seconds=data.get("active_duration_seconds"),
        last_timer_started_at=data.get("last_timer_started_at"),
    )


def timer_update_from_dict(data: dict[str, Any]) -> TimerUpdate:
    """Convert a timer event payload to a TimerUpdate (absent keys stay UNSET)."""
    _require_mapping(data, "Timer update")
    return TimerUpdate(
        active_duration_seconds=_provided(data, "active_duration_seconds"),
        last_timer_started_at=_provided(data, "last_timer_started_at"),
        last_timer_stopped_at=_provided(data, "last_timer_stopped_at"),
    )


def timer_result_to_dict(result: TimerResult) -> dict[str, Any]:
    """
    Convert a TimerResult to the fields to persist.

    Timestamps the event did not carry are omitted, so a partial update
    leaves the stored values alone.
    """
    d: dict[str, Any] = {"active_duration_seconds": result.active_duration_seconds}
    if is_provided(result.last_timer_started_at):
        d["last_timer_started_at"] = _timestamp_to_json(result.last_timer_started_at)
    if is_provided(result.last_timer_stopped_at):
        d["last_timer_stopped_at"] = _timestamp_to_json(result.last_timer_stopped_at)
    return d
