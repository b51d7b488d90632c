"""
Session exercise aggregation.

Derives the summary values stored on a session exercise from its logged
sets, unless the caller reported them explicitly.

Reps are summed across sets.  Duration is the maximum across sets: a
unilateral timed exercise logs one duration per side, and the exercise's
duration is its longest side, not their total.
"""

from typing import Any

from .models import (
    PlannedParamsInput,
    SessionExerciseAggregateInput,
    SessionExerciseAggregates,
    is_provided,
)

PLANNED_FIELDS: tuple[str, ...] = (
    "planned_sets",
    "planned_reps",
    "planned_duration_seconds",
    "planned_rest_seconds",
)


def _derive_reps(data: SessionExerciseAggregateInput) -> int | None:
    reps = [s.reps for s in data.sets if s.reps is not None]
    if not reps:
        return None
    total = sum(reps)
    return total if total > 0 else None


def _derive_duration(data: SessionExerciseAggregateInput) -> int | None:
    durations = [s.duration_seconds for s in data.sets if s.duration_seconds is not None]
    if not durations:
        return None
    return max(durations)


def calculate_aggregates_from_sets(
    data: SessionExerciseAggregateInput,
    planned_reps: int | None = None,
    planned_duration_seconds: int | None = None,
) -> SessionExerciseAggregates:
    """
    Compute actual sets, reps and duration for one session exercise.

    Each field is decided independently: an explicitly provided value
    (including 0 and None) is used verbatim, otherwise it is derived from
    ``data.sets``.  Reps are only derived for rep-based exercises
    (planned_reps is not None) and duration only for timed exercises
    (planned_duration_seconds is not None).

    Args:
        data: Reported overrides and logged sets
        planned_reps: Planned reps of the exercise (type discriminator)
        planned_duration_seconds: Planned duration of the exercise (type discriminator)

    Returns:
        SessionExerciseAggregates with each field an int or None
    """
    has_sets = len(data.sets) > 0

    if is_provided(data.actual_count_sets):
        actual_sets = data.actual_count_sets
    elif has_sets:
        actual_sets = len(data.sets)
    else:
        actual_sets = None

    if is_provided(data.actual_sum_reps):
        actual_reps = data.actual_sum_reps
    elif has_sets and planned_reps is not None:
        actual_reps = _derive_reps(data)
    else:
        actual_reps = None

    if is_provided(data.actual_duration_seconds):
        actual_duration = data.actual_duration_seconds
    elif has_sets and planned_duration_seconds is not None:
        actual_duration = _derive_duration(data)
    else:
        actual_duration = None

    return SessionExerciseAggregates(
        actual_sets=actual_sets,  # type: ignore[arg-type]
        actual_reps=actual_reps,  # type: ignore[arg-type]
        actual_duration_seconds=actual_duration,  # type: ignore[arg-type]
    )


def prepare_planned_updates(data: PlannedParamsInput) -> dict[str, Any] | None:
    """
    Collect the planned fields the caller explicitly provided.

    Omitted fields are left out of the result so they are not overwritten
    downstream.

    Returns:
        Dict of provided planned_* fields, or None if none were provided
    """
    updates = {
        name: getattr(data, name)
        for name in PLANNED_FIELDS
        if is_provided(getattr(data, name))
    }
    return updates or None
