"""
Estimated time of execution for exercises, scope blocks and whole plans.

All functions are pure.  "Nothing could be estimated" is always None,
never 0, so callers can tell "unknown" apart from "instant".

Per exercise (first match wins):
    explicit estimate > 0               → explicit estimate
    series < 1 or not a number          → None
    duration > 0                        → duration × series × k + (series − 1) × rest + rest_after
    reps > 0                            → reps × 5 s × series × k + (series − 1) × rest + rest_after
    otherwise                           → None

k is the unilateral work multiplier (1 for bilateral exercises).
"""

from typing import Any, Sequence

from .config import DEFAULT_SCOPE_REPEAT_COUNT, DEFAULT_TIMING, TimingConfig
from .models import ExerciseTimeParams, PlanEstimate, PlanEstimateLine, PlanExercise
from .numbers import Number, finite_number

Seconds = Number


def _rest_seconds(value: Any) -> Seconds:
    """Rest never blocks estimation: missing, invalid or negative counts as 0."""
    number = finite_number(value)
    if number is None or number < 0:
        return 0
    return number


def _repeat_count(value: Any) -> Seconds:
    number = finite_number(value)
    if number is None:
        return DEFAULT_SCOPE_REPEAT_COUNT
    return max(1, number)


def get_exercise_estimated_time_seconds(
    params: ExerciseTimeParams,
    timing: TimingConfig | None = None,
) -> Seconds | None:
    """
    Estimate how long one exercise takes, rests included.

    Args:
        params: Declarative exercise parameters
        timing: Engine parameters (defaults to DEFAULT_TIMING)

    Returns:
        Estimated seconds, or None if the exercise cannot be estimated
    """
    timing = timing or DEFAULT_TIMING

    explicit = finite_number(params.explicit_estimated_set_time_seconds)
    if explicit is not None and explicit > 0:
        return explicit

    series = finite_number(params.series)
    if series is None or series < 1:
        return None

    rest = _rest_seconds(params.rest_between_sets_seconds)
    rest_after = _rest_seconds(params.rest_after_series_seconds)
    work_multiplier = timing.unilateral_work_multiplier if params.is_unilateral else 1

    duration = finite_number(params.duration_seconds)
    reps = finite_number(params.reps)

    # Duration wins over reps when both are present
    if duration is not None and duration > 0:
        work_time = duration * series * work_multiplier
    elif reps is not None and reps > 0:
        work_time = reps * timing.seconds_per_rep * series * work_multiplier
    else:
        return None

    return work_time + (series - 1) * rest + rest_after


def calculate_scope_estimated_time_seconds(
    exercises: Sequence[ExerciseTimeParams],
    repeat_count: Any,
    timing: TimingConfig | None = None,
) -> Seconds | None:
    """
    Estimate a scope block: one pass through its exercises, repeated.

    Rest after series is already part of each exercise's estimate, so it is
    counted once per pass.

    Args:
        exercises: Exercises of the block, in any order
        repeat_count: Number of passes (values below 1 are treated as 1)
        timing: Engine parameters

    Returns:
        Estimated seconds, or None if the block is empty or nothing in it
        could be estimated
    """
    if not exercises:
        return None

    pass_time = sum(
        get_exercise_estimated_time_seconds(exercise, timing) or 0
        for exercise in exercises
    )
    if pass_time <= 0:
        return None

    return pass_time * _repeat_count(repeat_count)


def group_plan_exercises(
    exercises: Sequence[PlanExercise],
) -> tuple[list[PlanExercise], dict[str, list[PlanExercise]]]:
    """
    Split plan exercises into singles and scope groups.

    Returns:
        (singles, {scope_id: members}) with groups in first-seen order
    """
    singles: list[PlanExercise] = []
    scopes: dict[str, list[PlanExercise]] = {}
    for exercise in exercises:
        if exercise.scope_id is None:
            singles.append(exercise)
        else:
            scopes.setdefault(exercise.scope_id, []).append(exercise)
    return singles, scopes


def _scope_estimate(
    members: list[PlanExercise],
    timing: TimingConfig | None,
) -> tuple[Seconds, Seconds | None]:
    # First member's repeat count applies to the whole block
    repeat_count = _repeat_count(members[0].scope_repeat_count)
    seconds = calculate_scope_estimated_time_seconds(
        [member.params for member in members], repeat_count, timing
    )
    return repeat_count, seconds


def calculate_plan_estimated_total_time_seconds(
    exercises: Sequence[PlanExercise],
    timing: TimingConfig | None = None,
) -> Seconds | None:
    """
    Estimate a whole plan: every single once plus every scope block.

    Args:
        exercises: Plan exercises (order does not affect the result)
        timing: Engine parameters

    Returns:
        Estimated total seconds, or None if nothing could be estimated
    """
    singles, scopes = group_plan_exercises(exercises)

    total: Seconds = sum(
        get_exercise_estimated_time_seconds(exercise.params, timing) or 0
        for exercise in singles
    )
    for members in scopes.values():
        _, seconds = _scope_estimate(members, timing)
        total += seconds or 0

    return total if total > 0 else None


def summarize_plan_estimate(
    exercises: Sequence[PlanExercise],
    timing: TimingConfig | None = None,
) -> PlanEstimate:
    """
    Break a plan estimate down into singles and scope blocks.

    Lines follow the plan order; a scope appears where its first member
    appears.  total_seconds equals calculate_plan_estimated_total_time_seconds.
    """
    _, scopes = group_plan_exercises(exercises)
    lines: list[PlanEstimateLine] = []
    emitted_scopes: set[str] = set()

    for position, exercise in enumerate(exercises, 1):
        if exercise.scope_id is None:
            lines.append(
                PlanEstimateLine(
                    label=exercise.title or f"Exercise {position}",
                    scope_id=None,
                    exercise_count=1,
                    repeat_count=1,
                    seconds=get_exercise_estimated_time_seconds(exercise.params, timing),
                )
            )
            continue

        if exercise.scope_id in emitted_scopes:
            continue
        emitted_scopes.add(exercise.scope_id)

        members = scopes[exercise.scope_id]
        repeat_count, seconds = _scope_estimate(members, timing)
        titles = [m.title for m in members if m.title]
        label = " + ".join(titles) if titles else f"Scope {exercise.scope_id}"
        lines.append(
            PlanEstimateLine(
                label=label,
                scope_id=exercise.scope_id,
                exercise_count=len(members),
                repeat_count=repeat_count,
                seconds=seconds,
            )
        )

    return PlanEstimate(
        lines=lines,
        total_seconds=calculate_plan_estimated_total_time_seconds(exercises, timing),
    )


def find_inconsistent_scopes(exercises: Sequence[PlanExercise]) -> list[str]:
    """
    Return ids of scopes whose members disagree on scope_repeat_count.

    The estimators silently use the first member's value; this is for
    callers that want to report bad data.
    """
    _, scopes = group_plan_exercises(exercises)
    return [
        scope_id
        for scope_id, members in scopes.items()
        if len({_repeat_count(m.scope_repeat_count) for m in members}) > 1
    ]
