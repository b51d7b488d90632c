"""
Data models for workout-timing.

Transient computation inputs and outputs for the estimated-time, aggregation
and timer engines.  Fields that distinguish "not provided" from "provided as
null" default to the UNSET sentinel rather than None.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Final


class _Unset:
    """Marker type for a key the caller did not supply."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Unset":
        return self

    def __deepcopy__(self, memo: dict) -> "_Unset":
        return self


UNSET: Final[_Unset] = _Unset()

Timestamp = str | datetime


def is_provided(value: Any) -> bool:
    """Return True unless *value* is the UNSET sentinel."""
    return value is not UNSET


# =============================================================================
# ESTIMATED TIME
# =============================================================================

@dataclass(frozen=True)
class ExerciseTimeParams:
    """
    Declarative per-exercise parameters used to estimate execution time.

    Numeric fields are kept as received (possibly None, strings or garbage
    from upstream rows); the engine decides what counts as a valid number.
    """

    series: Any = None
    reps: Any = None
    duration_seconds: Any = None
    rest_between_sets_seconds: Any = None
    rest_after_series_seconds: Any = None
    explicit_estimated_set_time_seconds: Any = None
    is_unilateral: bool = False


@dataclass(frozen=True)
class PlanExercise:
    """
    One exercise row of a workout plan, optionally tagged with a scope.

    All members of a scope are expected to share scope_repeat_count; only
    the first member's value is used when estimating.
    """

    params: ExerciseTimeParams
    scope_id: str | None = None
    scope_repeat_count: Any = None
    title: str | None = None


@dataclass(frozen=True)
class PlanEstimateLine:
    """A single or a scope block in a plan estimate breakdown."""

    label: str
    scope_id: str | None
    exercise_count: int
    repeat_count: int | float
    seconds: int | float | None  # None when nothing in the line could be estimated


@dataclass(frozen=True)
class PlanEstimate:
    """Estimate breakdown for a whole plan."""

    lines: list[PlanEstimateLine] = field(default_factory=list)
    total_seconds: int | float | None = None


# =============================================================================
# SESSION AGGREGATION
# =============================================================================

@dataclass(frozen=True)
class SetLog:
    """
    One logged set of an exercise during a session.

    side_number is set for unilateral exercises that alternate sides.
    """

    set_number: int
    reps: int | None = None
    duration_seconds: int | None = None
    weight_kg: float | None = None
    side_number: int | None = None

    def __post_init__(self) -> None:
        """Validate set data."""
        if self.set_number < 1:
            raise ValueError("set_number must be 1 or greater")
        if self.reps is not None and self.reps < 0:
            raise ValueError("reps must be non-negative")
        if self.duration_seconds is not None and self.duration_seconds < 0:
            raise ValueError("duration_seconds must be non-negative")
        if self.weight_kg is not None and self.weight_kg < 0:
            raise ValueError("weight_kg must be non-negative")
        if self.side_number is not None and self.side_number < 1:
            raise ValueError("side_number must be 1 or greater")


@dataclass(frozen=True)
class SessionExerciseAggregateInput:
    """
    Actual values reported for one session exercise.

    Explicit overrides win over anything derived from ``sets``.  An override
    of 0 or None still counts as provided; only UNSET means "derive it".
    """

    actual_count_sets: int | None | _Unset = UNSET
    actual_sum_reps: int | None | _Unset = UNSET
    actual_duration_seconds: int | None | _Unset = UNSET
    sets: list[SetLog] = field(default_factory=list)


@dataclass(frozen=True)
class SessionExerciseAggregates:
    """Summary values persisted on a session exercise."""

    actual_sets: int | None
    actual_reps: int | None
    actual_duration_seconds: int | None


@dataclass(frozen=True)
class PlannedParamsInput:
    """Planned targets a caller may want to change on a session exercise."""

    planned_sets: int | None | _Unset = UNSET
    planned_reps: int | None | _Unset = UNSET
    planned_duration_seconds: int | None | _Unset = UNSET
    planned_rest_seconds: int | None | _Unset = UNSET


# =============================================================================
# TIMER
# =============================================================================

@dataclass(frozen=True)
class TimerState:
    """Persisted timer checkpoint of a session."""

    active_duration_seconds: int | None = 0
    last_timer_started_at: Timestamp | None = None


@dataclass(frozen=True)
class TimerUpdate:
    """
    A timer event.

    active_duration_seconds is a manual increment added on top of any
    elapsed interval, not a replacement value.
    """

    active_duration_seconds: int | _Unset = UNSET
    last_timer_started_at: Timestamp | _Unset = UNSET
    last_timer_stopped_at: Timestamp | _Unset = UNSET


@dataclass(frozen=True)
class TimerResult:
    """
    New timer values to persist.

    Timestamp fields stay UNSET unless the update supplied them, meaning
    "leave the persisted value alone".
    """

    active_duration_seconds: int
    last_timer_started_at: Timestamp | _Unset = UNSET
    last_timer_stopped_at: Timestamp | _Unset = UNSET
