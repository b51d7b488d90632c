"""
Unit tests for the estimated-time engine.

Expected values are computed by hand in the comments next to each assertion.
"""

import math

import pytest

from workout_timing.core.config import TimingConfig
from workout_timing.core.estimated_time import (
    calculate_plan_estimated_total_time_seconds,
    calculate_scope_estimated_time_seconds,
    find_inconsistent_scopes,
    get_exercise_estimated_time_seconds,
    group_plan_exercises,
    summarize_plan_estimate,
)
from workout_timing.core.models import ExerciseTimeParams, PlanExercise


def _explicit(seconds) -> ExerciseTimeParams:
    return ExerciseTimeParams(explicit_estimated_set_time_seconds=seconds)


def _plan(seconds, scope_id=None, repeat=None, title=None) -> PlanExercise:
    return PlanExercise(
        params=_explicit(seconds),
        scope_id=scope_id,
        scope_repeat_count=repeat,
        title=title,
    )


# =============================================================================
# Single exercise
# =============================================================================

class TestExerciseEstimate:
    """Tests for get_exercise_estimated_time_seconds."""

    def test_duration_formula(self):
        """Duration with rests: 20*2 + 1*10 + 15 = 65."""
        params = ExerciseTimeParams(
            series=2,
            duration_seconds=20,
            rest_between_sets_seconds=10,
            rest_after_series_seconds=15,
        )
        assert get_exercise_estimated_time_seconds(params) == 65

    def test_reps_formula(self):
        """Reps at 5 s each: 10*5*3 + 2*30 = 210."""
        params = ExerciseTimeParams(series=3, reps=10, rest_between_sets_seconds=30)
        assert get_exercise_estimated_time_seconds(params) == 210

    def test_duration_wins_over_reps(self):
        """Duration 5 with 100 reps: 5*2 + 1*10 = 20, reps ignored."""
        params = ExerciseTimeParams(
            series=2, duration_seconds=5, reps=100, rest_between_sets_seconds=10
        )
        assert get_exercise_estimated_time_seconds(params) == 20

    def test_explicit_override_wins(self):
        """Explicit estimate bypasses every other field, even an invalid series."""
        params = ExerciseTimeParams(
            series=-3, reps=10, explicit_estimated_set_time_seconds=95
        )
        assert get_exercise_estimated_time_seconds(params) == 95

    def test_non_positive_explicit_is_ignored(self):
        """Explicit 0 falls through to the formula: 10*5*1 = 50."""
        params = ExerciseTimeParams(
            series=1, reps=10, explicit_estimated_set_time_seconds=0
        )
        assert get_exercise_estimated_time_seconds(params) == 50

    @pytest.mark.parametrize("series", [0, -1, None, "abc", math.nan, math.inf])
    def test_invalid_series_is_not_estimable(self, series):
        """Series below 1 or not a number gives None, whatever reps/duration say."""
        params = ExerciseTimeParams(series=series, reps=10, duration_seconds=30)
        assert get_exercise_estimated_time_seconds(params) is None

    def test_no_reps_and_no_duration(self):
        """Neither reps nor duration: cannot estimate."""
        params = ExerciseTimeParams(series=3, rest_between_sets_seconds=60)
        assert get_exercise_estimated_time_seconds(params) is None

    def test_single_series_has_no_rest_between(self):
        """series=1: 30*1 + 0*90 + 0 = 30."""
        params = ExerciseTimeParams(
            series=1, duration_seconds=30, rest_between_sets_seconds=90
        )
        assert get_exercise_estimated_time_seconds(params) == 30

    def test_missing_and_negative_rests_count_as_zero(self):
        """Rests never block estimation: 10*5*2 + 0 + 0 = 100."""
        params = ExerciseTimeParams(
            series=2,
            reps=10,
            rest_between_sets_seconds=-20,
            rest_after_series_seconds=None,
        )
        assert get_exercise_estimated_time_seconds(params) == 100

    def test_numeric_strings_are_accepted(self):
        """Form values arrive as strings: 20*2 + 1*10 = 50."""
        params = ExerciseTimeParams(
            series="2", duration_seconds="20", rest_between_sets_seconds="10"
        )
        assert get_exercise_estimated_time_seconds(params) == 50

    def test_unilateral_doubles_work_only(self):
        """Unilateral: 20*2*2 + 1*10 + 15 = 105, rests not doubled."""
        params = ExerciseTimeParams(
            series=2,
            duration_seconds=20,
            rest_between_sets_seconds=10,
            rest_after_series_seconds=15,
            is_unilateral=True,
        )
        assert get_exercise_estimated_time_seconds(params) == 105

    def test_custom_timing_config(self):
        """3 s per rep: 10*3*2 = 60."""
        params = ExerciseTimeParams(series=2, reps=10)
        timing = TimingConfig(seconds_per_rep=3)
        assert get_exercise_estimated_time_seconds(params, timing) == 60

    def test_repeated_calls_agree(self):
        params = ExerciseTimeParams(series=3, reps=8, rest_between_sets_seconds=45)
        first = get_exercise_estimated_time_seconds(params)
        assert get_exercise_estimated_time_seconds(params) == first


# =============================================================================
# Scope blocks
# =============================================================================

class TestScopeEstimate:
    """Tests for calculate_scope_estimated_time_seconds."""

    def test_pass_time_times_repeats(self):
        """(60 + 45) * 3 = 315."""
        exercises = [_explicit(60), _explicit(45)]
        assert calculate_scope_estimated_time_seconds(exercises, 3) == 315

    def test_empty_scope_is_none(self):
        assert calculate_scope_estimated_time_seconds([], 3) is None

    def test_nothing_estimable_is_none(self):
        exercises = [ExerciseTimeParams(series=0, reps=10), ExerciseTimeParams()]
        assert calculate_scope_estimated_time_seconds(exercises, 2) is None

    def test_non_estimable_member_contributes_zero(self):
        """(60 + 0) * 2 = 120."""
        exercises = [_explicit(60), ExerciseTimeParams(series=0)]
        assert calculate_scope_estimated_time_seconds(exercises, 2) == 120

    @pytest.mark.parametrize("repeat", [0, -2, None])
    def test_repeat_count_floor_is_one(self, repeat):
        """Repeat counts below 1 or missing count as one pass: 60 + 45 = 105."""
        exercises = [_explicit(60), _explicit(45)]
        assert calculate_scope_estimated_time_seconds(exercises, repeat) == 105


# =============================================================================
# Whole plan
# =============================================================================

class TestPlanEstimate:
    """Tests for calculate_plan_estimated_total_time_seconds and the breakdown."""

    def test_single_plus_scope(self):
        """30 + (40 + 20) * 3 = 210."""
        exercises = [
            _plan(30),
            _plan(40, scope_id="a", repeat=3),
            _plan(20, scope_id="a", repeat=3),
        ]
        assert calculate_plan_estimated_total_time_seconds(exercises) == 210

    def test_order_does_not_matter(self):
        exercises = [
            _plan(40, scope_id="a", repeat=3),
            _plan(30),
            _plan(20, scope_id="a", repeat=3),
        ]
        assert calculate_plan_estimated_total_time_seconds(exercises) == 210

    def test_empty_plan_is_none(self):
        assert calculate_plan_estimated_total_time_seconds([]) is None

    def test_nothing_estimable_is_none(self):
        exercises = [PlanExercise(params=ExerciseTimeParams(series=2))]
        assert calculate_plan_estimated_total_time_seconds(exercises) is None

    def test_first_member_repeat_count_is_used(self):
        """(40 + 20) * 2 = 120, the second member's 5 is ignored."""
        exercises = [
            _plan(40, scope_id="a", repeat=2),
            _plan(20, scope_id="a", repeat=5),
        ]
        assert calculate_plan_estimated_total_time_seconds(exercises) == 120
        assert find_inconsistent_scopes(exercises) == ["a"]

    def test_scope_members_share_repeat_count(self):
        exercises = [
            _plan(40, scope_id="a", repeat=3),
            _plan(20, scope_id="a", repeat=3),
            _plan(10, scope_id="b", repeat=2),
        ]
        assert find_inconsistent_scopes(exercises) == []

    def test_grouping_keeps_first_seen_order(self):
        exercises = [
            _plan(10, scope_id="b"),
            _plan(30),
            _plan(20, scope_id="a"),
            _plan(5, scope_id="b"),
        ]
        singles, scopes = group_plan_exercises(exercises)
        assert len(singles) == 1
        assert list(scopes) == ["b", "a"]
        assert len(scopes["b"]) == 2


class TestPlanSummary:
    """Tests for summarize_plan_estimate."""

    def test_lines_follow_plan_order(self):
        exercises = [
            _plan(30, title="Warm-up"),
            _plan(40, scope_id="s1", repeat=3, title="Pull-ups"),
            _plan(20, scope_id="s1", repeat=3, title="Dips"),
            _plan(60, title="Plank"),
        ]
        summary = summarize_plan_estimate(exercises)

        assert [line.label for line in summary.lines] == [
            "Warm-up",
            "Pull-ups + Dips",
            "Plank",
        ]
        scope_line = summary.lines[1]
        assert scope_line.scope_id == "s1"
        assert scope_line.exercise_count == 2
        assert scope_line.repeat_count == 3
        assert scope_line.seconds == 180  # (40 + 20) * 3
        # 30 + 180 + 60
        assert summary.total_seconds == 270

    def test_untitled_rows_get_positional_labels(self):
        exercises = [_plan(30), _plan(40, scope_id="7")]
        summary = summarize_plan_estimate(exercises)
        assert [line.label for line in summary.lines] == ["Exercise 1", "Scope 7"]

    def test_total_matches_plan_total(self):
        exercises = [
            _plan(30),
            PlanExercise(params=ExerciseTimeParams(series=0)),
            _plan(40, scope_id="a", repeat=2),
        ]
        summary = summarize_plan_estimate(exercises)
        assert summary.total_seconds == calculate_plan_estimated_total_time_seconds(exercises)
        assert summary.lines[1].seconds is None

    def test_empty_plan(self):
        summary = summarize_plan_estimate([])
        assert summary.lines == []
        assert summary.total_seconds is None
