"""
Tests for JSON row conversion.

Key presence decides "provided": an absent key is UNSET, a null or 0 is kept.
"""

import json

import pytest

from workout_timing.core.estimated_time import summarize_plan_estimate
from workout_timing.core.models import UNSET, TimerResult
from workout_timing.io.serializers import (
    ValidationError,
    aggregate_input_from_dict,
    load_json_file,
    load_plan_file,
    plan_estimate_to_dict,
    plan_exercise_from_dict,
    plan_exercises_from_data,
    planned_params_from_dict,
    set_log_from_dict,
    timer_result_to_dict,
    timer_update_from_dict,
)


class TestPlanRows:

    def test_row_fields(self):
        exercise = plan_exercise_from_dict({
            "scope_id": 4,
            "scope_repeat_count": 3,
            "planned_sets": 3,
            "planned_reps": 10,
            "planned_rest_seconds": 30,
            "planned_rest_after_series_seconds": 60,
            "exercise_is_unilateral": True,
            "exercise_title": "Lunges",
        })
        assert exercise.scope_id == "4"
        assert exercise.scope_repeat_count == 3
        assert exercise.title == "Lunges"
        assert exercise.params.series == 3
        assert exercise.params.reps == 10
        assert exercise.params.rest_between_sets_seconds == 30
        assert exercise.params.rest_after_series_seconds == 60
        assert exercise.params.is_unilateral is True

    def test_row_estimate_beats_library_estimate(self):
        exercise = plan_exercise_from_dict({
            "estimated_set_time_seconds": 95,
            "exercise_estimated_set_time_seconds": 40,
        })
        assert exercise.params.explicit_estimated_set_time_seconds == 95

    def test_library_estimate_is_fallback(self):
        exercise = plan_exercise_from_dict({
            "estimated_set_time_seconds": None,
            "exercise_estimated_set_time_seconds": 40,
        })
        assert exercise.params.explicit_estimated_set_time_seconds == 40

    def test_document_shapes(self):
        rows = [{"planned_sets": 1, "planned_reps": 5}]
        assert len(plan_exercises_from_data(rows)) == 1
        assert len(plan_exercises_from_data({"exercises": rows})) == 1

    @pytest.mark.parametrize("data", [42, {"rows": []}, [1, 2]])
    def test_bad_documents(self, data):
        with pytest.raises(ValidationError):
            plan_exercises_from_data(data)

    def test_estimate_to_dict(self):
        exercises = plan_exercises_from_data([
            {"estimated_set_time_seconds": 30, "exercise_title": "Hang"},
            {"estimated_set_time_seconds": 40, "scope_id": "a", "scope_repeat_count": 3},
            {"estimated_set_time_seconds": 20, "scope_id": "a", "scope_repeat_count": 3},
        ])
        d = plan_estimate_to_dict(summarize_plan_estimate(exercises))
        assert d["estimated_total_time_seconds"] == 210
        assert d["lines"][0] == {
            "label": "Hang",
            "scope_id": None,
            "exercise_count": 1,
            "repeat_count": 1,
            "estimated_time_seconds": 30,
        }
        assert d["lines"][1]["estimated_time_seconds"] == 180
        json.dumps(d)


class TestSessionPayloads:

    def test_absent_keys_are_unset(self):
        data = aggregate_input_from_dict({"sets": []})
        assert data.actual_count_sets is UNSET
        assert data.actual_sum_reps is UNSET
        assert data.actual_duration_seconds is UNSET

    def test_present_zero_and_null_are_kept(self):
        data = aggregate_input_from_dict({"actual_count_sets": 0, "actual_sum_reps": None})
        assert data.actual_count_sets == 0
        assert data.actual_sum_reps is None
        assert data.actual_duration_seconds is UNSET

    def test_null_sets_is_empty(self):
        assert aggregate_input_from_dict({"sets": None}).sets == []

    def test_set_numbers_default_to_position(self):
        data = aggregate_input_from_dict({"sets": [{"reps": 5}, {"reps": 6, "set_number": 7}]})
        assert [s.set_number for s in data.sets] == [1, 7]

    @pytest.mark.parametrize(
        "row",
        [{"reps": -1}, {"reps": "five"}, {"set_number": 0}, {"side_number": 0}, "5 reps"],
    )
    def test_invalid_set_logs(self, row):
        with pytest.raises(ValidationError):
            set_log_from_dict(row)

    def test_sets_must_be_a_list(self):
        with pytest.raises(ValidationError):
            aggregate_input_from_dict({"sets": {"reps": 5}})

    def test_planned_params(self):
        planned = planned_params_from_dict({"planned_reps": 8, "planned_sets": None})
        assert planned.planned_reps == 8
        assert planned.planned_sets is None
        assert planned.planned_duration_seconds is UNSET

    @pytest.mark.parametrize("row", [{"duration_seconds": 20.7}, {"reps": 2.5}])
    def test_fractional_counts_are_rejected(self, row):
        with pytest.raises(ValidationError):
            aggregate_input_from_dict({"planned_duration_seconds": 30, "sets": [row]})

    def test_integral_floats_are_accepted(self):
        data = aggregate_input_from_dict({"sets": [{"duration_seconds": 20.0, "reps": 5.0}]})
        assert data.sets[0].duration_seconds == 20
        assert data.sets[0].reps == 5


class TestTimerPayloads:

    def test_update_keeps_absent_keys_unset(self):
        update = timer_update_from_dict({"last_timer_stopped_at": "2026-03-01T18:30:30Z"})
        assert update.active_duration_seconds is UNSET
        assert update.last_timer_started_at is UNSET
        assert update.last_timer_stopped_at == "2026-03-01T18:30:30Z"

    def test_result_omits_unset_timestamps(self):
        d = timer_result_to_dict(TimerResult(active_duration_seconds=130))
        assert d == {"active_duration_seconds": 130}

    def test_result_keeps_supplied_timestamps(self):
        d = timer_result_to_dict(
            TimerResult(active_duration_seconds=0, last_timer_started_at="2026-03-01T18:30:00Z")
        )
        assert d["last_timer_started_at"] == "2026-03-01T18:30:00Z"
        assert "last_timer_stopped_at" not in d


class TestFiles:

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_json_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_plan_file(tmp_path / "missing.json")

    def test_load_plan_file(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps({"exercises": [{"planned_sets": 2, "planned_reps": 10}]}))
        exercises = load_plan_file(path)
        assert exercises[0].params.series == 2
