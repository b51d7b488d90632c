"""
JSON-file storage for workout sessions.

Keeps each session's timer checkpoint and the per-exercise actual and
planned values.  The store performs the read-modify-write around the pure
engines; it takes no locks and is meant for a single local user.
"""

import json
import logging
from pathlib import Path
from typing import Any

from ..core.aggregates import calculate_aggregates_from_sets, prepare_planned_updates
from ..core.models import (
    PlannedParamsInput,
    SessionExerciseAggregateInput,
    TimerResult,
    TimerState,
    TimerUpdate,
)
from ..core.timer import calculate_timer_updates
from .serializers import (
    ValidationError,
    aggregates_to_dict,
    set_log_to_dict,
    timer_result_to_dict,
    timer_state_from_dict,
)

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Manages session records stored in a single JSON file.

    File layout:
        {"sessions": {"<session_id>": {
            "active_duration_seconds": 130,
            "last_timer_started_at": "...",
            "last_timer_stopped_at": "...",
            "exercises": {"<order>": {...}}
        }}}
    """

    def __init__(self, store_path: str | Path):
        """
        Initialize the session store.

        Args:
            store_path: Path to the JSON store file
        """
        self.store_path = Path(store_path)

    def exists(self) -> bool:
        """Check if the store file exists."""
        return self.store_path.exists()

    def init(self) -> None:
        """
        Create an empty store file if it doesn't exist.

        Creates parent directories if needed.
        """
        self.store_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.store_path.exists():
            self._write({"sessions": {}})

    def _read(self) -> dict[str, Any]:
        if not self.store_path.exists():
            return {"sessions": {}}
        try:
            with open(self.store_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Error parsing {self.store_path}: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get("sessions", {}), dict):
            raise ValidationError(f"Unexpected layout in {self.store_path}")
        data.setdefault("sessions", {})
        return data

    def _write(self, data: dict[str, Any]) -> None:
        with open(self.store_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def list_session_ids(self) -> list[str]:
        """Return stored session ids, sorted."""
        return sorted(self._read()["sessions"])

    def load_session(self, session_id: str) -> dict[str, Any]:
        """
        Load one session record.

        Returns:
            The stored record, or an empty dict for an unknown session
        """
        return dict(self._read()["sessions"].get(session_id, {}))

    def load_timer_state(self, session_id: str) -> TimerState:
        """Load the timer checkpoint of a session (zero state if unknown)."""
        return timer_state_from_dict(self.load_session(session_id))

    def apply_timer_update(self, session_id: str, update: TimerUpdate) -> TimerResult:
        """
        Apply a timer event to a session and persist the result.

        Timestamps the event did not carry keep their stored values.

        Args:
            session_id: Session identifier
            update: Timer event

        Returns:
            The computed TimerResult
        """
        self.init()
        data = self._read()
        record = data["sessions"].setdefault(session_id, {})

        result = calculate_timer_updates(timer_state_from_dict(record), update)
        record.update(timer_result_to_dict(result))

        self._write(data)
        logger.info(
            "Session %s timer updated: active_duration_seconds=%s",
            session_id,
            result.active_duration_seconds,
        )
        return result

    def save_exercise(
        self,
        session_id: str,
        order: int,
        actual: SessionExerciseAggregateInput,
        planned: PlannedParamsInput,
    ) -> dict[str, Any]:
        """
        Compute and store the actual values of one session exercise.

        Planned targets are read from the stored exercise (after applying
        any planned fields provided in this call) to decide whether reps or
        duration are derived from the sets.

        Args:
            session_id: Session identifier
            order: 1-based position of the exercise in the session
            actual: Reported overrides and logged sets
            planned: Planned fields to change; omitted fields are kept

        Returns:
            The stored exercise record
        """
        if order < 1:
            raise ValidationError(f"order must be 1 or greater, got {order}")

        self.init()
        data = self._read()
        record = data["sessions"].setdefault(session_id, {})
        exercise = record.setdefault("exercises", {}).setdefault(str(order), {})

        planned_updates = prepare_planned_updates(planned)
        if planned_updates:
            exercise.update(planned_updates)

        aggregates = calculate_aggregates_from_sets(
            actual,
            exercise.get("planned_reps"),
            exercise.get("planned_duration_seconds"),
        )
        exercise.update(aggregates_to_dict(aggregates))
        if actual.sets:
            exercise["sets"] = [set_log_to_dict(s) for s in actual.sets]

        self._write(data)
        logger.info("Session %s exercise %d saved: %s", session_id, order, aggregates)
        return dict(exercise)

    def load_exercise(self, session_id: str, order: int) -> dict[str, Any] | None:
        """Return the stored exercise record, or None if there is none."""
        exercises = self.load_session(session_id).get("exercises", {})
        return exercises.get(str(order))


def get_default_store_path() -> Path:
    """
    Get the default session store path.

    Returns:
        ~/.workout-timing/sessions.json
    """
    return Path.home() / ".workout-timing" / "sessions.json"
