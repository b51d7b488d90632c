"""Session commands: aggregate, start-timer, stop-timer, add-time, show-timer."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from ...core.aggregates import calculate_aggregates_from_sets, prepare_planned_updates
from ...core.engine.config_loader import load_timing_config
from ...core.estimated_time import calculate_plan_estimated_total_time_seconds
from ...core.models import SessionExerciseAggregates, TimerUpdate
from ...core.timer import parse_timestamp
from ...io.serializers import (
    ValidationError,
    aggregate_input_from_dict,
    aggregates_to_dict,
    load_json_file,
    load_plan_file,
    planned_params_from_dict,
)
from .. import views
from ..app import ConfigOption, JsonOption, StorePathOption, app, get_store

SessionIdArgument = Annotated[str, typer.Argument(help="Session identifier")]

AtOption = Annotated[
    Optional[str],
    typer.Option("--at", help="Event time, ISO-8601 (default: now, UTC)"),
]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _event_time(at: str | None) -> str:
    """Return the event timestamp, exiting on an unparseable --at value."""
    if at is None:
        return _now_iso()
    if parse_timestamp(at) is None:
        views.print_error(f"Invalid timestamp: {at}. Expected ISO-8601, e.g. 2026-03-01T18:30:00Z")
        raise typer.Exit(1)
    return at


def _is_running(record: dict[str, Any]) -> bool:
    """A timer runs when its last start is more recent than its last stop."""
    started = parse_timestamp(record.get("last_timer_started_at"))
    if started is None:
        return False
    stopped = parse_timestamp(record.get("last_timer_stopped_at"))
    return stopped is None or stopped < started


def _print_timer_json(session_id: str, record: dict[str, Any]) -> None:
    print(json.dumps({
        "session_id": session_id,
        "running": _is_running(record),
        "active_duration_seconds": record.get("active_duration_seconds") or 0,
        "last_timer_started_at": record.get("last_timer_started_at"),
        "last_timer_stopped_at": record.get("last_timer_stopped_at"),
    }, indent=2))


@app.command("aggregate")
def aggregate(
    exercise_file: Annotated[
        Path,
        typer.Argument(help="Session exercise JSON: actual_* overrides, sets, planned_* fields"),
    ],
    session_id: Annotated[
        Optional[str],
        typer.Option("--session-id", "-s", help="Store the result on this session"),
    ] = None,
    order: Annotated[
        int,
        typer.Option("--order", "-o", help="1-based position of the exercise in the session"),
    ] = 1,
    store_path: StorePathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Compute actual sets, reps and duration for a session exercise.

    Explicit actual_count_sets / actual_sum_reps / actual_duration_seconds
    win; otherwise values are derived from the logged sets.  Reps are
    summed, duration is the longest set.
    """
    try:
        payload = load_json_file(exercise_file)
        actual = aggregate_input_from_dict(payload)
        planned = planned_params_from_dict(payload)
    except FileNotFoundError:
        views.print_error(f"Exercise file not found: {exercise_file}")
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    planned_updates = prepare_planned_updates(planned)

    if session_id is None:
        aggregates = calculate_aggregates_from_sets(
            actual,
            payload.get("planned_reps"),
            payload.get("planned_duration_seconds"),
        )
    else:
        store = get_store(store_path)
        try:
            record = store.save_exercise(session_id, order, actual, planned)
        except ValidationError as e:
            views.print_error(str(e))
            raise typer.Exit(1)
        aggregates = SessionExerciseAggregates(
            actual_sets=record.get("actual_sets"),
            actual_reps=record.get("actual_reps"),
            actual_duration_seconds=record.get("actual_duration_seconds"),
        )

    if json_out:
        output = aggregates_to_dict(aggregates)
        if planned_updates:
            output["planned_updates"] = planned_updates
        print(json.dumps(output, indent=2))
        return

    views.print_aggregates(aggregates, planned_updates)
    if session_id is not None:
        views.print_success(f"Saved exercise #{order} on session {session_id}")


@app.command("start-timer")
def start_timer(
    session_id: SessionIdArgument,
    at: AtOption = None,
    store_path: StorePathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Start (or resume) the timer of a session.
    """
    store = get_store(store_path)
    started_at = _event_time(at)

    try:
        record = store.load_session(session_id)
        if _is_running(record):
            views.print_error(
                f"Timer already running since {record['last_timer_started_at']}. Stop it first."
            )
            raise typer.Exit(1)
        last_stopped = parse_timestamp(record.get("last_timer_stopped_at"))
        if last_stopped is not None and parse_timestamp(started_at) < last_stopped:
            views.print_error(
                f"Start time {started_at} is before the last stop "
                f"({record['last_timer_stopped_at']})."
            )
            raise typer.Exit(1)
        store.apply_timer_update(session_id, TimerUpdate(last_timer_started_at=started_at))
        record = store.load_session(session_id)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        _print_timer_json(session_id, record)
        return
    views.print_success(f"Timer started for session {session_id} at {started_at}")


@app.command("stop-timer")
def stop_timer(
    session_id: SessionIdArgument,
    at: AtOption = None,
    store_path: StorePathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Stop (pause) the timer of a session and add the elapsed time.
    """
    store = get_store(store_path)
    stopped_at = _event_time(at)

    try:
        record = store.load_session(session_id)
        if not _is_running(record):
            views.print_error(f"Timer for session {session_id} is not running.")
            raise typer.Exit(1)
        result = store.apply_timer_update(session_id, TimerUpdate(last_timer_stopped_at=stopped_at))
        record = store.load_session(session_id)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        _print_timer_json(session_id, record)
        return
    views.print_success(
        f"Timer stopped for session {session_id}. "
        f"Active: {result.active_duration_seconds} s"
    )


@app.command("add-time")
def add_time(
    session_id: SessionIdArgument,
    seconds: Annotated[
        int,
        typer.Option("--seconds", "-s", help="Seconds to add to the active duration"),
    ],
    store_path: StorePathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Add time to a session's active duration by hand.
    """
    if seconds < 0:
        views.print_error("Seconds must be non-negative; the active duration never decreases.")
        raise typer.Exit(1)

    store = get_store(store_path)
    try:
        result = store.apply_timer_update(session_id, TimerUpdate(active_duration_seconds=seconds))
        record = store.load_session(session_id)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        _print_timer_json(session_id, record)
        return
    views.print_success(
        f"Added {seconds} s to session {session_id}. "
        f"Active: {result.active_duration_seconds} s"
    )


@app.command("show-timer")
def show_timer(
    session_id: SessionIdArgument,
    plan_file: Annotated[
        Optional[Path],
        typer.Option("--plan-file", help="Plan JSON file to show progress against"),
    ] = None,
    config_path: ConfigOption = None,
    store_path: StorePathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the stored timer of a session.
    """
    store = get_store(store_path)
    estimated_total = None
    try:
        record = store.load_session(session_id)
        if plan_file is not None:
            exercises = load_plan_file(plan_file)
    except FileNotFoundError:
        views.print_error(f"Plan file not found: {plan_file}")
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if plan_file is not None:
        try:
            timing = load_timing_config(config_path)
        except (FileNotFoundError, ValueError) as e:
            views.print_error(str(e))
            raise typer.Exit(1)
        estimated_total = calculate_plan_estimated_total_time_seconds(exercises, timing)

    if json_out:
        _print_timer_json(session_id, record)
        return
    views.print_timer(session_id, record, _is_running(record), estimated_total)
