"""
Session timer accumulator.

Folds start/stop events into a monotonic active-duration counter.  The
current state is passed in explicitly and the clock is never read, so the
caller owns both "now" and the read-modify-write of the persisted state.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Any

from .config import MS_PER_SECOND
from .models import TimerResult, TimerState, TimerUpdate, is_provided
from .numbers import finite_number

# Database timestamps drop trailing zeros from the fraction ("...:00.12345")
_FRACTION_RE = re.compile(r"(?<=\d{2}:\d{2}:\d{2})\.(\d+)")


def _pad_fraction(match: re.Match) -> str:
    return "." + (match.group(1) + "000000")[:6]


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse an ISO-8601 timestamp, or return None if it cannot be parsed.

    A trailing "Z" is accepted, as are fractional seconds of any length.
    Values without an offset are read as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        text = _FRACTION_RE.sub(_pad_fraction, text, count=1)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _to_millisecond(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond - value.microsecond % 1000)


def elapsed_seconds(started_at: Any, stopped_at: Any) -> int:
    """
    Whole seconds between two timestamps, floored and clamped at 0.

    Both timestamps are truncated to whole milliseconds before subtracting.
    Unparseable timestamps contribute 0; clock skew never subtracts time.
    """
    start = parse_timestamp(started_at)
    stop = parse_timestamp(stopped_at)
    if start is None or stop is None:
        return 0
    elapsed_ms = (_to_millisecond(stop) - _to_millisecond(start)) // timedelta(milliseconds=1)
    return max(0, elapsed_ms // MS_PER_SECOND)


def calculate_timer_updates(existing: TimerState, updates: TimerUpdate) -> TimerResult:
    """
    Compute the timer values to persist after a timer event.

    1. Start from the persisted active duration (missing → 0).
    2. If the event stops the timer and a start is on record, add the
       elapsed seconds since the *persisted* start.
    3. Add any manual increment.
    4. Echo the event's timestamps, only those it actually carried.

    Never raises; malformed numbers contribute 0.

    Args:
        existing: Persisted timer state
        updates: The incoming event

    Returns:
        TimerResult with the new total and the echoed timestamps
    """
    active_duration = finite_number(existing.active_duration_seconds) or 0

    stopped_at = updates.last_timer_stopped_at
    if is_provided(stopped_at) and stopped_at and existing.last_timer_started_at:
        active_duration += elapsed_seconds(existing.last_timer_started_at, stopped_at)

    if is_provided(updates.active_duration_seconds):
        active_duration += finite_number(updates.active_duration_seconds) or 0

    return TimerResult(
        active_duration_seconds=active_duration,
        last_timer_started_at=updates.last_timer_started_at,
        last_timer_stopped_at=updates.last_timer_stopped_at,
    )
