"""Human-readable rendering of second counts."""


def format_compact_seconds(seconds: int) -> str:
    """
    Format seconds compactly: "45" up to a minute, "m:ss" above.

    Examples:
        45  → "45"
        60  → "60"
        65  → "1:05"
    """
    if seconds <= 60:
        return f"{seconds}"
    minutes, remaining = divmod(int(seconds), 60)
    return f"{minutes}:{remaining:02d}"


def format_duration(seconds: int | None) -> str:
    """Compact duration, or "-" when unknown or zero."""
    if not seconds:
        return "-"
    return format_compact_seconds(seconds)


def format_reps_or_duration(reps: int | None, duration_seconds: int | None) -> str:
    """
    Format an exercise target for a plan card.

    Returns "10 reps" when reps are set, a compact duration when only the
    duration is set, otherwise "-".
    """
    if reps is not None and reps > 0:
        return f"{reps} reps"
    if duration_seconds is not None and duration_seconds > 0:
        return format_duration(duration_seconds)
    return "-"


def format_total_duration(seconds: int | float) -> str:
    """
    Format a plan or session total.

    Examples:
        45   → "45s"
        120  → "2min"
        210  → "3min 30s"
    """
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}s"
    minutes, remaining = divmod(seconds, 60)
    if remaining == 0:
        return f"{minutes}min"
    return f"{minutes}min {remaining}s"


def format_session_progress(
    active_duration_seconds: int | None,
    estimated_total_seconds: int | float | None = None,
) -> str:
    """Format an in-progress session as "X min of Y min" (or "X min" without an estimate)."""
    current_minutes = int(active_duration_seconds or 0) // 60
    if estimated_total_seconds is None:
        return f"{current_minutes} min"
    planned_minutes = int(estimated_total_seconds) // 60
    return f"{current_minutes} min of {planned_minutes} min"
