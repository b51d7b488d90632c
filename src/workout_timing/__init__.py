"""Workout plan time estimates, session aggregates and session timers."""

__version__ = "0.3.0"
