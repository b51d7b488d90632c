"""
CLI entry point using Typer.

Provides commands for plans and sessions:
- estimate: Estimate how long a workout plan takes
- aggregate: Compute actual sets/reps/duration of a session exercise
- start-timer / stop-timer: Resume and pause a session timer
- add-time: Add time to a session timer by hand
- show-timer: Show a session timer and its progress
"""

from .app import app
from .commands import plans, sessions  # noqa: F401  (registers commands on app)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
