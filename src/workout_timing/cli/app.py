"""Shared Typer app object, shared option types, and store utility."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..io.session_store import SessionStore, get_default_store_path

# Shared --store-path option type used by all session commands
StorePathOption = Annotated[
    Optional[Path],
    typer.Option("--store-path", "-p", help="Path to sessions JSON file"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Timing config YAML (default: ~/.workout-timing/timing.yaml)"),
]

app = typer.Typer(
    name="workout-timing",
    help="Workout plan time estimates, session aggregates and session timers.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """
    Estimate workout plans and track workout sessions.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def get_store(store_path: Path | None) -> SessionStore:
    """Get session store from path or default location."""
    if store_path is None:
        store_path = get_default_store_path()
    return SessionStore(store_path)
