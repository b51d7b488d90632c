"""Plan commands: estimate."""

import json
from pathlib import Path
from typing import Annotated

import typer

from ...core.engine.config_loader import load_timing_config
from ...core.estimated_time import find_inconsistent_scopes, summarize_plan_estimate
from ...io.serializers import ValidationError, load_plan_file, plan_estimate_to_dict
from .. import views
from ..app import ConfigOption, JsonOption, app


@app.command("estimate")
def estimate(
    plan_file: Annotated[
        Path,
        typer.Argument(help="Plan JSON file: a list of exercise rows or {\"exercises\": [...]}"),
    ],
    config_path: ConfigOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Estimate how long a workout plan takes.

    Singles count once; scope blocks count one pass through their
    exercises times the scope's repeat count.
    """
    try:
        exercises = load_plan_file(plan_file)
    except FileNotFoundError:
        views.print_error(f"Plan file not found: {plan_file}")
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    try:
        timing = load_timing_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    result = summarize_plan_estimate(exercises, timing)

    if json_out:
        print(json.dumps(plan_estimate_to_dict(result), indent=2))
        return

    for scope_id in find_inconsistent_scopes(exercises):
        views.print_warning(
            f"Scope {scope_id} members disagree on scope_repeat_count; "
            "using the first member's value."
        )
    views.print_plan_estimate(result)
