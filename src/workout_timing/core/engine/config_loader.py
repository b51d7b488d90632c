"""
YAML → TimingConfig loader.

Loads engine parameters from timing.yaml (bundled with the package) and
optionally merges user overrides from ~/.workout-timing/timing.yaml.

Usage:
    from workout_timing.core.engine.config_loader import load_timing_config
    timing = load_timing_config()
    seconds = get_exercise_estimated_time_seconds(params, timing)

If the user override file exists but cannot be read or parsed, a warning
is logged and the file is ignored.  An explicitly named override that does
not exist raises FileNotFoundError.
"""

from __future__ import annotations

import importlib.resources
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from ..config import SECONDS_PER_REP, UNILATERAL_WORK_MULTIPLIER, TimingConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; return {} if it is unreadable or not a mapping."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring timing config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring timing config %s: top level is not a mapping", path)
        return {}
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled timing.yaml, or None if not found."""
    ref = importlib.resources.files("workout_timing").joinpath("timing.yaml")
    if ref.is_file():
        with importlib.resources.as_file(ref) as p:
            return p
    return None


def get_user_yaml_path() -> Path | None:
    """Return ~/.workout-timing/timing.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".workout-timing" / "timing.yaml"
    return p if p.exists() else None


def load_model_config(user_path: Path | None = None) -> dict[str, Any]:
    """
    Load and merge raw configuration sections from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/workout_timing/timing.yaml
    2. User override (``user_path`` or ~/.workout-timing/timing.yaml)

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.

    Raises:
        FileNotFoundError: If ``user_path`` is given but does not exist
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = _deep_merge(config, _load_yaml_file(bundled))

    if user_path is not None and not Path(user_path).exists():
        raise FileNotFoundError(f"Timing config not found: {user_path}")

    user = Path(user_path) if user_path is not None else get_user_yaml_path()
    if user is not None:
        logger.debug("Merging user timing config from %s", user)
        config = _deep_merge(config, _load_yaml_file(user))

    return config


def timing_config_from_dict(config: dict[str, Any]) -> TimingConfig:
    """
    Build a TimingConfig from the ``estimated_time`` section.

    Raises:
        ValueError: If a value is present but not a valid number
    """
    section = config.get("estimated_time") or {}
    if not isinstance(section, dict):
        raise ValueError("estimated_time must be a mapping")
    try:
        seconds_per_rep = int(section.get("seconds_per_rep", SECONDS_PER_REP))
        multiplier = int(section.get("unilateral_work_multiplier", UNILATERAL_WORK_MULTIPLIER))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid estimated_time config: {exc}") from exc
    return TimingConfig(seconds_per_rep=seconds_per_rep, unilateral_work_multiplier=multiplier)


def load_timing_config(user_path: Path | None = None) -> TimingConfig:
    """Load the merged YAML configuration as a TimingConfig."""
    return timing_config_from_dict(load_model_config(user_path))
