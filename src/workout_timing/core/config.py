"""
Configuration constants for the workout timing engines.

All adjustable parameters are centralized here.  Values can be overridden
per user through ``timing.yaml`` (see core/engine/config_loader.py).
"""

from dataclasses import dataclass
from typing import Final

# =============================================================================
# ESTIMATED TIME
# =============================================================================

SECONDS_PER_REP: Final[int] = 5  # Work time charged per repetition
UNILATERAL_WORK_MULTIPLIER: Final[int] = 2  # One-side-at-a-time exercises do the work twice

# =============================================================================
# SCOPE BLOCKS
# =============================================================================

DEFAULT_SCOPE_REPEAT_COUNT: Final[int] = 1  # Used when a scope member has no repeat count

# =============================================================================
# TIMER
# =============================================================================

MS_PER_SECOND: Final[int] = 1000


@dataclass(frozen=True)
class TimingConfig:
    """Tunable parameters for the estimated-time engine."""

    seconds_per_rep: int = SECONDS_PER_REP
    unilateral_work_multiplier: int = UNILATERAL_WORK_MULTIPLIER

    def __post_init__(self) -> None:
        if self.seconds_per_rep <= 0:
            raise ValueError("seconds_per_rep must be positive")
        if self.unilateral_work_multiplier < 1:
            raise ValueError("unilateral_work_multiplier must be at least 1")


DEFAULT_TIMING: Final[TimingConfig] = TimingConfig()
