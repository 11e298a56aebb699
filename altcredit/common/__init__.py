"""Common reusable constants and helpers.

Presets live in `common.presets` and are imported from there directly, since
they depend on the model package.
"""

from .scoring_constants import (
    FEATURE_KEYS,
    FEATURE_LABELS,
    FEATURE_WEIGHTS,
    SCORE_MAX,
    SCORE_MIN,
    clamp,
    log_dampen,
    progress_percent,
    round_half_up,
)

__all__ = [
    "FEATURE_KEYS",
    "FEATURE_LABELS",
    "FEATURE_WEIGHTS",
    "SCORE_MAX",
    "SCORE_MIN",
    "clamp",
    "log_dampen",
    "progress_percent",
    "round_half_up",
]
