"""Canonical scoring constants: single source of truth for the policy table.

Every number the engine uses lives here. `ScoringConfig` (models) is built from
these values by default, and the engine reads only from a `ScoringConfig`.

Feature keys, in declaration order (also the stable tie-break order for the
explainability report):

    transactions -> monthly_transactions
    topup        -> average_topup
    bills        -> bills_paid
    data         -> data_usage
    usage        -> phone_usage_days
"""

from __future__ import annotations

import math
from typing import Dict, Tuple

# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------
FEATURE_KEYS: Tuple[str, ...] = ("transactions", "topup", "bills", "data", "usage")

FEATURE_FIELDS: Dict[str, str] = {
    "transactions": "monthly_transactions",
    "topup": "average_topup",
    "bills": "bills_paid",
    "data": "data_usage",
    "usage": "phone_usage_days",
}

FEATURE_LABELS: Dict[str, str] = {
    "transactions": "Mobile Money Transactions",
    "topup": "Airtime Top-ups",
    "bills": "Digital Bill Payments",
    "data": "Data Usage",
    "usage": "Phone Usage Pattern",
}

# Weights sum to 1.0
FEATURE_WEIGHTS: Dict[str, float] = {
    "transactions": 0.35,
    "topup": 0.25,
    "bills": 0.20,
    "data": 0.10,
    "usage": 0.10,
}

# Normalization divisors: normalized = min(raw / cap, 1)
FEATURE_CAPS: Dict[str, float] = {
    "transactions": 50.0,
    "topup": 100.0,
    "bills": 10.0,
    "data": 5000.0,
    "usage": 30.0,
}

# Reference population averages for impact labelling
REFERENCE_AVERAGES: Dict[str, float] = {
    "transactions": 25.0,
    "topup": 50.0,
    "bills": 5.0,
    "data": 2500.0,
    "usage": 25.0,
}

# Display hint only; values above it saturate rather than fail.
PHONE_USAGE_DAYS_MAX: int = 31

# ---------------------------------------------------------------------------
# Score scale
# ---------------------------------------------------------------------------
SCORE_MIN: int = 300
SCORE_MAX: int = 850
SIMPLE_SCORE_MULTIPLIER: float = 850.0
ENSEMBLE_SCORE_MULTIPLIER: float = 550.0

# ---------------------------------------------------------------------------
# Ensemble derived-feature coefficients
# ---------------------------------------------------------------------------
MONTHS_PER_YEAR: int = 12
DAYS_PER_MONTH: float = 30.0
DATA_MB_PER_GB: float = 1000.0
INTERACTION_COEFFICIENT: float = 0.1
CONSISTENCY_COEFFICIENT: float = 0.05
RANDOM_VARIANCE: float = 0.01

# Confidence blend: completeness vs. usage consistency
COMPLETENESS_WEIGHT: float = 0.7
CONSISTENCY_WEIGHT: float = 0.3

# ---------------------------------------------------------------------------
# Impact labels: (ratio strictly greater than, label); fallback below
# ---------------------------------------------------------------------------
IMPACT_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (1.2, "Strong Positive"),
    (0.8, "Positive"),
    (0.5, "Neutral"),
)
IMPACT_FALLBACK: str = "Needs Improvement"

# ---------------------------------------------------------------------------
# Tier policy tables, evaluated top to bottom, first match wins
# ---------------------------------------------------------------------------
SIMPLE_TIER_BANDS: Tuple[Dict[str, object], ...] = (
    {
        "min_score": 700,
        "risk": "low",
        "recommendation": (
            "Excellent creditworthiness. Approved for premium loan products "
            "with low interest rates."
        ),
    },
    {
        "min_score": 600,
        "risk": "medium",
        "recommendation": (
            "Good creditworthiness. Approved for standard loan products "
            "with moderate terms."
        ),
    },
    {
        "min_score": SCORE_MIN,
        "risk": "high",
        "recommendation": (
            "Limited creditworthiness. Consider micro-loans or secured credit products."
        ),
    },
)

ENSEMBLE_TIER_BANDS: Tuple[Dict[str, object], ...] = (
    {
        "min_score": 720,
        "risk": "low",
        "loan_multiplier": 3.0,
        "minimum_loan": 0.0,
        "interest_rate": 8.5,
        "recommendation": (
            "Excellent creditworthiness. Pre-approved for up to ${loan_amount:,.2f} "
            "at {interest_rate:.1f}% annual interest."
        ),
    },
    {
        "min_score": 650,
        "risk": "medium",
        "loan_multiplier": 2.0,
        "minimum_loan": 0.0,
        "interest_rate": 12.5,
        "recommendation": (
            "Good creditworthiness. Approved for up to ${loan_amount:,.2f} "
            "at {interest_rate:.1f}% annual interest."
        ),
    },
    {
        "min_score": 550,
        "risk": "medium",
        "loan_multiplier": 1.5,
        "minimum_loan": 0.0,
        "interest_rate": 18.5,
        "recommendation": (
            "Fair creditworthiness. Approved for a starter loan of up to "
            "${loan_amount:,.2f} at {interest_rate:.1f}% annual interest."
        ),
    },
    {
        "min_score": SCORE_MIN,
        "risk": "high",
        "loan_multiplier": 0.8,
        "minimum_loan": 100.0,
        "interest_rate": 25.0,
        "recommendation": (
            "Limited creditworthiness. Eligible for a micro-loan of up to "
            "${loan_amount:,.2f} at {interest_rate:.1f}% annual interest."
        ),
    },
)


# ---------------------------------------------------------------------------
# Arithmetic helpers
# ---------------------------------------------------------------------------

def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp `value` into the closed interval [lower, upper]."""
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up.

    Example:  602.5 -> 603, -0.5 -> 0   (Python's round() would give 602 and 0)
    """
    return int(math.floor(value + 0.5))


def log_dampen(normalized: float) -> float:
    """Compress a [0, 1] value with log1p while keeping the [0, 1] range.

    Example:  0.5 -> 0.585, 1.0 -> 1.0
    """
    return math.log1p(normalized) / math.log1p(1.0)


def progress_percent(score: int) -> float:
    """Map a score onto the 0..100 progress bar the result card draws."""
    return (score - SCORE_MIN) / ((SCORE_MAX - SCORE_MIN) / 100.0)
