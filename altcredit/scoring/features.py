"""Feature normalization and ensemble-derived features."""

from typing import Dict

from ..common.scoring_constants import (
    CONSISTENCY_COEFFICIENT,
    DATA_MB_PER_GB,
    DAYS_PER_MONTH,
    FEATURE_KEYS,
    INTERACTION_COEFFICIENT,
    MONTHS_PER_YEAR,
    clamp,
    log_dampen,
)
from ..models.credit_inputs import CreditInputs
from ..models.scoring_config import ScoringConfig


def normalize_features(
    inputs: CreditInputs,
    config: ScoringConfig,
    dampen_transactions: bool = False,
) -> Dict[str, float]:
    """Scale each raw input into [0, 1] against its cap.

    Args:
        inputs: Validated applicant inputs.
        config: Scoring configuration holding the caps.
        dampen_transactions: Apply the log1p transform to transactions (ensemble).

    Returns:
        Dict[str, float]: Normalized values keyed by feature, declaration order.
    """
    normalized: Dict[str, float] = {}
    for feature in FEATURE_KEYS:
        normalized[feature] = clamp(inputs.feature_value(feature) / config.caps[feature], 0.0, 1.0)
    if dampen_transactions:
        normalized["transactions"] = log_dampen(normalized["transactions"])
    return normalized


def weighted_score(normalized: Dict[str, float], config: ScoringConfig) -> float:
    """Sum of normalized features times their weights."""
    return sum(normalized[feature] * config.weights[feature] for feature in FEATURE_KEYS)


def derive_features(inputs: CreditInputs) -> Dict[str, float]:
    """Compute the ensemble's derived features from raw (unnormalized) inputs."""
    transaction_velocity = inputs.monthly_transactions / DAYS_PER_MONTH
    digital_engagement = (inputs.bills_paid + inputs.data_usage / DATA_MB_PER_GB) / 2
    # Not capped: 31 active days gives a score slightly above 1.
    consistency_score = inputs.phone_usage_days / DAYS_PER_MONTH
    return {
        "total_spending": inputs.average_topup * MONTHS_PER_YEAR,
        "transaction_velocity": transaction_velocity,
        "digital_engagement": digital_engagement,
        "consistency_score": consistency_score,
        "interaction_bonus": transaction_velocity * digital_engagement * INTERACTION_COEFFICIENT,
        "consistency_bonus": consistency_score * CONSISTENCY_COEFFICIENT,
    }


def data_completeness(inputs: CreditInputs) -> float:
    """Share of input fields that carry a positive value."""
    values = inputs.feature_values().values()
    return sum(1 for value in values if value > 0) / float(len(FEATURE_KEYS))
