"""Per-feature explanation: static importance plus an impact label per input."""

from typing import Tuple

from ..common.scoring_constants import FEATURE_KEYS, IMPACT_FALLBACK, IMPACT_THRESHOLDS
from ..models.credit_inputs import CreditInputs
from ..models.enums import ImpactLabel
from ..models.score_result import FeatureContribution
from ..models.scoring_config import ScoringConfig


def classify_impact(value: float, reference_average: float) -> ImpactLabel:
    """Bucket a raw value by its ratio to the reference average.

    Example:  ratio 1.5 -> Strong Positive, 1.0 -> Positive, 0.6 -> Neutral, 0.5 -> Needs Improvement
    """
    ratio = value / reference_average
    for threshold, label in IMPACT_THRESHOLDS:
        if ratio > threshold:
            return ImpactLabel(label)
    return ImpactLabel(IMPACT_FALLBACK)


def explain_features(inputs: CreditInputs, config: ScoringConfig) -> Tuple[FeatureContribution, ...]:
    """Build the explanation rows sorted by importance, highest first.

    The sort is stable, so equal weights keep declaration order.
    """
    rows = [
        FeatureContribution(
            feature=feature,
            label=config.labels[feature],
            importance=config.weights[feature] * 100,
            value=inputs.feature_value(feature),
            impact=classify_impact(inputs.feature_value(feature), config.reference_averages[feature]),
        )
        for feature in FEATURE_KEYS
    ]
    return tuple(sorted(rows, key=lambda row: row.importance, reverse=True))
