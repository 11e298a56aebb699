"""Public model package exports for the credit scoring engine."""

from .base import FrozenScoringModel
from .credit_inputs import CreditInputs, coerce_numeric
from .enums import ImpactLabel, RiskTier, ScoringVariant
from .exceptions import InvalidInputError, ScoringConfigError, ScoringError
from .score_result import FeatureContribution, ScoreResult
from .scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig, TierBand

__all__ = [
    "FrozenScoringModel",
    "CreditInputs",
    "coerce_numeric",
    "ImpactLabel",
    "RiskTier",
    "ScoringVariant",
    "ScoringError",
    "InvalidInputError",
    "ScoringConfigError",
    "FeatureContribution",
    "ScoreResult",
    "ScoringConfig",
    "TierBand",
    "DEFAULT_SCORING_CONFIG",
]
