"""AltCredit: explainable credit scoring from alternative behavioural data.

Main components:
    - models: input, configuration and result records
    - scoring: the scoring engine (simple and ensemble variants)
    - services: batch scoring over DataFrames
    - api: FastAPI routes in front of the engine
    - core: YAML settings and logging
"""

from .models import (
    CreditInputs,
    FeatureContribution,
    ImpactLabel,
    InvalidInputError,
    RiskTier,
    ScoreResult,
    ScoringConfig,
    ScoringVariant,
)
from .scoring import ScoringEngine

__version__ = "1.0.0"
__all__ = [
    "CreditInputs",
    "FeatureContribution",
    "ImpactLabel",
    "InvalidInputError",
    "RiskTier",
    "ScoreResult",
    "ScoringConfig",
    "ScoringEngine",
    "ScoringVariant",
]
