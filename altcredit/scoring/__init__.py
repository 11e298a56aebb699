"""Scoring package: normalization, aggregation, tier policy and explainability."""

from .engine import (
    ScoringEngine,
    estimate_confidence,
    estimate_default_probability,
    rescale_score,
)
from .explainability import classify_impact, explain_features
from .features import data_completeness, derive_features, normalize_features, weighted_score
from .policy import derive_loan_terms, render_recommendation, select_band

__all__ = [
    "ScoringEngine",
    "estimate_confidence",
    "estimate_default_probability",
    "rescale_score",
    "classify_impact",
    "explain_features",
    "data_completeness",
    "derive_features",
    "normalize_features",
    "weighted_score",
    "derive_loan_terms",
    "render_recommendation",
    "select_band",
]
