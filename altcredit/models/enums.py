"""Reusable enums for credit scoring models."""

from enum import Enum


class StringEnum(str, Enum):
    """Base enum class with string behavior for JSON serialization."""


class ScoringVariant(StringEnum):
    """Scoring formula variants served by the engine."""

    SIMPLE = "simple"
    ENSEMBLE = "ensemble"


class RiskTier(StringEnum):
    """Risk classification tiers."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ImpactLabel(StringEnum):
    """Qualitative comparison of a raw feature value with its reference average."""

    STRONG_POSITIVE = "Strong Positive"
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEEDS_IMPROVEMENT = "Needs Improvement"
