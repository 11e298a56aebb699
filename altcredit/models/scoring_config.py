"""Immutable scoring configuration: weights, caps, baselines and tier policy."""

import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import Field, ValidationError, field_validator, model_validator

from ..common import scoring_constants as const
from .base import FrozenScoringModel
from .enums import RiskTier, ScoringVariant
from .exceptions import ScoringConfigError


logger = logging.getLogger(__name__)

_WEIGHT_SUM_TOLERANCE = 1e-9


class TierBand(FrozenScoringModel):
    """One row of the tier policy table."""

    min_score: int = Field(..., ge=const.SCORE_MIN, le=const.SCORE_MAX)
    risk: RiskTier = Field(...)
    recommendation: str = Field(..., min_length=3)
    loan_multiplier: Optional[float] = Field(default=None, ge=0)
    minimum_loan: float = Field(default=0.0, ge=0)
    interest_rate: Optional[float] = Field(default=None, ge=0)

    @property
    def offers_loan(self) -> bool:
        """Whether this band derives loan terms."""
        return self.loan_multiplier is not None and self.interest_rate is not None


class ScoringConfig(FrozenScoringModel):
    """Process-wide scoring configuration, never mutated after construction."""

    weights: Dict[str, float] = Field(default_factory=lambda: dict(const.FEATURE_WEIGHTS))
    caps: Dict[str, float] = Field(default_factory=lambda: dict(const.FEATURE_CAPS))
    reference_averages: Dict[str, float] = Field(
        default_factory=lambda: dict(const.REFERENCE_AVERAGES)
    )
    labels: Dict[str, str] = Field(default_factory=lambda: dict(const.FEATURE_LABELS))

    random_variance: float = Field(default=const.RANDOM_VARIANCE, ge=0, le=1)

    simple_bands: Tuple[TierBand, ...] = Field(
        default_factory=lambda: tuple(TierBand(**row) for row in const.SIMPLE_TIER_BANDS)
    )
    ensemble_bands: Tuple[TierBand, ...] = Field(
        default_factory=lambda: tuple(TierBand(**row) for row in const.ENSEMBLE_TIER_BANDS)
    )

    @field_validator("caps", "reference_averages")
    @classmethod
    def _require_positive(cls, value: Dict[str, float]) -> Dict[str, float]:
        """Divisors must be strictly positive."""
        for feature, amount in value.items():
            if amount <= 0:
                raise ValueError("{0} must be positive, got {1}".format(feature, amount))
        return value

    @field_validator("simple_bands", "ensemble_bands")
    @classmethod
    def _require_descending_bands(cls, value: Tuple[TierBand, ...]) -> Tuple[TierBand, ...]:
        """Bands must be ordered high to low and end with a catch-all at the floor."""
        if not value:
            raise ValueError("at least one tier band is required")
        thresholds = [band.min_score for band in value]
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError("tier bands must be ordered by descending min_score")
        if thresholds[-1] != const.SCORE_MIN:
            raise ValueError("last tier band must start at {0}".format(const.SCORE_MIN))
        return value

    @model_validator(mode="after")
    def _validate_feature_tables(self) -> "ScoringConfig":
        """Every feature needs a weight, cap, baseline and label; weights sum to 1."""
        expected = set(const.FEATURE_KEYS)
        for name in ("weights", "caps", "reference_averages", "labels"):
            keys = set(getattr(self, name))
            if keys != expected:
                raise ValueError(
                    "{0} must define exactly {1}, got {2}".format(name, sorted(expected), sorted(keys))
                )
        total = sum(self.weights.values())
        if abs(total - 1.0) > _WEIGHT_SUM_TOLERANCE:
            raise ValueError("feature weights must sum to 1.0, got {0}".format(total))
        for band in self.ensemble_bands:
            if not band.offers_loan:
                raise ValueError("ensemble tier bands must define loan_multiplier and interest_rate")
        return self

    @classmethod
    def from_overrides(cls, **overrides: Any) -> "ScoringConfig":
        """Build a config from partial overrides, raising ScoringConfigError when invalid."""
        try:
            return cls(**overrides)
        except ValidationError as exc:
            logger.exception("Invalid scoring configuration overrides=%s", sorted(overrides))
            raise ScoringConfigError(str(exc)) from exc

    def bands_for(self, variant: ScoringVariant) -> Tuple[TierBand, ...]:
        """Return the policy table for a variant."""
        if variant == ScoringVariant.ENSEMBLE:
            return self.ensemble_bands
        return self.simple_bands

    def summary(self) -> Dict[str, Any]:
        """Read-only view of the feature tables for display."""
        return {
            "weights": dict(self.weights),
            "caps": dict(self.caps),
            "reference_averages": dict(self.reference_averages),
            "labels": dict(self.labels),
            "random_variance": self.random_variance,
        }


DEFAULT_SCORING_CONFIG = ScoringConfig()
