"""Scoring output records, produced once per engine call."""

from typing import Dict, Optional, Tuple

from pydantic import Field

from ..common.scoring_constants import SCORE_MAX, SCORE_MIN, progress_percent
from .base import FrozenScoringModel
from .enums import ImpactLabel, RiskTier, ScoringVariant


class FeatureContribution(FrozenScoringModel):
    """Explainability row for one input feature."""

    feature: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    importance: float = Field(..., ge=0, le=100)
    value: float = Field(..., ge=0)
    impact: ImpactLabel = Field(...)


class ScoreResult(FrozenScoringModel):
    """Score, tier, loan terms and explanation for one applicant."""

    variant: ScoringVariant = Field(...)
    score: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    risk: RiskTier = Field(...)
    recommendation: str = Field(..., min_length=3)

    loan_amount: Optional[float] = Field(default=None, ge=0)
    interest_rate: Optional[float] = Field(default=None, ge=0)
    confidence: Optional[int] = Field(default=None, ge=0, le=100)
    probability: Optional[int] = Field(default=None, ge=0, le=100)

    base_score: float = Field(..., ge=0)
    final_score: float = Field(...)
    feature_snapshot: Dict[str, float] = Field(default_factory=dict)
    feature_importance: Tuple[FeatureContribution, ...] = Field(default_factory=tuple)

    @property
    def progress_percent(self) -> float:
        """Position of the score on a 0..100 bar."""
        return progress_percent(self.score)
