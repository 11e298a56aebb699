"""Credit scoring engine serving the simple and ensemble formulas."""

from __future__ import annotations

import logging
import math
import threading
from typing import Any, Dict, Mapping, Optional, Union

import numpy as np

from ..common.scoring_constants import (
    COMPLETENESS_WEIGHT,
    CONSISTENCY_WEIGHT,
    ENSEMBLE_SCORE_MULTIPLIER,
    FEATURE_FIELDS,
    FEATURE_KEYS,
    SCORE_MAX,
    SCORE_MIN,
    SIMPLE_SCORE_MULTIPLIER,
    clamp,
    round_half_up,
)
from ..core.config import AppSettings
from ..models.credit_inputs import CreditInputs
from ..models.enums import ScoringVariant
from ..models.exceptions import InvalidInputError, ScoringConfigError
from ..models.score_result import ScoreResult
from ..models.scoring_config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .explainability import explain_features
from .features import data_completeness, derive_features, normalize_features, weighted_score
from .policy import derive_loan_terms, render_recommendation, select_band


logger = logging.getLogger(__name__)

InputsLike = Union[CreditInputs, Mapping[str, Any]]


def rescale_score(final_score: float, multiplier: float) -> int:
    """Map a pre-rescale aggregate onto the clamped 300..850 scale."""
    return round_half_up(clamp(final_score * multiplier + SCORE_MIN, SCORE_MIN, SCORE_MAX))


def estimate_confidence(completeness: float, consistency_score: float) -> int:
    """Blend input completeness and usage consistency into a 0..100 percentage."""
    raw = (completeness * COMPLETENESS_WEIGHT + consistency_score * CONSISTENCY_WEIGHT) * 100
    return round_half_up(clamp(raw, 0.0, 100.0))


def estimate_default_probability(final_score: float) -> int:
    """Return `(1 - final_score)` as a 0..100 percentage, clamped."""
    return round_half_up(clamp((1.0 - final_score) * 100, 0.0, 100.0))


class ScoringEngine:
    """Computes a score, tier, loan terms and explanation for one applicant.

    The simple variant is a pure function of its inputs. The ensemble variant
    adds one uniform draw in `[-random_variance, +random_variance]`, taken from
    the `rng` passed to `compute` or, when omitted, from a per-thread numpy
    generator. Each thread's generator is seeded from its own child of one
    `SeedSequence(seed)`, so seeded engines are reproducible and threads still
    draw independent streams.
    """

    def __init__(self, config: Optional[ScoringConfig] = None, seed: Optional[int] = None) -> None:
        self._config = config or DEFAULT_SCORING_CONFIG
        self._seed = seed
        self._local = threading.local()
        self._seed_sequence = np.random.SeedSequence(seed)
        self._seed_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "ScoringEngine":
        """Build an engine from application settings.

        Raises:
            ScoringConfigError: If the configured variance is out of range.
        """
        config = ScoringConfig.from_overrides(random_variance=settings.random_variance)
        logger.info(
            "Scoring engine configured variance=%.4f seed=%s",
            config.random_variance,
            settings.random_seed,
        )
        return cls(config=config, seed=settings.random_seed)

    @property
    def config(self) -> ScoringConfig:
        """Return the immutable scoring configuration."""
        return self._config

    @property
    def seed(self) -> Optional[int]:
        """Seed used for per-thread generators, None for fresh entropy."""
        return self._seed

    def compute(
        self,
        inputs: InputsLike,
        variant: Union[ScoringVariant, str] = ScoringVariant.SIMPLE,
        rng: Optional[Any] = None,
    ) -> ScoreResult:
        """Score one applicant.

        Args:
            inputs: `CreditInputs`, or a form mapping coerced into one.
            variant: `simple` or `ensemble`.
            rng: Optional random source exposing `uniform(low, high)`; ensemble only.

        Returns:
            ScoreResult: Fully populated result.

        Raises:
            InvalidInputError: If any field is negative or not finite.
            ScoringConfigError: If the variant is unknown.
        """
        resolved_variant = self._resolve_variant(variant)
        credit_inputs = inputs if isinstance(inputs, CreditInputs) else CreditInputs.from_form(inputs)
        self.validate_inputs(credit_inputs)

        try:
            if resolved_variant == ScoringVariant.ENSEMBLE:
                result = self._compute_ensemble(credit_inputs, rng)
            else:
                result = self._compute_simple(credit_inputs)
        except Exception:
            logger.exception("Scoring failed variant=%s", resolved_variant.value)
            raise

        logger.debug(
            "Scored applicant variant=%s score=%d risk=%s",
            result.variant.value,
            result.score,
            result.risk.value,
        )
        return result

    def validate_inputs(self, inputs: CreditInputs) -> None:
        """Reject negative or non-finite fields before any arithmetic."""
        for feature in FEATURE_KEYS:
            value = inputs.feature_value(feature)
            field_name = _public_field_name(feature)
            if not math.isfinite(value):
                logger.warning("Rejected non-finite input field=%s value=%s", field_name, value)
                raise InvalidInputError(
                    "{0} must be a finite number, got {1}".format(field_name, value),
                    field=field_name,
                    value=value,
                )
            if value < 0:
                logger.warning("Rejected negative input field=%s value=%s", field_name, value)
                raise InvalidInputError(
                    "{0} must not be negative, got {1}".format(field_name, value),
                    field=field_name,
                    value=value,
                )

    def _compute_simple(self, inputs: CreditInputs) -> ScoreResult:
        """Weighted sum on the 850-point multiplier, tier text only."""
        normalized = normalize_features(inputs, self._config)
        base_score = weighted_score(normalized, self._config)
        score = rescale_score(base_score, SIMPLE_SCORE_MULTIPLIER)
        band = select_band(score, self._config.bands_for(ScoringVariant.SIMPLE))

        return ScoreResult(
            variant=ScoringVariant.SIMPLE,
            score=score,
            risk=band.risk,
            recommendation=render_recommendation(band),
            base_score=base_score,
            final_score=base_score,
            feature_snapshot=_snapshot(normalized),
            feature_importance=explain_features(inputs, self._config),
        )

    def _compute_ensemble(self, inputs: CreditInputs, rng: Optional[Any]) -> ScoreResult:
        """Dampened weighted sum plus bonuses and variance on the 550-point multiplier."""
        normalized = normalize_features(inputs, self._config, dampen_transactions=True)
        base_score = weighted_score(normalized, self._config)
        derived = derive_features(inputs)
        variance = self._draw_variance(rng)
        final_score = base_score + derived["interaction_bonus"] + derived["consistency_bonus"] + variance

        score = rescale_score(final_score, ENSEMBLE_SCORE_MULTIPLIER)
        band = select_band(score, self._config.bands_for(ScoringVariant.ENSEMBLE))
        loan_amount, interest_rate = derive_loan_terms(band, derived["total_spending"])

        snapshot = _snapshot(normalized)
        snapshot.update(derived)
        snapshot["random_variance"] = variance

        return ScoreResult(
            variant=ScoringVariant.ENSEMBLE,
            score=score,
            risk=band.risk,
            recommendation=render_recommendation(band, loan_amount, interest_rate),
            loan_amount=loan_amount,
            interest_rate=interest_rate,
            confidence=estimate_confidence(data_completeness(inputs), derived["consistency_score"]),
            probability=estimate_default_probability(final_score),
            base_score=base_score,
            final_score=final_score,
            feature_snapshot=snapshot,
            feature_importance=explain_features(inputs, self._config),
        )

    def _draw_variance(self, rng: Optional[Any]) -> float:
        """Draw the ensemble perturbation, bounded by the configured envelope."""
        bound = self._config.random_variance
        if bound == 0:
            return 0.0
        source = rng if rng is not None else self._thread_generator()
        return clamp(float(source.uniform(-bound, bound)), -bound, bound)

    def _thread_generator(self) -> np.random.Generator:
        """Return this thread's generator, creating it on first use."""
        generator = getattr(self._local, "generator", None)
        if generator is None:
            with self._seed_lock:
                child = self._seed_sequence.spawn(1)[0]
            generator = np.random.default_rng(child)
            self._local.generator = generator
        return generator

    @staticmethod
    def _resolve_variant(variant: Union[ScoringVariant, str]) -> ScoringVariant:
        """Accept enum members or their string values."""
        if isinstance(variant, ScoringVariant):
            return variant
        try:
            return ScoringVariant(str(variant).strip().lower())
        except ValueError:
            logger.warning("Unknown scoring variant requested variant=%s", variant)
            raise ScoringConfigError("Unknown scoring variant '{0}'".format(variant))


def _public_field_name(feature: str) -> str:
    """camelCase field name behind a feature key, as callers submit it."""
    attribute = FEATURE_FIELDS[feature]
    return CreditInputs.model_fields[attribute].alias or attribute


def _snapshot(normalized: Dict[str, float]) -> Dict[str, float]:
    """Prefix normalized values for the result snapshot."""
    return {"{0}_normalized".format(feature): value for feature, value in normalized.items()}
