"""Batch scoring over pandas DataFrames and risk-distribution summaries."""

import logging
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from ..models.credit_inputs import CreditInputs
from ..models.enums import RiskTier, ScoringVariant
from ..models.exceptions import InvalidInputError
from ..scoring.engine import ScoringEngine


logger = logging.getLogger(__name__)

RESULT_COLUMNS = [
    "score",
    "risk",
    "recommendation",
    "loan_amount",
    "interest_rate",
    "confidence",
    "probability",
]


class BatchScoringService:
    """Scores many applicants with one engine and summarizes the tiers."""

    def __init__(self, engine: Optional[ScoringEngine] = None) -> None:
        self._engine = engine or ScoringEngine()

    @property
    def engine(self) -> ScoringEngine:
        """Return the engine used for every row."""
        return self._engine

    def score_frame(
        self,
        dataframe: pd.DataFrame,
        variant: Union[ScoringVariant, str] = ScoringVariant.SIMPLE,
        rng: Optional[Any] = None,
    ) -> pd.DataFrame:
        """Score each row and return a copy with result columns appended.

        Columns may use attribute names (`monthly_transactions`) or form names
        (`monthlyTransactions`). Missing columns and empty cells count as 0.

        Args:
            dataframe: One applicant per row.
            variant: Scoring variant applied to every row.
            rng: Optional random source shared across rows (ensemble only).

        Returns:
            pd.DataFrame: Input columns plus `RESULT_COLUMNS`.

        Raises:
            InvalidInputError: If any row holds a negative or non-finite value.
        """
        cleaned = dataframe.astype(object).where(pd.notna(dataframe), None)
        rows: List[Dict[str, Any]] = []
        for index, record in zip(cleaned.index, cleaned.to_dict(orient="records")):
            inputs = CreditInputs.from_form(record)
            try:
                result = self._engine.compute(inputs, variant=variant, rng=rng)
            except InvalidInputError as exc:
                logger.error("Batch row rejected index=%s field=%s", index, exc.field)
                raise InvalidInputError(
                    "row {0}: {1}".format(index, exc),
                    field=exc.field,
                    value=exc.value,
                ) from exc
            rows.append(
                {
                    "score": result.score,
                    "risk": result.risk.value,
                    "recommendation": result.recommendation,
                    "loan_amount": result.loan_amount,
                    "interest_rate": result.interest_rate,
                    "confidence": result.confidence,
                    "probability": result.probability,
                }
            )

        results = pd.DataFrame(rows, columns=RESULT_COLUMNS, index=dataframe.index)
        scored = pd.concat([dataframe.copy(), results], axis=1)
        logger.info("Scored batch rows=%d variant=%s", len(scored), variant)
        return scored

    @staticmethod
    def risk_distribution(scored: pd.DataFrame) -> Dict[str, float]:
        """Percentage of rows per risk tier, always keyed low/medium/high."""
        tiers = [tier.value for tier in RiskTier]
        if scored.empty or "risk" not in scored.columns:
            return {tier: 0.0 for tier in tiers}
        shares = scored["risk"].value_counts(normalize=True)
        return {tier: round(float(shares.get(tier, 0.0)) * 100, 2) for tier in tiers}
