"""Applicant input record built from alternative-data form fields."""

import logging
from typing import Any, Dict, Mapping

from pydantic import Field, field_validator

from ..common.scoring_constants import FEATURE_FIELDS, FEATURE_KEYS
from .base import FrozenScoringModel


logger = logging.getLogger(__name__)


def coerce_numeric(value: Any) -> float:
    """Coerce one form entry into a float the way the input form does.

    Missing, blank and unparseable entries become 0.0. Anything that parses is
    returned as-is, including negative, NaN and infinite values, which the
    engine rejects later.
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        value = text
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug("Non-numeric input value=%r coerced to 0", value)
        return 0.0


class CreditInputs(FrozenScoringModel):
    """Five behavioural signals for one applicant, all per month."""

    monthly_transactions: float = Field(default=0.0, alias="monthlyTransactions")
    average_topup: float = Field(default=0.0, alias="averageTopup")
    bills_paid: float = Field(default=0.0, alias="billsPaid")
    data_usage: float = Field(default=0.0, alias="dataUsage")
    phone_usage_days: float = Field(default=0.0, alias="phoneUsageDays")

    @field_validator(
        "monthly_transactions",
        "average_topup",
        "bills_paid",
        "data_usage",
        "phone_usage_days",
        mode="before",
    )
    @classmethod
    def _coerce_form_value(cls, value: Any) -> float:
        """Apply form coercion before pydantic type checks."""
        return coerce_numeric(value)

    @classmethod
    def from_form(cls, payload: Mapping[str, Any]) -> "CreditInputs":
        """Build inputs from a loose form mapping using either naming style."""
        return cls.model_validate(dict(payload or {}))

    def feature_value(self, feature: str) -> float:
        """Return the raw value behind a feature key such as `topup`."""
        return getattr(self, FEATURE_FIELDS[feature])

    def feature_values(self) -> Dict[str, float]:
        """Return raw values keyed by feature key, in declaration order."""
        return {feature: self.feature_value(feature) for feature in FEATURE_KEYS}
