"""Tier policy: score bands, loan terms and recommendation text."""

import logging
from typing import Optional, Sequence, Tuple

from ..models.scoring_config import TierBand


logger = logging.getLogger(__name__)


def select_band(score: int, bands: Sequence[TierBand]) -> TierBand:
    """Return the first band whose floor the score reaches."""
    for band in bands:
        if score >= band.min_score:
            return band
    # Config validation guarantees a catch-all band at the score floor.
    return bands[-1]


def derive_loan_terms(band: TierBand, total_spending: float) -> Tuple[Optional[float], Optional[float]]:
    """Compute `(loan_amount, interest_rate)` for a band, or `(None, None)` without an offer."""
    if not band.offers_loan:
        return None, None
    amount = max(band.minimum_loan, total_spending * band.loan_multiplier)
    return round(amount, 2), band.interest_rate


def render_recommendation(
    band: TierBand,
    loan_amount: Optional[float] = None,
    interest_rate: Optional[float] = None,
) -> str:
    """Fill the band's recommendation template."""
    if loan_amount is None or interest_rate is None:
        return band.recommendation
    try:
        return band.recommendation.format(loan_amount=loan_amount, interest_rate=interest_rate)
    except (KeyError, IndexError, ValueError):
        logger.exception("Malformed recommendation template risk=%s", band.risk)
        raise
