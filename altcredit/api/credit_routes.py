"""Credit scoring API routes.

Acts as the input-collection layer in front of the engine: request bodies are
loose form mappings, and missing or non-numeric entries are coerced to 0 before
scoring. Negative or non-finite values come back as HTTP 422.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, Query, status
from pydantic import BaseModel

from ..common.presets import get_preset, list_presets
from ..models.credit_inputs import CreditInputs
from ..models.enums import ScoringVariant
from ..models.exceptions import InvalidInputError
from ..models.score_result import ScoreResult
from ..scoring.engine import ScoringEngine

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PresetPayload(BaseModel):
    name: str
    inputs: Dict[str, float]


class ScoreResponse(BaseModel):
    inputs: Dict[str, float]
    result: Dict[str, Any]
    progress_percent: float


def _score_response(inputs: CreditInputs, result: ScoreResult) -> ScoreResponse:
    """Serialize one scoring call for the presentation layer."""
    return ScoreResponse(
        inputs=inputs.to_dict(by_alias=True),
        result=result.to_dict(),
        progress_percent=round(result.progress_percent, 2),
    )


def build_credit_router(
    engine: Optional[ScoringEngine] = None,
    default_variant: ScoringVariant = ScoringVariant.SIMPLE,
) -> APIRouter:
    router = APIRouter(prefix="/api/credit", tags=["credit"])
    scoring_engine = engine or ScoringEngine()

    def _compute(inputs: CreditInputs, variant: Optional[ScoringVariant]) -> ScoreResponse:
        try:
            result = scoring_engine.compute(inputs, variant=variant or default_variant)
        except InvalidInputError as exc:
            raise HTTPException(
                status_code=422,
                detail={"message": str(exc), "field": exc.field},
            )
        return _score_response(inputs, result)

    @router.post(
        "/score",
        summary="Score one applicant from alternative-data inputs",
        response_model=ScoreResponse,
    )
    def score_applicant(
        payload: Dict[str, Any] = Body(...),
        variant: Optional[ScoringVariant] = Query(default=None),
    ) -> ScoreResponse:
        inputs = CreditInputs.from_form(payload)
        return _compute(inputs, variant)

    @router.get("/presets", summary="List canned applicant profiles", response_model=List[PresetPayload])
    def presets() -> List[PresetPayload]:
        return [
            PresetPayload(name=name, inputs=inputs.to_dict(by_alias=True))
            for name, inputs in list_presets()
        ]

    @router.post(
        "/presets/{name}/score",
        summary="Score a canned applicant profile",
        response_model=ScoreResponse,
    )
    def score_preset(
        name: str,
        variant: Optional[ScoringVariant] = Query(default=None),
    ) -> ScoreResponse:
        try:
            inputs = get_preset(name)
        except KeyError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc.args[0]))
        return _compute(inputs, variant)

    @router.get("/config", summary="Read-only view of weights, caps and baselines")
    def scoring_config() -> Dict[str, Any]:
        return scoring_engine.config.summary()

    return router
