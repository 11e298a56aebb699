"""Service layer exports."""

from .batch_scoring import RESULT_COLUMNS, BatchScoringService

__all__ = [
    "BatchScoringService",
    "RESULT_COLUMNS",
]
