"""Custom exceptions for the scoring layer."""

from typing import Any, Optional


class ScoringError(Exception):
    """Base class for scoring failures."""


class InvalidInputError(ScoringError):
    """Raised when an input field is negative or not finite."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class ScoringConfigError(ScoringError):
    """Raised when scoring configuration is inconsistent."""
