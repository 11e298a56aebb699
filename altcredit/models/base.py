"""Shared base model for immutable scoring records."""

import logging
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

from .exceptions import ScoringError


logger = logging.getLogger(__name__)


class FrozenScoringModel(BaseModel):
    """Base schema for records that must not change after construction."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        use_enum_values=False,
        extra="ignore",
    )

    def to_dict(self, by_alias: bool = False) -> Dict[str, Any]:
        """Serialize model into a JSON-ready dictionary.

        Args:
            by_alias: Emit camelCase aliases instead of attribute names.

        Returns:
            Dict[str, Any]: Serialized model payload.

        Raises:
            ScoringError: If serialization fails.
        """
        try:
            return self.model_dump(mode="json", by_alias=by_alias)
        except Exception as exc:
            logger.exception("Failed to serialize %s", self.__class__.__name__)
            raise ScoringError(str(exc))
