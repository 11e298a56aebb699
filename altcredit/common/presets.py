"""Canned applicant profiles for the "try a preset profile" flow."""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from ..models.credit_inputs import CreditInputs


logger = logging.getLogger(__name__)

_PRESETS: Dict[str, Dict[str, float]] = {
    "good": {
        "monthlyTransactions": 35,
        "averageTopup": 25,
        "billsPaid": 4,
        "dataUsage": 3500,
        "phoneUsageDays": 28,
    },
    "risky": {
        "monthlyTransactions": 15,
        "averageTopup": 10,
        "billsPaid": 1,
        "dataUsage": 800,
        "phoneUsageDays": 15,
    },
    "excellent": {
        "monthlyTransactions": 48,
        "averageTopup": 90,
        "billsPaid": 9,
        "dataUsage": 4800,
        "phoneUsageDays": 30,
    },
}


def preset_names() -> List[str]:
    """Return preset names in declaration order."""
    return list(_PRESETS)


def get_preset(name: str) -> CreditInputs:
    """Return the inputs for a named preset.

    Raises:
        KeyError: If the preset is unknown.
    """
    key = str(name or "").strip().lower()
    if key not in _PRESETS:
        logger.warning("Unknown preset requested name=%s", name)
        raise KeyError("Unknown preset '{0}'. Known presets: {1}".format(name, ", ".join(_PRESETS)))
    return CreditInputs.from_form(_PRESETS[key])


def list_presets() -> List[Tuple[str, CreditInputs]]:
    """Return `(name, inputs)` pairs in declaration order."""
    return [(name, get_preset(name)) for name in _PRESETS]
