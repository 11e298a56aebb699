"""YAML-backed settings for the scoring service and scripts."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..common.scoring_constants import RANDOM_VARIANCE
from ..models.enums import ScoringVariant
from .logging_config import get_logger


logger = get_logger(__name__)
_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yml"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppSettings:
    """Server and scoring settings read from `config.yml`."""

    app_name: str
    debug: bool
    host: str
    port: int
    default_variant: str
    random_seed: Optional[int]
    random_variance: float


def _parse_flag(raw: Any) -> bool:
    """YAML booleans pass through; strings are matched against common truthy words."""
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in _TRUTHY


def _parse_number(raw: Any, cast: type, fallback: Any, key: str) -> Any:
    """Cast a setting, using `fallback` for blanks and logging unparseable values."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return fallback
    try:
        return cast(raw)
    except (TypeError, ValueError):
        logger.warning("Setting %s=%r is not a valid %s. Using %s", key, raw, cast.__name__, fallback)
        return fallback


def _parse_variant(raw: Any) -> str:
    """Map a configured variant name onto a `ScoringVariant` value."""
    try:
        return ScoringVariant(str(raw).strip().lower()).value
    except ValueError:
        logger.warning("Unknown scoring variant %r in settings. Using %s", raw, ScoringVariant.SIMPLE.value)
        return ScoringVariant.SIMPLE.value


def _parse_variance(raw: Any) -> float:
    """Half-width of the ensemble draw; negative values are replaced by the default."""
    variance = _parse_number(raw, float, RANDOM_VARIANCE, "scoring.random_variance")
    if variance < 0:
        logger.warning("Negative scoring.random_variance=%s. Using %s", variance, RANDOM_VARIANCE)
        return RANDOM_VARIANCE
    return variance


def _load_yaml(config_path: Path) -> Mapping[str, Any]:
    """Parse the settings file; a missing or unreadable file yields no overrides."""
    if not config_path.exists():
        logger.warning("Settings file %s not found. Using built-in defaults.", config_path)
        return {}
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError):
        logger.exception("Could not read settings file %s", config_path)
        return {}
    logger.info("Settings loaded from %s", config_path)
    return data


def load_settings(path: Optional[str] = None) -> AppSettings:
    """Build `AppSettings` from `config.yml` or an alternative file.

    Args:
        path: Optional YAML file to read instead of the bundled one.

    Returns:
        AppSettings: Settings with defaults applied for missing or bad values.
    """
    data = _load_yaml(Path(path) if path else _CONFIG_PATH)
    app_section = data.get("app") or {}
    scoring_section = data.get("scoring") or {}

    return AppSettings(
        app_name=str(app_section.get("name", "AltCredit Scoring API")),
        debug=_parse_flag(app_section.get("debug", False)),
        host=str(app_section.get("host", "127.0.0.1")),
        port=_parse_number(app_section.get("port"), int, 8000, "app.port"),
        default_variant=_parse_variant(scoring_section.get("default_variant", ScoringVariant.SIMPLE.value)),
        random_seed=_parse_number(scoring_section.get("random_seed"), int, None, "scoring.random_seed"),
        random_variance=_parse_variance(scoring_section.get("random_variance")),
    )
