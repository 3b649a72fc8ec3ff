from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from career_insights.core.config import settings

_SCORING_CONFIG_CACHE: dict[str, Any] | None = None
_DEFAULT_SCORING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "scoring.yaml"


def scoring_config_path() -> Path:
    if settings.scoring_config_path:
        return Path(settings.scoring_config_path)
    return _DEFAULT_SCORING_CONFIG_PATH


def get_scoring_config() -> dict[str, Any]:
    """Load scoring config from repo-level config/scoring.yaml and cache it."""
    global _SCORING_CONFIG_CACHE

    if _SCORING_CONFIG_CACHE is not None:
        return _SCORING_CONFIG_CACHE

    path = scoring_config_path()
    if not path.exists():
        raise RuntimeError(
            f"Scoring config not found at '{path}'. "
            "Expected file: config/scoring.yaml"
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(
            f"Failed to read scoring config '{path}': {exc}"
        ) from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(
            f"Invalid YAML in scoring config '{path}': {exc}"
        ) from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(
            f"Invalid scoring config '{path}': expected a top-level mapping."
        )

    _SCORING_CONFIG_CACHE = parsed
    return _SCORING_CONFIG_CACHE


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'mock_scorer.score_range'."""
    if not path:
        return default

    current: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def clear_scoring_config_cache() -> None:
    global _SCORING_CONFIG_CACHE
    _SCORING_CONFIG_CACHE = None
