"""Engine tunables stored as system settings."""

import json
import logging
import math
from dataclasses import dataclass
from typing import Protocol

from meal_planner.domain.planning import (
    PlanningSettings,
    ScaleWindow,
    SimilarityWeights,
)

SCALING_LIMITS_KEY = "scaling_limits"
SIMILARITY_WEIGHTS_KEY = "macro_similarity_weights"
SIMILARITY_THRESHOLD_KEY = "min_macro_similarity_threshold"

_logger = logging.getLogger(__name__)


class SettingsRepository(Protocol):
    """Persistence interface for system settings."""

    def get_setting(self, key: str) -> object | None:
        """Return the stored value for a key, if any."""


@dataclass
class PlanningSettingsService:
    """Builds ``PlanningSettings`` from stored overrides and defaults."""

    repository: SettingsRepository

    def load(self) -> PlanningSettings:
        """Return planning settings, using defaults for missing or bad rows."""
        defaults = PlanningSettings()
        return PlanningSettings(
            scale_window=self._scale_window(defaults.scale_window),
            similarity_weights=self._weights(defaults.similarity_weights),
            tie_band=self._tie_band(defaults.tie_band),
        )

    def _scale_window(self, default: ScaleWindow) -> ScaleWindow:
        raw = self._read(SCALING_LIMITS_KEY)
        if not isinstance(raw, dict):
            return default
        min_scale = _positive_number(raw.get("min_scale_factor"))
        max_scale = _positive_number(raw.get("max_scale_factor"))
        return ScaleWindow(
            min_scale=min_scale or default.min_scale,
            max_scale=max_scale or default.max_scale,
        )

    def _weights(self, default: SimilarityWeights) -> SimilarityWeights:
        raw = self._read(SIMILARITY_WEIGHTS_KEY)
        if not isinstance(raw, dict):
            return default
        protein = _number(raw.get("protein"))
        carbs = _number(raw.get("carbs"))
        fat = _number(raw.get("fat"))
        if protein is None or carbs is None or fat is None:
            _logger.warning("Ignoring malformed %s: %s", SIMILARITY_WEIGHTS_KEY, raw)
            return default
        return SimilarityWeights(protein=protein, carbs=carbs, fat=fat)

    def _tie_band(self, default: float) -> float:
        raw = self._read(SIMILARITY_THRESHOLD_KEY)
        if raw is None:
            return default
        value = _number(raw)
        if value is None:
            _logger.warning("Ignoring malformed %s: %s", SIMILARITY_THRESHOLD_KEY, raw)
            return default
        return value

    def _read(self, key: str) -> object | None:
        value = self.repository.get_setting(key)
        if isinstance(value, str):
            return parse_setting_value(value)
        return value


def parse_setting_value(raw: str) -> object:
    """Decode a setting stored as a JSON string, or a bare number."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        try:
            return float(raw)
        except ValueError:
            return raw


def _number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if math.isnan(value):
        return None
    return float(value)


def _positive_number(value: object) -> float | None:
    number = _number(value)
    if number is None or number <= 0:
        return None
    return number
