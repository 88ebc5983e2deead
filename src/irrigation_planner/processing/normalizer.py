"""
Input normalization module.

Turns loosely typed planner parameters (form values, JSON payloads) into a
fully populated DesignInput. Absent or unparseable values fall back to the
documented defaults; out-of-range values are clamped. Nothing here raises for
bad data.
"""

import logging
import math
from typing import Any, Dict, Mapping, Optional, Tuple

from ..core import constants
from ..models.design import (
    AreaUnit,
    CropCoefficients,
    DesignInput,
    LayoutMode,
    StageCoefficients,
    StageDays,
)
from ..models.settings import EngineSettings
from .converter import UnitConverter

# field -> accepted keys, in lookup order
_FIELD_KEYS = {
    "area": ("area", "area_value", "areaRai", "area_rai"),
    "area_unit": ("area_unit", "areaUnit", "unit"),
    "kc": ("kc",),
    "kc_initial": ("kc_initial", "kcInitial"),
    "kc_development": ("kc_development", "kcDevelopment"),
    "kc_mid": ("kc_mid", "kcMid"),
    "kc_late": ("kc_late", "kcLate"),
    "et0": ("et0", "eto"),
    "rainfall": ("rainfall",),
    "efficiency": ("efficiency", "irrigation_efficiency"),
    "main_diameter": ("main_diameter", "mainDiameter", "main_pipe_diameter_mm"),
    "max_lateral": ("max_lateral", "maxLateral", "user_max_lateral_m"),
    "hours_per_day": ("hours_per_day", "hoursPerDay", "operating_hours_per_day"),
    "spacing_x": ("spacing_x", "spacingX", "emitter_spacing_x"),
    "spacing_y": ("spacing_y", "spacingY", "emitter_spacing_y"),
    "layout_mode": ("layout_mode", "layoutMode", "layoutSource"),
    "crop_type": ("crop_type", "cropType"),
    "location": ("location",),
}

_REQUEST_SECTIONS = ("general", "waterModel", "hydraulics", "designOptions")

_STAGE_FIELDS = ("kc_initial", "kc_development", "kc_mid", "kc_late")

_LAYOUT_ALIASES = {
    "heuristic": LayoutMode.HEURISTIC,
    "optimized": LayoutMode.OPTIMIZED,
    "optimised": LayoutMode.OPTIMIZED,
    "ai": LayoutMode.OPTIMIZED,
}


def coerce_float(value: Any) -> Optional[float]:
    """
    Parse a number the way a form field would be read.

    Returns:
        Finite float, or None when the value is absent or not numeric
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


class InputNormalizer:
    """Build a DesignInput from raw planner parameters."""

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize input normalizer.

        Args:
            settings: Engine settings (supplies the default area unit and layout mode)
            logger: Logger instance
        """
        self.settings = settings or EngineSettings()
        self.logger = logger or logging.getLogger(__name__)
        self.converter = UnitConverter(self.logger)

    def normalize(self, raw: Mapping[str, Any]) -> DesignInput:
        """
        Normalize raw parameters into a DesignInput.

        Args:
            raw: Mapping of parameter names to raw values. Keys may use the
                 snake_case field names or the planner's camelCase names.

        Returns:
            Fully populated DesignInput
        """
        values = self._collect(raw)

        area = self._number(values, "area", constants.DEFAULT_AREA)
        if area < 0:
            self.logger.warning(f"Negative area {area} clamped to 0")
            area = 0.0

        efficiency = self._number(values, "efficiency", constants.DEFAULT_EFFICIENCY)
        if efficiency > 1:
            # Percent entry (e.g. 80)
            efficiency = efficiency / 100.0
        efficiency = min(1.0, max(constants.MIN_EFFICIENCY, efficiency))

        hours = self._number(values, "hours_per_day", constants.DEFAULT_OPERATING_HOURS)
        clamped_hours = min(24.0, max(1.0, hours))
        if clamped_hours != hours:
            self.logger.warning(f"Operating hours {hours} clamped to {clamped_hours}")

        design_input = DesignInput(
            area_value=area,
            area_unit=self._area_unit(values.get("area_unit")),
            crop_coefficients=self._crop_coefficients(values, raw.get("stage_days")),
            et0=max(0.0, self._number(values, "et0", constants.DEFAULT_ET0)),
            rainfall=max(0.0, self._number(values, "rainfall", constants.DEFAULT_RAINFALL)),
            irrigation_efficiency=efficiency,
            main_pipe_diameter_mm=self._positive(values, "main_diameter", constants.DEFAULT_MAIN_DIAMETER_MM),
            user_max_lateral_m=self._positive(values, "max_lateral", constants.DEFAULT_MAX_LATERAL_M),
            operating_hours_per_day=clamped_hours,
            emitter_spacing_x=self._positive(values, "spacing_x", constants.DEFAULT_EMITTER_SPACING_M),
            emitter_spacing_y=self._positive(values, "spacing_y", constants.DEFAULT_EMITTER_SPACING_M),
            layout_mode=self._layout_mode(values.get("layout_mode")),
            crop_type=str(values.get("crop_type") or constants.DEFAULT_CROP_TYPE),
            location=str(values.get("location") or ""),
        )

        self.logger.debug(f"Normalized design input: {design_input}")
        return design_input

    def _collect(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Pick the first present alias for every known field.

        Sections of a saved design request (general, waterModel, hydraulics,
        designOptions) fill fields the flat keys leave unset.
        """
        values = self._pick(raw)
        for section in _REQUEST_SECTIONS:
            nested = raw.get(section)
            if not isinstance(nested, Mapping):
                continue
            for field_name, value in self._pick(nested).items():
                values.setdefault(field_name, value)
            stages = nested.get("kcStages")
            if isinstance(stages, Mapping):
                for stage in constants.DEFAULT_STAGE_DAYS:
                    if stage in stages:
                        values.setdefault(f"kc_{stage}", stages[stage])
        return values

    @staticmethod
    def _pick(raw: Mapping[str, Any]) -> Dict[str, Any]:
        values = {}
        for field_name, keys in _FIELD_KEYS.items():
            for key in keys:
                if key in raw:
                    values[field_name] = raw[key]
                    break
        return values

    def _number(self, values: Dict[str, Any], field_name: str, default: float) -> float:
        """Numeric field or its default when absent/unparseable."""
        raw_value = values.get(field_name)
        number = coerce_float(raw_value)
        if number is None:
            if raw_value is not None:
                self.logger.warning(
                    f"Invalid value for {field_name}: {raw_value!r}, using default {default}"
                )
            return default
        return number

    def _positive(self, values: Dict[str, Any], field_name: str, default: float) -> float:
        """Strictly positive numeric field or its default."""
        number = self._number(values, field_name, default)
        if number <= 0:
            self.logger.warning(
                f"Non-positive value for {field_name}: {number}, using default {default}"
            )
            return default
        return number

    def _area_unit(self, raw_unit: Any) -> AreaUnit:
        if raw_unit is None:
            return self.settings.area_unit
        try:
            return self.converter.parse_area_unit(raw_unit)
        except ValueError:
            self.logger.warning(
                f"Unknown area unit {raw_unit!r}, using {self.settings.area_unit.value}"
            )
            return self.settings.area_unit

    def _layout_mode(self, raw_mode: Any) -> LayoutMode:
        if raw_mode is None:
            return self.settings.default_layout_mode
        mode = _LAYOUT_ALIASES.get(str(raw_mode).strip().lower())
        if mode is None:
            self.logger.warning(
                f"Unknown layout mode {raw_mode!r}, using {self.settings.default_layout_mode.value}"
            )
            return self.settings.default_layout_mode
        return mode

    def _crop_coefficients(
        self,
        values: Dict[str, Any],
        raw_stage_days: Any
    ) -> CropCoefficients:
        kc = self._number(values, "kc", constants.DEFAULT_KC)
        stage_days = self._stage_days(raw_stage_days)

        if not any(name in values for name in _STAGE_FIELDS):
            return CropCoefficients(kc=kc, stage_days=stage_days)

        stages = StageCoefficients(
            initial=max(0.0, self._number(values, "kc_initial", constants.DEFAULT_KC_INITIAL)),
            development=max(0.0, self._number(values, "kc_development", constants.DEFAULT_KC_DEVELOPMENT)),
            mid=max(0.0, self._number(values, "kc_mid", constants.DEFAULT_KC_MID)),
            late=max(0.0, self._number(values, "kc_late", constants.DEFAULT_KC_LATE)),
        )
        return CropCoefficients(kc=kc, stages=stages, stage_days=stage_days)

    def _stage_days(self, raw_stage_days: Any) -> StageDays:
        if not isinstance(raw_stage_days, Mapping):
            return StageDays()

        days: Dict[str, int] = {}
        for stage, default in constants.DEFAULT_STAGE_DAYS.items():
            number = coerce_float(raw_stage_days.get(stage))
            days[stage] = int(number) if number is not None and number >= 0 else default

        if sum(days.values()) <= 0:
            self.logger.warning("Stage durations sum to zero, using default calendar")
            return StageDays()
        return StageDays(**days)

    @staticmethod
    def monthly_series(raw: Any, fallback: Tuple[float, ...]) -> Tuple[float, ...]:
        """
        Normalize a 12-month series, substituting fallback values per month.

        Args:
            raw: Sequence of monthly values (may be shorter, longer or None)
            fallback: Twelve fallback values

        Returns:
            Tuple of twelve non-negative floats
        """
        raw_values = list(raw) if isinstance(raw, (list, tuple)) else []
        series = []
        for idx in range(12):
            number = coerce_float(raw_values[idx]) if idx < len(raw_values) else None
            series.append(max(0.0, number) if number is not None else fallback[idx])
        return tuple(series)
