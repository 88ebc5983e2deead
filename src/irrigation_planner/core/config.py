"""
Configuration module for the irrigation planner.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, Optional, Tuple
from pathlib import Path

from . import constants

_ALLOWED_VALUES = {
    "units.area": ("hectare", "rai"),
    "water_model.rainfall_policy": ("simple", "usda_scs"),
    "validation.policy": ("binary", "tiered"),
    "layout.default_mode": ("heuristic", "optimized"),
    "bom.pump_pricing": ("flat", "scaled"),
    "bom.lateral_quantity": ("layout", "main_ratio"),
}


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'. Only an explicitly named file is
                        required to exist; otherwise built-in defaults apply.
        """
        self.explicit = bool(config_file or os.getenv("CONFIG_FILE"))
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            if self.explicit:
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            return

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _set(self, key: str, value: Any) -> None:
        """Set a dot-notation key, creating sections as needed."""
        section, _, name = key.partition(".")
        self.config.setdefault(section, {})[name] = value

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("IRRIGATION_AREA_UNIT"):
            self._set("units.area", os.getenv("IRRIGATION_AREA_UNIT").lower())

        if os.getenv("IRRIGATION_RAINFALL_POLICY"):
            self._set("water_model.rainfall_policy", os.getenv("IRRIGATION_RAINFALL_POLICY").lower())

        if os.getenv("IRRIGATION_VALIDATION_POLICY"):
            self._set("validation.policy", os.getenv("IRRIGATION_VALIDATION_POLICY").lower())

        if os.getenv("IRRIGATION_TIMEZONE"):
            self._set("processing.timezone", os.getenv("IRRIGATION_TIMEZONE"))

        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate that enumerated settings hold known values."""
        invalid = []
        for key, allowed in _ALLOWED_VALUES.items():
            value = self.get(key)
            if value is not None and value not in allowed:
                invalid.append(f"{key}={value!r} (expected one of: {', '.join(allowed)})")

        if invalid:
            raise ValueError(f"Invalid configuration values: {'; '.join(invalid)}")

        floor = self.get("validation.max_lateral_floor_m")
        if floor is not None and float(floor) not in constants.MAX_LATERAL_FLOORS_M:
            raise ValueError(
                f"validation.max_lateral_floor_m must be one of "
                f"{constants.MAX_LATERAL_FLOORS_M}, got {floor}"
            )

        capacity = self.get("zoning.max_zone_capacity_l_per_day")
        if capacity is not None and float(capacity) <= 0:
            raise ValueError("zoning.max_zone_capacity_l_per_day must be positive")

        calendar = self.get("seasonal.stage_calendar")
        if calendar is not None:
            self._validate_stage_calendar(calendar)

    @staticmethod
    def _validate_stage_calendar(calendar: Any) -> None:
        """Each entry must be [stage, first_month, last_month] with months 0-11."""
        if not isinstance(calendar, list):
            raise ValueError("seasonal.stage_calendar must be a list of [stage, first, last]")

        for entry in calendar:
            if not isinstance(entry, (list, tuple)) or len(entry) != 3:
                raise ValueError(f"Invalid stage calendar entry: {entry!r}")
            stage, first, last = entry
            if stage not in constants.DEFAULT_STAGE_DAYS:
                raise ValueError(
                    f"Unknown growth stage {stage!r} in seasonal.stage_calendar "
                    f"(expected one of: {', '.join(constants.DEFAULT_STAGE_DAYS)})"
                )
            if (
                isinstance(first, bool) or isinstance(last, bool)
                or not isinstance(first, int) or not isinstance(last, int)
                or not 0 <= first <= last <= 11
            ):
                raise ValueError(
                    f"Invalid month range {first!r}-{last!r} for stage {stage!r} "
                    f"(months are 0-11, first <= last)"
                )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'validation.policy')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def area_unit(self) -> str:
        """Get default area unit."""
        return self.get("units.area", "rai")

    @property
    def rainfall_policy(self) -> str:
        """Get effective rainfall policy."""
        return self.get("water_model.rainfall_policy", "usda_scs")

    @property
    def validation_policy(self) -> str:
        """Get hydraulic validation policy."""
        return self.get("validation.policy", "binary")

    @property
    def max_lateral_floor_m(self) -> float:
        """Get lower bound for the solved lateral length."""
        return float(self.get("validation.max_lateral_floor_m", constants.MAX_LATERAL_FLOORS_M[0]))

    @property
    def layout_mode(self) -> str:
        """Get default layout mode."""
        return self.get("layout.default_mode", "heuristic")

    @property
    def max_zone_capacity(self) -> float:
        """Get maximum zone capacity (L/day)."""
        return float(self.get("zoning.max_zone_capacity_l_per_day", constants.MAX_ZONE_CAPACITY_L_PER_DAY))

    @property
    def timezone(self) -> str:
        """Get timezone for generated timestamps."""
        return self.get("processing.timezone", constants.DEFAULT_TIMEZONE)

    @property
    def site_context_seed(self) -> int:
        """Get seed for the site context stub."""
        return int(self.get("site_context.seed", constants.DEFAULT_SITE_CONTEXT_SEED))

    @property
    def stage_calendar(self) -> Tuple[Tuple[str, int, int], ...]:
        """Get month ranges per growth stage for the seasonal simulation."""
        calendar = self.get("seasonal.stage_calendar")
        if calendar is None:
            return constants.DEFAULT_STAGE_CALENDAR
        return tuple((str(stage), int(first), int(last)) for stage, first, last in calendar)

    @property
    def main_pipe_prices(self) -> Dict[int, float]:
        """Get main pipe price per meter by nominal diameter (mm)."""
        prices = self.get("bom.main_pipe_prices")
        if prices is None:
            return dict(constants.MAIN_PIPE_PRICES)
        return {int(diameter): float(price) for diameter, price in prices.items()}

    def engine_settings(self):
        """
        Build the settings object consumed by the calculation engine.

        Returns:
            EngineSettings populated from this configuration
        """
        from ..models.design import AreaUnit, LayoutMode
        from ..models.settings import (
            EngineSettings,
            LateralQuantity,
            PumpPricing,
            RainfallPolicy,
            ValidationPolicy,
        )

        prices = self.get("bom.prices", {})
        seasonal_year = self.get("seasonal.year")

        return EngineSettings(
            area_unit=AreaUnit(self.area_unit),
            rainfall_policy=RainfallPolicy(self.rainfall_policy),
            validation_policy=ValidationPolicy(self.validation_policy),
            default_layout_mode=LayoutMode(self.layout_mode),
            max_lateral_floor_m=self.max_lateral_floor_m,
            operating_head_m=float(self.get("hydraulics.operating_head_m", constants.OPERATING_HEAD_M)),
            assumed_lateral_count=int(self.get("hydraulics.assumed_lateral_count", constants.ASSUMED_LATERAL_COUNT)),
            max_zone_capacity_l_per_day=self.max_zone_capacity,
            pump_efficiency=float(self.get("hydraulics.pump_efficiency", constants.PUMP_EFFICIENCY)),
            pump_pricing=PumpPricing(self.get("bom.pump_pricing", "flat")),
            lateral_quantity=LateralQuantity(self.get("bom.lateral_quantity", "layout")),
            main_pipe_prices=self.main_pipe_prices,
            default_main_pipe_price=float(prices.get("default_main_pipe", constants.DEFAULT_MAIN_PIPE_PRICE)),
            lateral_pipe_price=float(prices.get("lateral_pipe", constants.LATERAL_PIPE_PRICE)),
            lateral_main_ratio=float(self.get("bom.lateral_main_ratio", constants.LATERAL_MAIN_RATIO)),
            fitting_spacing_m=float(self.get("bom.fitting_spacing_m", constants.FITTING_SPACING_M)),
            fitting_price=float(prices.get("fitting", constants.FITTING_PRICE)),
            valve_price=float(prices.get("valve", constants.VALVE_PRICE)),
            emitter_price=float(prices.get("emitter", constants.EMITTER_PRICE)),
            pump_flat_price=float(prices.get("pump_flat", constants.PUMP_FLAT_PRICE)),
            pump_base_price=float(prices.get("pump_base", constants.PUMP_BASE_PRICE)),
            pump_price_per_kw=float(prices.get("pump_per_kw", constants.PUMP_PRICE_PER_KW)),
            filter_price=float(prices.get("filter", constants.FILTER_PRICE)),
            controller_price=float(prices.get("controller", constants.CONTROLLER_PRICE)),
            stage_calendar=self.stage_calendar,
            seasonal_year=int(seasonal_year) if seasonal_year is not None else None,
            timezone=self.timezone,
        )

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, env={self.get('environment')})"
