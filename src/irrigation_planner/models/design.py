"""
Design input models.

Contains the immutable input snapshot every engine calculation derives from.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..core import constants


class AreaUnit(str, Enum):
    """Unit the field area is expressed in."""

    HECTARE = "hectare"
    RAI = "rai"


class LayoutMode(str, Enum):
    """Pipe routing assumption used by the network estimate."""

    HEURISTIC = "heuristic"
    OPTIMIZED = "optimized"


@dataclass(frozen=True)
class StageDays:
    """Growth stage durations (days)."""

    initial: int = constants.DEFAULT_STAGE_DAYS["initial"]
    development: int = constants.DEFAULT_STAGE_DAYS["development"]
    mid: int = constants.DEFAULT_STAGE_DAYS["mid"]
    late: int = constants.DEFAULT_STAGE_DAYS["late"]

    @property
    def total(self) -> int:
        return self.initial + self.development + self.mid + self.late


@dataclass(frozen=True)
class StageCoefficients:
    """Crop coefficient per FAO-56 growth stage."""

    initial: float = constants.DEFAULT_KC_INITIAL
    development: float = constants.DEFAULT_KC_DEVELOPMENT
    mid: float = constants.DEFAULT_KC_MID
    late: float = constants.DEFAULT_KC_LATE

    def for_stage(self, stage: str) -> float:
        """
        Look up the coefficient for a stage name.

        Raises:
            ValueError: If the stage name is unknown
        """
        if stage not in ("initial", "development", "mid", "late"):
            raise ValueError(f"Unknown growth stage: {stage}")
        return getattr(self, stage)


@dataclass(frozen=True)
class CropCoefficients:
    """
    Crop coefficient model.

    Either a single scalar Kc, or four stage values weighted by stage duration.
    When ``stages`` is set it takes precedence over ``kc``.
    """

    kc: float = constants.DEFAULT_KC
    stages: Optional[StageCoefficients] = None
    stage_days: StageDays = field(default_factory=StageDays)


@dataclass(frozen=True)
class DesignInput:
    """Fully populated design parameters for one field."""

    area_value: float = constants.DEFAULT_AREA
    area_unit: AreaUnit = AreaUnit.RAI
    crop_coefficients: CropCoefficients = field(default_factory=CropCoefficients)
    et0: float = constants.DEFAULT_ET0  # mm/day
    rainfall: float = constants.DEFAULT_RAINFALL  # mm/day
    irrigation_efficiency: float = constants.DEFAULT_EFFICIENCY  # fraction
    main_pipe_diameter_mm: float = constants.DEFAULT_MAIN_DIAMETER_MM
    user_max_lateral_m: float = constants.DEFAULT_MAX_LATERAL_M
    operating_hours_per_day: float = constants.DEFAULT_OPERATING_HOURS
    emitter_spacing_x: float = constants.DEFAULT_EMITTER_SPACING_M  # m, along laterals
    emitter_spacing_y: float = constants.DEFAULT_EMITTER_SPACING_M  # m, between laterals
    layout_mode: LayoutMode = LayoutMode.HEURISTIC
    crop_type: str = constants.DEFAULT_CROP_TYPE
    location: str = ""
