"""
Engine settings.

Policy switches and price tables that change calculated numbers. Built once
from configuration and passed explicitly into every calculator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from ..core import constants
from .design import AreaUnit, LayoutMode


class RainfallPolicy(str, Enum):
    """How rainfall is credited against crop demand."""

    SIMPLE = "simple"
    USDA_SCS = "usda_scs"


class ValidationPolicy(str, Enum):
    """How head loss is judged."""

    BINARY = "binary"
    TIERED = "tiered"


class PumpPricing(str, Enum):
    """How the pump line of the parts list is priced."""

    FLAT = "flat"
    SCALED = "scaled"


class LateralQuantity(str, Enum):
    """Where the lateral pipe quantity comes from."""

    LAYOUT = "layout"
    MAIN_RATIO = "main_ratio"


def _default_main_pipe_prices() -> Dict[int, float]:
    return dict(constants.MAIN_PIPE_PRICES)


@dataclass(frozen=True)
class EngineSettings:
    """Configuration consumed by the calculation engine."""

    area_unit: AreaUnit = AreaUnit.RAI
    rainfall_policy: RainfallPolicy = RainfallPolicy.USDA_SCS
    validation_policy: ValidationPolicy = ValidationPolicy.BINARY
    default_layout_mode: LayoutMode = LayoutMode.HEURISTIC
    max_lateral_floor_m: float = constants.MAX_LATERAL_FLOORS_M[0]
    operating_head_m: float = constants.OPERATING_HEAD_M
    assumed_lateral_count: int = constants.ASSUMED_LATERAL_COUNT
    max_zone_capacity_l_per_day: float = constants.MAX_ZONE_CAPACITY_L_PER_DAY
    pump_efficiency: float = constants.PUMP_EFFICIENCY

    # Bill of materials
    pump_pricing: PumpPricing = PumpPricing.FLAT
    lateral_quantity: LateralQuantity = LateralQuantity.LAYOUT
    main_pipe_prices: Dict[int, float] = field(default_factory=_default_main_pipe_prices)
    default_main_pipe_price: float = constants.DEFAULT_MAIN_PIPE_PRICE
    lateral_pipe_price: float = constants.LATERAL_PIPE_PRICE
    lateral_main_ratio: float = constants.LATERAL_MAIN_RATIO
    fitting_spacing_m: float = constants.FITTING_SPACING_M
    fitting_price: float = constants.FITTING_PRICE
    valve_price: float = constants.VALVE_PRICE
    emitter_price: float = constants.EMITTER_PRICE
    pump_flat_price: float = constants.PUMP_FLAT_PRICE
    pump_base_price: float = constants.PUMP_BASE_PRICE
    pump_price_per_kw: float = constants.PUMP_PRICE_PER_KW
    filter_price: float = constants.FILTER_PRICE
    controller_price: float = constants.CONTROLLER_PRICE

    # Seasonal simulation
    stage_calendar: Tuple[Tuple[str, int, int], ...] = constants.DEFAULT_STAGE_CALENDAR
    seasonal_year: Optional[int] = None  # None uses a non-leap year

    timezone: str = constants.DEFAULT_TIMEZONE
