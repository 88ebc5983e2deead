"""
Calculation result models.

Contains DTOs produced by each engine stage and the aggregated design summary.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .design import DesignInput


@dataclass(frozen=True)
class WaterBalanceResult:
    """Crop water balance for one design input."""

    area_m2: float
    seasonal_kc: float
    crop_evapotranspiration: float  # ETc, mm/day
    effective_rainfall: float  # Pe, mm/day
    net_irrigation_requirement: float  # NIR, mm/day
    efficiency: float  # fraction actually applied
    gross_applied_depth: float  # GIR, mm/day
    water_demand_l_per_day: float


@dataclass(frozen=True)
class NetworkLayout:
    """Approximate grid layout of main line and laterals."""

    field_side_m: float
    lateral_count: int
    main_length_m: float
    lateral_length_m: float
    total_pipe_length_m: float
    emitter_count: int


@dataclass(frozen=True)
class HydraulicResult:
    """Hazen-Williams friction loss for the network."""

    friction_head_loss_m: float
    head_loss_percent: float
    lateral_head_loss_percent: float
    velocity_ms: float
    total_head_m: float
    is_within_limit: bool


@dataclass(frozen=True)
class ZoneDetail:
    """Pipe length assigned to a single zone."""

    zone_id: str
    length_m: int


@dataclass(frozen=True)
class ZonePlan:
    """Capacity-bounded split of the network into zones."""

    zone_count: int
    length_per_zone_m: int
    zones: Tuple[ZoneDetail, ...] = ()


@dataclass(frozen=True)
class BOMItem:
    """Single priced line of the parts list."""

    name: str
    quantity: float
    unit: str
    unit_price: float
    total_price: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "total_price", round(self.quantity * self.unit_price, 2))


@dataclass(frozen=True)
class BillOfMaterials:
    """Ordered parts list with its total cost."""

    items: Tuple[BOMItem, ...]
    total_cost: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(
            self,
            "total_cost",
            round(math.fsum(item.total_price for item in self.items), 2)
        )


@dataclass(frozen=True)
class ValidationReport:
    """Design verdict with display notes in the order they were raised."""

    is_valid: bool
    notes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PumpSizing:
    """Pump duty point and power."""

    flow_lps: float
    total_head_m: float
    power_hp: float
    power_kw: float


@dataclass(frozen=True)
class SeasonalRecord:
    """Water demand for one calendar month."""

    month_index: int
    kc: float
    et0: float
    rainfall: float
    water_demand_l_per_day: float
    water_demand_l_per_month: float


@dataclass(frozen=True)
class SeasonalSummary:
    """Reduction of twelve monthly records."""

    peak_month: int
    peak_demand: float  # L/month
    peak_rainfall_month: int
    peak_et0_month: int
    average_et0: float
    average_rainfall: float
    average_demand: float  # L/month
    total_demand: float  # L/season
    design_capacity_l_per_day: float


@dataclass(frozen=True)
class SeasonResult:
    """Monthly records and their summary."""

    records: Tuple[SeasonalRecord, ...]
    summary: SeasonalSummary


@dataclass(frozen=True)
class DesignSummary:
    """Complete engine output for one design input."""

    design_input: DesignInput
    water_balance: WaterBalanceResult
    layout: NetworkLayout
    hydraulics: HydraulicResult
    max_lateral_length_m: float
    zone_plan: ZonePlan
    pump: PumpSizing
    bill_of_materials: BillOfMaterials
    validation: ValidationReport
    season: Optional[SeasonResult] = None
