"""
Crop water balance module.

Implements the FAO-56 single crop coefficient approach to turn climate and
crop inputs into a daily irrigation volume:

    ETc = Kc x ET0
    NIR = max(0, ETc - Pe)
    GIR = NIR / efficiency
    demand (L/day) = GIR (mm) x area (m²)

Effective rainfall (Pe) is either the raw rainfall or the USDA-SCS curve.

Reference:
    Allen, R.G., Pereira, L.S., Raes, D., Smith, M. (1998). Crop
    evapotranspiration. FAO Irrigation and Drainage Paper 56.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..core import constants
from ..models.design import CropCoefficients, DesignInput
from ..models.results import WaterBalanceResult
from ..models.settings import EngineSettings, RainfallPolicy
from ..processing.converter import UnitConverter


@dataclass(frozen=True)
class IrrigationDepth:
    """Per-day depths (mm/day) from one water balance step."""

    crop_evapotranspiration: float
    effective_rainfall: float
    net_irrigation_requirement: float
    efficiency: float
    gross_applied_depth: float


class WaterDemandCalculator:
    """Daily irrigation demand from crop, climate and field size."""

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize water demand calculator.

        Args:
            settings: Engine settings (selects the effective rainfall policy)
            logger: Logger instance
        """
        self.settings = settings or EngineSettings()
        self.logger = logger or logging.getLogger(__name__)
        self.converter = UnitConverter(self.logger)

    def compute_water_balance(self, design_input: DesignInput) -> WaterBalanceResult:
        """
        Compute the crop water balance for a design input.

        Args:
            design_input: Normalized design parameters

        Returns:
            WaterBalanceResult with depths in mm/day and demand in L/day
        """
        area_m2 = self.converter.area_to_m2(design_input.area_value, design_input.area_unit)
        seasonal_kc = self.seasonal_kc(design_input.crop_coefficients)

        depth = self.irrigation_depth(
            kc=seasonal_kc,
            et0=design_input.et0,
            rainfall=design_input.rainfall,
            efficiency=design_input.irrigation_efficiency,
            policy=self.settings.rainfall_policy,
        )
        demand = self.converter.depth_to_liters(depth.gross_applied_depth, area_m2)

        self.logger.debug(
            f"Water balance - Area: {area_m2:.0f} m², Kc: {seasonal_kc:.3f}, "
            f"ETc: {depth.crop_evapotranspiration:.2f}, Pe: {depth.effective_rainfall:.2f}, "
            f"NIR: {depth.net_irrigation_requirement:.2f}, GIR: {depth.gross_applied_depth:.3f} mm/day, "
            f"Demand: {demand:.0f} L/day"
        )

        return WaterBalanceResult(
            area_m2=area_m2,
            seasonal_kc=seasonal_kc,
            crop_evapotranspiration=depth.crop_evapotranspiration,
            effective_rainfall=depth.effective_rainfall,
            net_irrigation_requirement=depth.net_irrigation_requirement,
            efficiency=depth.efficiency,
            gross_applied_depth=depth.gross_applied_depth,
            water_demand_l_per_day=demand,
        )

    @staticmethod
    def seasonal_kc(crop_coefficients: CropCoefficients) -> float:
        """
        Duration-weighted seasonal crop coefficient.

        Args:
            crop_coefficients: Scalar Kc or stage coefficients with durations

        Returns:
            Weighted Kc when stage values are present, otherwise the scalar Kc
        """
        stages = crop_coefficients.stages
        days = crop_coefficients.stage_days
        if stages is None or days.total <= 0:
            return crop_coefficients.kc

        weighted = (
            stages.initial * days.initial
            + stages.development * days.development
            + stages.mid * days.mid
            + stages.late * days.late
        )
        return weighted / days.total

    @staticmethod
    def effective_rainfall(rainfall: float, policy: RainfallPolicy = RainfallPolicy.USDA_SCS) -> float:
        """
        Portion of rainfall available to the crop.

        Args:
            rainfall: Rainfall depth (mm)
            policy: SIMPLE credits all rainfall; USDA_SCS applies
                P <= 250: P(125 - 0.2P)/125, P > 250: 125 + 0.1P

        Returns:
            Effective rainfall (mm), never negative
        """
        p = max(0.0, rainfall)
        if policy is RainfallPolicy.SIMPLE:
            return p

        if p <= constants.USDA_SCS_THRESHOLD_MM:
            pe = p * (125.0 - 0.2 * p) / 125.0
        else:
            pe = 125.0 + 0.1 * p
        return max(0.0, pe)

    @staticmethod
    def irrigation_depth(
        kc: float,
        et0: float,
        rainfall: float,
        efficiency: float,
        policy: RainfallPolicy = RainfallPolicy.USDA_SCS
    ) -> IrrigationDepth:
        """
        One water balance step from crop coefficient to gross depth.

        Args:
            kc: Crop coefficient
            et0: Reference evapotranspiration (mm/day)
            rainfall: Rainfall (mm/day)
            efficiency: Application efficiency (fraction, floored at 0.01)
            policy: Effective rainfall policy

        Returns:
            IrrigationDepth with ETc, Pe, NIR and GIR
        """
        etc = max(0.0, kc * max(0.0, et0))
        pe = WaterDemandCalculator.effective_rainfall(rainfall, policy)
        nir = max(0.0, etc - pe)
        applied_efficiency = max(constants.MIN_EFFICIENCY, efficiency)
        return IrrigationDepth(
            crop_evapotranspiration=etc,
            effective_rainfall=pe,
            net_irrigation_requirement=nir,
            efficiency=applied_efficiency,
            gross_applied_depth=nir / applied_efficiency,
        )
