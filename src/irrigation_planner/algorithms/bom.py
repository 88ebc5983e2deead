"""
Bill of materials module.

Prices a fixed list of network parts from the layout, hydraulic, zoning and
pump results. Every quantity is a pure function of those results.
"""

import logging
import math
from typing import List, Optional

from ..core import constants
from ..models.results import (
    BillOfMaterials,
    BOMItem,
    HydraulicResult,
    NetworkLayout,
    PumpSizing,
    ZonePlan,
)
from ..models.settings import EngineSettings, LateralQuantity, PumpPricing


class BOMCostEstimator:
    """Costed parts list for an irrigation network."""

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize BOM cost estimator.

        Args:
            settings: Engine settings (price tables and quantity policies)
            logger: Logger instance
        """
        self.settings = settings or EngineSettings()
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def calculate_pump_power(
        flow_lps: float,
        total_head_m: float,
        pump_efficiency: float = constants.PUMP_EFFICIENCY
    ) -> PumpSizing:
        """
        Hydraulic pump power.

        hp = Q (L/s) x H (m) / (efficiency x 75), kW = hp x 0.746

        Args:
            flow_lps: Flow rate (L/s)
            total_head_m: Total dynamic head (m)
            pump_efficiency: Pump efficiency (fraction)

        Returns:
            PumpSizing
        """
        efficiency = pump_efficiency if pump_efficiency > 0 else constants.PUMP_EFFICIENCY
        hp = max(0.0, flow_lps) * max(0.0, total_head_m) / (efficiency * constants.HP_DENOMINATOR)
        return PumpSizing(
            flow_lps=flow_lps,
            total_head_m=total_head_m,
            power_hp=hp,
            power_kw=hp * constants.HP_TO_KW,
        )

    def main_pipe_price(self, diameter_mm: float) -> float:
        """
        Price per meter of main pipe.

        Args:
            diameter_mm: Nominal diameter (mm)

        Returns:
            Table price for a known diameter, otherwise the default price
        """
        if float(diameter_mm).is_integer():
            price = self.settings.main_pipe_prices.get(int(diameter_mm))
            if price is not None:
                return price
        self.logger.debug(f"No price for Ø{diameter_mm} mm main, using default")
        return self.settings.default_main_pipe_price

    def build_bom(
        self,
        layout: NetworkLayout,
        hydraulics: HydraulicResult,
        zone_plan: ZonePlan,
        diameter_mm: float,
        pump: PumpSizing
    ) -> BillOfMaterials:
        """
        Build the priced parts list.

        Args:
            layout: Network layout
            hydraulics: Head loss result
            zone_plan: Zone plan (one valve per zone)
            diameter_mm: Main pipe diameter (mm)
            pump: Pump sizing

        Returns:
            BillOfMaterials, items in display order
        """
        settings = self.settings
        main_quantity = math.ceil(layout.main_length_m)

        if settings.lateral_quantity is LateralQuantity.MAIN_RATIO:
            lateral_quantity = math.ceil(main_quantity * settings.lateral_main_ratio)
        else:
            lateral_quantity = math.ceil(layout.lateral_length_m)

        fitting_spacing = settings.fitting_spacing_m if settings.fitting_spacing_m > 0 else constants.FITTING_SPACING_M
        fitting_quantity = math.ceil(layout.total_pipe_length_m / fitting_spacing)

        if settings.pump_pricing is PumpPricing.SCALED:
            pump_price = settings.pump_base_price + settings.pump_price_per_kw * pump.power_kw
        else:
            pump_price = settings.pump_flat_price

        items: List[BOMItem] = [
            BOMItem(f"Main pipe Ø{diameter_mm:g} mm", main_quantity, "m", self.main_pipe_price(diameter_mm)),
            BOMItem("Lateral pipe Ø32 mm", lateral_quantity, "m", settings.lateral_pipe_price),
            BOMItem("Pipe fittings", fitting_quantity, "pcs", settings.fitting_price),
            BOMItem("Control valves", zone_plan.zone_count, "pcs", settings.valve_price),
            BOMItem("Sprinkler heads", layout.emitter_count, "pcs", settings.emitter_price),
            BOMItem(
                f"Pump (approx {pump.power_hp:.2f} hp @ {hydraulics.total_head_m:.1f} m)",
                1,
                "set",
                round(pump_price, 2),
            ),
            BOMItem("Filter set", 1, "set", settings.filter_price),
            BOMItem("Irrigation controller", 1, "set", settings.controller_price),
        ]

        bom = BillOfMaterials(items=tuple(items))
        self.logger.debug(f"BOM - {len(bom.items)} items, total: {bom.total_cost:,.2f} THB")
        return bom
