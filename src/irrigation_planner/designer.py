"""
Design engine.

Runs the full calculation chain for one design input:
water balance -> network layout -> hydraulics -> zoning -> pump -> parts list
-> validation, optionally followed by a seasonal simulation.
"""

import logging
from typing import Optional, Sequence

from .algorithms import (
    BOMCostEstimator,
    NetworkSizingEstimator,
    SeasonalSimulator,
    WaterDemandCalculator,
    ZonePartitioner,
)
from .models import (
    DesignInput,
    DesignSummary,
    EngineSettings,
    SeasonResult,
    StageCoefficients,
)
from .processing import HydraulicValidator, UnitConverter


class DesignEngine:
    """
    High-level facade over the calculation components.

    Holds no state besides its settings and components, so one engine can
    serve any number of design inputs.
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize design engine.

        Args:
            settings: Engine settings
            logger: Logger instance
        """
        self.settings = settings or EngineSettings()
        self.logger = logger or logging.getLogger(__name__)

        self.converter = UnitConverter(self.logger)
        self.water_demand = WaterDemandCalculator(self.settings, self.logger)
        self.network = NetworkSizingEstimator(self.logger)
        self.validator = HydraulicValidator(self.settings, self.logger)
        self.zoning = ZonePartitioner(self.logger)
        self.bom = BOMCostEstimator(self.settings, self.logger)
        self.seasonal = SeasonalSimulator(self.settings, self.logger)

    def run(
        self,
        design_input: DesignInput,
        scenario: Optional[str] = None,
        monthly_et0: Optional[Sequence[float]] = None,
        monthly_rainfall: Optional[Sequence[float]] = None
    ) -> DesignSummary:
        """
        Compute a complete design.

        Args:
            design_input: Normalized design parameters
            scenario: Climate preset for a seasonal simulation
            monthly_et0: Twelve monthly ET0 values (takes precedence over scenario)
            monthly_rainfall: Twelve monthly rainfall values

        Returns:
            DesignSummary; an invalid design is reported in its validation
            report, never raised
        """
        water_balance = self.water_demand.compute_water_balance(design_input)
        demand = water_balance.water_demand_l_per_day

        layout = self.network.estimate_layout(
            area_m2=water_balance.area_m2,
            emitter_spacing_x=design_input.emitter_spacing_x,
            emitter_spacing_y=design_input.emitter_spacing_y,
            layout_mode=design_input.layout_mode,
        )

        flow_lps = self.converter.daily_volume_to_flow_lps(demand, design_input.operating_hours_per_day)
        hydraulics = self.validator.compute_head_loss(
            flow_m3s=self.converter.lps_to_m3s(flow_lps),
            length_m=layout.total_pipe_length_m,
            diameter_mm=design_input.main_pipe_diameter_mm,
            lateral_length_m=layout.lateral_length_m,
        )
        max_lateral = self.validator.solve_max_lateral_length(
            water_demand_l_per_day=demand,
            diameter_mm=design_input.main_pipe_diameter_mm,
            user_max_lateral_m=design_input.user_max_lateral_m,
            operating_hours_per_day=design_input.operating_hours_per_day,
        )

        zone_plan = self.zoning.partition_zones(
            water_demand_l_per_day=demand,
            total_pipe_length_m=layout.total_pipe_length_m,
            max_zone_capacity_l_per_day=self.settings.max_zone_capacity_l_per_day,
        )

        pump = self.bom.calculate_pump_power(flow_lps, hydraulics.total_head_m, self.settings.pump_efficiency)
        bill_of_materials = self.bom.build_bom(
            layout=layout,
            hydraulics=hydraulics,
            zone_plan=zone_plan,
            diameter_mm=design_input.main_pipe_diameter_mm,
            pump=pump,
        )

        validation = self.validator.validate(design_input, water_balance, hydraulics, max_lateral)

        season = None
        if monthly_et0 is not None and monthly_rainfall is not None:
            season = self.seasonal.simulate_season(
                monthly_et0=monthly_et0,
                monthly_rainfall=monthly_rainfall,
                stage_kc=self.stage_coefficients(design_input),
                area_m2=water_balance.area_m2,
                efficiency=design_input.irrigation_efficiency,
            )
        elif scenario is not None:
            season = self.simulate_scenario(design_input, scenario)

        self.logger.info(
            f"Design computed - Demand: {demand:,.0f} L/day, "
            f"Pipe: {layout.total_pipe_length_m:.0f} m, "
            f"Head loss: {hydraulics.head_loss_percent:.2f}%, "
            f"Zones: {zone_plan.zone_count}, Cost: {bill_of_materials.total_cost:,.2f} THB, "
            f"Valid: {validation.is_valid}"
        )

        return DesignSummary(
            design_input=design_input,
            water_balance=water_balance,
            layout=layout,
            hydraulics=hydraulics,
            max_lateral_length_m=max_lateral,
            zone_plan=zone_plan,
            pump=pump,
            bill_of_materials=bill_of_materials,
            validation=validation,
            season=season,
        )

    def simulate_scenario(self, design_input: DesignInput, scenario: str) -> SeasonResult:
        """Seasonal simulation of a climate preset for a design input."""
        return self.seasonal.simulate_scenario(
            scenario=scenario,
            stage_kc=self.stage_coefficients(design_input),
            area_m2=self.converter.area_to_m2(design_input.area_value, design_input.area_unit),
            efficiency=design_input.irrigation_efficiency,
        )

    @staticmethod
    def stage_coefficients(design_input: DesignInput) -> StageCoefficients:
        """Stage Kc table; a scalar Kc applies to every stage."""
        coefficients = design_input.crop_coefficients
        if coefficients.stages is not None:
            return coefficients.stages
        kc = coefficients.kc
        return StageCoefficients(initial=kc, development=kc, mid=kc, late=kc)
