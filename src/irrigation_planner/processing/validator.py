"""
Hydraulic validation module.

Computes network head loss, solves the longest allowable lateral and judges the
design. Design concerns are reported as ordered notes, never raised.
"""

import logging
import math
from typing import List, Optional, Tuple

from ..algorithms.hazen_williams import HazenWilliamsCalculator
from ..core import constants
from ..models.design import DesignInput
from ..models.results import HydraulicResult, ValidationReport, WaterBalanceResult
from ..models.settings import EngineSettings, ValidationPolicy
from .converter import UnitConverter


def clamp_percent(value: float) -> float:
    """Clamp a percentage to [0, 100]."""
    if math.isnan(value):
        return 0.0
    return max(0.0, min(100.0, value))


class HydraulicValidator:
    """Head loss, lateral length limit and design verdict."""

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize hydraulic validator.

        Args:
            settings: Engine settings (validation policy, operating head, lateral floor)
            logger: Logger instance
        """
        self.settings = settings or EngineSettings()
        self.logger = logger or logging.getLogger(__name__)
        self.converter = UnitConverter(self.logger)

    def compute_head_loss(
        self,
        flow_m3s: float,
        length_m: float,
        diameter_mm: float,
        operating_head_m: Optional[float] = None,
        lateral_length_m: Optional[float] = None
    ) -> HydraulicResult:
        """
        Friction head loss of the network.

        Args:
            flow_m3s: System flow (m³/s)
            length_m: Total pipe length (m)
            diameter_mm: Main pipe diameter (mm)
            operating_head_m: Operating head (m), defaults to the configured 30 m
            lateral_length_m: Lateral share of the length (m)

        Returns:
            HydraulicResult with percentages clamped to [0, 100]
        """
        head = operating_head_m if operating_head_m is not None else self.settings.operating_head_m
        components = HazenWilliamsCalculator.calculate_with_components(
            flow_m3s=flow_m3s,
            length_m=length_m,
            diameter_m=self.converter.mm_to_m(diameter_mm),
            operating_head_m=head,
            lateral_length_m=lateral_length_m,
        )

        head_loss_percent = clamp_percent(components.raw_head_loss_percent)
        lateral_head_loss_percent = clamp_percent(components.raw_lateral_head_loss_percent)

        self.logger.debug(
            f"Head loss - Q: {flow_m3s:.6f} m³/s, L: {length_m:.1f} m, D: {diameter_mm} mm, "
            f"hf: {components.friction_head_loss_m:.4f} m ({head_loss_percent:.2f}%), "
            f"lateral: {lateral_head_loss_percent:.2f}%, v: {components.velocity_ms:.3f} m/s"
        )

        return HydraulicResult(
            friction_head_loss_m=components.friction_head_loss_m,
            head_loss_percent=head_loss_percent,
            lateral_head_loss_percent=lateral_head_loss_percent,
            velocity_ms=components.velocity_ms,
            total_head_m=components.total_head_m,
            is_within_limit=self._within_limit(head_loss_percent, lateral_head_loss_percent),
        )

    def solve_max_lateral_length(
        self,
        water_demand_l_per_day: float,
        diameter_mm: float,
        assumed_lateral_count: Optional[int] = None,
        user_max_lateral_m: float = constants.DEFAULT_MAX_LATERAL_M,
        operating_hours_per_day: float = constants.DEFAULT_OPERATING_HOURS
    ) -> float:
        """
        Longest lateral whose friction loss stays within 5% of operating head.

        The system flow is shared equally by the assumed number of laterals
        running at once.

        Args:
            water_demand_l_per_day: Daily demand (L/day)
            diameter_mm: Pipe diameter (mm)
            assumed_lateral_count: Laterals sharing the flow (default 10)
            user_max_lateral_m: Upper bound set by the designer (m)
            operating_hours_per_day: Pumping window (h)

        Returns:
            Lateral length (m), clamped to [configured floor, user maximum]
        """
        count = assumed_lateral_count or self.settings.assumed_lateral_count
        flow_lps = self.converter.daily_volume_to_flow_lps(water_demand_l_per_day, operating_hours_per_day)
        flow_per_lateral = self.converter.lps_to_m3s(flow_lps / max(1, count))
        allowable = constants.ALLOWABLE_HEAD_LOSS_FRACTION * self.settings.operating_head_m

        max_length = HazenWilliamsCalculator.max_length(
            flow_m3s=flow_per_lateral,
            diameter_m=self.converter.mm_to_m(diameter_mm),
            allowable_head_loss_m=allowable,
        )
        result = min(user_max_lateral_m, max(self.settings.max_lateral_floor_m, max_length))

        self.logger.debug(
            f"Max lateral - q per lateral: {flow_per_lateral:.6f} m³/s, "
            f"unclamped: {max_length:.1f} m, result: {result:.1f} m"
        )
        return result

    def validate(
        self,
        design_input: DesignInput,
        water_balance: WaterBalanceResult,
        hydraulics: HydraulicResult,
        max_lateral_length_m: float
    ) -> ValidationReport:
        """
        Judge a design and collect notes in a fixed order.

        Order: head loss, lateral length shortfall, high demand advisory,
        large area with small main. All triggered notes are kept.

        Args:
            design_input: Design parameters
            water_balance: Water balance result
            hydraulics: Head loss result
            max_lateral_length_m: Solved lateral length (m)

        Returns:
            ValidationReport
        """
        notes: List[str] = []

        head_loss_ok = self._check_head_loss(hydraulics, notes)

        lateral_ok = True
        shortfall_limit = constants.LATERAL_SHORTFALL_RATIO * design_input.user_max_lateral_m
        if max_lateral_length_m < shortfall_limit:
            lateral_ok = False
            notes.append(
                f"Maximum lateral length {max_lateral_length_m:.1f} m is below 80% of the "
                f"{design_input.user_max_lateral_m:.0f} m setting. Use a larger pipe or more zones."
            )

        if water_balance.water_demand_l_per_day > constants.HIGH_DEMAND_L_PER_DAY:
            notes.append(
                f"Water demand {water_balance.water_demand_l_per_day:,.0f} L/day exceeds "
                f"{constants.HIGH_DEMAND_L_PER_DAY:,.0f} L/day. Consider splitting the field "
                f"into irrigation zones."
            )

        main_ok = True
        if (
            water_balance.area_m2 > constants.LARGE_AREA_M2
            and design_input.main_pipe_diameter_mm < constants.MIN_DIAMETER_FOR_LARGE_AREA_MM
        ):
            main_ok = False
            notes.append(
                f"Field area {water_balance.area_m2 / constants.M2_PER_HECTARE:.1f} ha is over 50 ha "
                f"with a Ø{design_input.main_pipe_diameter_mm:.0f} mm main. "
                f"Use a main of at least Ø{constants.MIN_DIAMETER_FOR_LARGE_AREA_MM:.0f} mm."
            )

        is_valid = head_loss_ok and lateral_ok and main_ok
        if is_valid:
            self.logger.info("Design passed hydraulic validation")
        else:
            self.logger.warning(f"Design failed hydraulic validation: {notes}")

        return ValidationReport(is_valid=is_valid, notes=tuple(notes))

    def _within_limit(self, head_loss_percent: float, lateral_head_loss_percent: float) -> bool:
        worst = max(head_loss_percent, lateral_head_loss_percent)
        if self.settings.validation_policy is ValidationPolicy.TIERED:
            return worst <= constants.TIERED_FAILURE_PERCENT
        return worst <= constants.BINARY_HEAD_LOSS_LIMIT_PERCENT

    def _check_head_loss(self, hydraulics: HydraulicResult, notes: List[str]) -> bool:
        """Append head loss notes for the active policy; True when not failed."""
        checks: Tuple[Tuple[str, float, str], ...] = (
            ("Main line", hydraulics.head_loss_percent, "Consider increasing the main pipe diameter."),
            (
                "Lateral",
                hydraulics.lateral_head_loss_percent,
                "Consider dividing the field into more zones to reduce lateral length.",
            ),
        )

        if self.settings.validation_policy is ValidationPolicy.TIERED:
            passed = True
            flagged = False
            for label, percent, advice in checks:
                if percent > constants.TIERED_FAILURE_PERCENT:
                    passed = False
                    flagged = True
                    notes.append(f"{label} head loss {percent:.2f}% exceeds the 15% limit. {advice}")
                elif percent > constants.TIERED_WARNING_PERCENT:
                    flagged = True
                    notes.append(
                        f"{label} head loss {percent:.2f}% is between 10% and 15%. "
                        f"Acceptable, but close to the limit."
                    )
            if not flagged:
                notes.append("Head loss ≤ 10% on the main line and laterals.")
            return passed

        passed = True
        for label, percent, advice in checks:
            if percent > constants.BINARY_HEAD_LOSS_LIMIT_PERCENT:
                passed = False
                notes.append(f"{label} head loss {percent:.2f}% exceeds the 5% limit. {advice}")
        if passed:
            notes.append("Head loss ≤ 5% on the main line and laterals.")
        return passed
