"""
Seasonal simulation module.

Re-runs the daily water balance for each calendar month with that month's
climate and growth-stage Kc, then reduces the twelve months to the peak
figures used to size the system.
"""

import logging
import statistics
from typing import Optional, Sequence, Tuple

from ..core import constants
from ..core.date_utils import DateUtils
from ..models.design import StageCoefficients
from ..models.results import SeasonalRecord, SeasonalSummary, SeasonResult
from ..models.settings import EngineSettings
from .water_balance import WaterDemandCalculator

StageCalendar = Tuple[Tuple[str, int, int], ...]


class SeasonalSimulator:
    """Twelve-month irrigation demand forecast."""

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize seasonal simulator.

        Args:
            settings: Engine settings (rainfall policy, stage calendar, year)
            logger: Logger instance
        """
        self.settings = settings or EngineSettings()
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def stage_for_month(month_index: int, stage_calendar: StageCalendar) -> Optional[str]:
        """
        Growth stage a month falls in.

        Args:
            month_index: Zero-based month
            stage_calendar: (stage, first_month, last_month) inclusive ranges

        Returns:
            Stage name, or None when no range covers the month
        """
        for stage, first, last in stage_calendar:
            if first <= month_index <= last:
                return stage
        return None

    def days_in_month(self, month_index: int) -> int:
        """Days in a month of the configured simulation year."""
        if self.settings.seasonal_year is None:
            return constants.DAYS_IN_MONTH[month_index]
        return DateUtils.days_in_month(self.settings.seasonal_year, month_index)

    def simulate_season(
        self,
        monthly_et0: Sequence[float],
        monthly_rainfall: Sequence[float],
        stage_kc: StageCoefficients,
        area_m2: float,
        stage_calendar: Optional[StageCalendar] = None,
        efficiency: float = constants.DEFAULT_EFFICIENCY
    ) -> SeasonResult:
        """
        Simulate monthly demand over a season.

        Args:
            monthly_et0: Twelve monthly mean ET0 values (mm/day)
            monthly_rainfall: Twelve monthly mean rainfall values (mm/day)
            stage_kc: Crop coefficient per growth stage
            area_m2: Field area (m²)
            stage_calendar: Month ranges per stage; defaults to the configured calendar
            efficiency: Application efficiency (fraction)

        Returns:
            SeasonResult with twelve records and their summary

        Raises:
            ValueError: If either series does not hold twelve values
        """
        if len(monthly_et0) != 12 or len(monthly_rainfall) != 12:
            raise ValueError(
                f"Seasonal simulation needs 12 monthly values, got "
                f"{len(monthly_et0)} ET0 and {len(monthly_rainfall)} rainfall"
            )

        calendar = stage_calendar or self.settings.stage_calendar
        area = max(0.0, area_m2)
        records = []

        for month_index in range(12):
            stage = self.stage_for_month(month_index, calendar)
            if stage is None:
                self.logger.warning(
                    f"No growth stage covers {constants.MONTH_NAMES[month_index]}, using mid-season Kc"
                )
                stage = "mid"
            kc = stage_kc.for_stage(stage)

            et0 = float(monthly_et0[month_index])
            rainfall = float(monthly_rainfall[month_index])
            depth = WaterDemandCalculator.irrigation_depth(
                kc=kc,
                et0=et0,
                rainfall=rainfall,
                efficiency=efficiency,
                policy=self.settings.rainfall_policy,
            )
            daily_demand = depth.gross_applied_depth * area
            monthly_demand = daily_demand * self.days_in_month(month_index)

            records.append(SeasonalRecord(
                month_index=month_index,
                kc=kc,
                et0=et0,
                rainfall=rainfall,
                water_demand_l_per_day=daily_demand,
                water_demand_l_per_month=monthly_demand,
            ))

        summary = self.summarize(records)
        self.logger.info(
            f"Seasonal simulation - Peak month: {constants.MONTH_NAMES[summary.peak_month]} "
            f"({summary.peak_demand:,.0f} L), Total: {summary.total_demand:,.0f} L"
        )
        return SeasonResult(records=tuple(records), summary=summary)

    def simulate_scenario(
        self,
        scenario: str,
        stage_kc: StageCoefficients,
        area_m2: float,
        efficiency: float = constants.DEFAULT_EFFICIENCY
    ) -> SeasonResult:
        """
        Simulate a preset climate year.

        Args:
            scenario: Preset name (normal, dry, wet); unknown names use normal
            stage_kc: Crop coefficient per growth stage
            area_m2: Field area (m²)
            efficiency: Application efficiency (fraction)

        Returns:
            SeasonResult
        """
        preset = constants.SCENARIO_PRESETS.get(scenario)
        if preset is None:
            self.logger.warning(f"Unknown climate scenario {scenario!r}, using normal")
            preset = constants.SCENARIO_PRESETS["normal"]

        return self.simulate_season(
            monthly_et0=preset["et0"],
            monthly_rainfall=preset["rainfall"],
            stage_kc=stage_kc,
            area_m2=area_m2,
            efficiency=efficiency,
        )

    @staticmethod
    def summarize(records: Sequence[SeasonalRecord]) -> SeasonalSummary:
        """
        Reduce monthly records to peaks and averages.

        Ties resolve to the earliest month.

        Args:
            records: Twelve monthly records

        Returns:
            SeasonalSummary
        """
        monthly = [record.water_demand_l_per_month for record in records]
        peak_month = monthly.index(max(monthly))
        rainfall = [record.rainfall for record in records]
        et0 = [record.et0 for record in records]

        return SeasonalSummary(
            peak_month=peak_month,
            peak_demand=monthly[peak_month],
            peak_rainfall_month=rainfall.index(max(rainfall)),
            peak_et0_month=et0.index(max(et0)),
            average_et0=statistics.mean(et0),
            average_rainfall=statistics.mean(rainfall),
            average_demand=statistics.mean(monthly),
            total_demand=sum(monthly),
            design_capacity_l_per_day=records[peak_month].water_demand_l_per_day,
        )
