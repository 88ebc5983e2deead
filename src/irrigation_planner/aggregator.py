"""
Design aggregator.

Packs engine inputs and outputs into the request, response and project
records exchanged with the hosting application. No new calculation happens
here beyond rounding for display and the rule-based recommendation list.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .core import constants
from .core.date_utils import DateUtils
from .models import (
    AreaUnit,
    DesignInput,
    DesignRequest,
    DesignResponse,
    DesignSummary,
    LayoutMode,
    ProjectRecord,
    SeasonResult,
    SiteContext,
    ZoneDetail,
    ZonePlan,
)
from .processing import UnitConverter


class DesignAggregator:
    """Builds external records from design inputs and summaries."""

    def __init__(
        self,
        date_utils: Optional[DateUtils] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize design aggregator.

        Args:
            date_utils: Timestamp source (defaults to Asia/Bangkok)
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = date_utils or DateUtils(constants.DEFAULT_TIMEZONE, self.logger)
        self.converter = UnitConverter(self.logger)

    def build_request(
        self,
        design_input: DesignInput,
        boundary: Optional[Sequence[Sequence[float]]] = None,
        scenario: str = "normal",
        reference_time: Optional[datetime] = None
    ) -> DesignRequest:
        """
        Snapshot a design input as a request record.

        Args:
            design_input: Normalized design parameters
            boundary: Field polygon as (lat, lng) pairs; defaults to a sample field
            scenario: Climate scenario name
            reference_time: Timestamp to stamp the record with

        Returns:
            DesignRequest
        """
        points: Tuple[Tuple[float, float], ...] = tuple(
            (float(lat), float(lng)) for lat, lng in (boundary or constants.DEFAULT_BOUNDARY)
        )

        water_model: Dict[str, Any] = {
            "kc": design_input.crop_coefficients.kc,
            "eto": design_input.et0,
            "rainfall": design_input.rainfall,
        }
        stages = design_input.crop_coefficients.stages
        if stages is not None:
            water_model["kcStages"] = {
                "initial": stages.initial,
                "development": stages.development,
                "mid": stages.mid,
                "late": stages.late,
            }

        return DesignRequest(
            boundary=points,
            general={
                "area": design_input.area_value,
                "areaUnit": self.converter.parse_area_unit(design_input.area_unit).value,
                "cropType": design_input.crop_type,
                "location": design_input.location,
            },
            water_model=water_model,
            hydraulics={
                "mainDiameter": design_input.main_pipe_diameter_mm,
                "maxLateral": design_input.user_max_lateral_m,
            },
            design_options={
                "layoutSource": LayoutMode(design_input.layout_mode).value,
                "scenario": scenario,
            },
            timestamp=self.date_utils.timestamp(reference_time),
        )

    def build_response(
        self,
        summary: DesignSummary,
        site_context: Optional[SiteContext] = None,
        reference_time: Optional[datetime] = None
    ) -> DesignResponse:
        """
        Summarize engine outputs as a response record.

        Args:
            summary: Engine output
            site_context: Optional remote-sensing annotation
            reference_time: Timestamp to stamp the record with

        Returns:
            DesignResponse
        """
        zone_plan = summary.zone_plan
        recommendations, pump_selection = self.recommend(summary)

        response = DesignResponse(
            water_demand_l_day=round(summary.water_balance.water_demand_l_per_day),
            pipe_length_m=round(summary.layout.total_pipe_length_m, 1),
            head_loss_percent=round(summary.hydraulics.head_loss_percent, 2),
            max_lateral_length_m=round(summary.max_lateral_length_m, 1),
            zones={
                "count": zone_plan.zone_count,
                "lengthPerZoneM": zone_plan.length_per_zone_m,
                "details": [
                    {"zoneId": zone.zone_id, "lengthM": zone.length_m}
                    for zone in zone_plan.zones
                ],
            },
            validation={
                "status": "Valid" if summary.validation.is_valid else "Check Design",
                "notes": list(summary.validation.notes),
            },
            bom=[
                {
                    "item": item.name,
                    "quantity": item.quantity,
                    "unit": item.unit,
                    "unitPrice": item.unit_price,
                    "total": item.total_price,
                }
                for item in summary.bill_of_materials.items
            ],
            total_cost=summary.bill_of_materials.total_cost,
            timestamp=self.date_utils.timestamp(reference_time),
            recommendations=recommendations,
            pump_selection=pump_selection,
            site_context=site_context,
            seasonal=self.seasonal_to_dict(summary.season) if summary.season is not None else None,
        )

        self.logger.debug(
            f"Response built - {zone_plan.zone_count} zones, "
            f"{len(response.bom)} BOM items, status {response.validation['status']}"
        )
        return response

    def recommend(self, summary: DesignSummary) -> Tuple[List[str], Dict[str, str]]:
        """
        Rule-based design advice and pump selection.

        Returns:
            Tuple of (recommendations, pump selection)
        """
        head_loss = summary.hydraulics.head_loss_percent
        demand = summary.water_balance.water_demand_l_per_day
        diameter = summary.design_input.main_pipe_diameter_mm
        area_rai = self.converter.convert_area(
            summary.design_input.area_value, summary.design_input.area_unit, AreaUnit.RAI
        )

        recommendations = []
        if head_loss > constants.BINARY_HEAD_LOSS_LIMIT_PERCENT:
            recommendations.append("Increase main pipe diameter to reduce head loss below 5%")
        else:
            recommendations.append("Head loss is within target (≤ 5%)")

        if (diameter < constants.RECOMMENDATION_SMALL_MAIN_MM
                and area_rai > constants.RECOMMENDATION_SMALL_MAIN_AREA_RAI):
            recommendations.append("For areas >20 Rai, use a main pipe at least Ø75 mm")

        large_pump = demand > constants.LARGE_PUMP_DEMAND_L_PER_DAY
        if large_pump:
            recommendations.append("Select a pump larger than 200 m³/day (≥ 7.5 kW)")
        else:
            recommendations.append("A medium-size pump is sufficient for this design (~5.5 kW)")

        pump_selection = {
            "suggestedPower": "7.5 kW" if large_pump else "5.5 kW",
            "suggestedHead": "40 m" if head_loss > constants.BINARY_HEAD_LOSS_LIMIT_PERCENT else "30 m",
        }
        return recommendations, pump_selection

    @staticmethod
    def seasonal_to_dict(season: SeasonResult) -> Dict[str, Any]:
        """Serialize a seasonal simulation for the response."""
        summary = season.summary
        return {
            "months": [
                {
                    "month": constants.MONTH_NAMES[record.month_index],
                    "kc": record.kc,
                    "eto": record.et0,
                    "rainfall": record.rainfall,
                    "demandLday": round(record.water_demand_l_per_day),
                    "demandLmonth": round(record.water_demand_l_per_month),
                }
                for record in season.records
            ],
            "summary": {
                "peakMonth": constants.MONTH_NAMES[summary.peak_month],
                "peakDemandL": round(summary.peak_demand),
                "peakRainfallMonth": constants.MONTH_NAMES[summary.peak_rainfall_month],
                "peakEtoMonth": constants.MONTH_NAMES[summary.peak_et0_month],
                "averageEto": round(summary.average_et0, 2),
                "averageRainfall": round(summary.average_rainfall, 2),
                "averageDemandL": round(summary.average_demand),
                "totalDemandL": round(summary.total_demand),
                "designCapacityLday": round(summary.design_capacity_l_per_day),
            },
        }

    @staticmethod
    def zone_plan_from_response(response: Dict[str, Any]) -> ZonePlan:
        """Rebuild a zone plan from a serialized response."""
        zones = response["zones"]
        return ZonePlan(
            zone_count=int(zones["count"]),
            length_per_zone_m=int(zones["lengthPerZoneM"]),
            zones=tuple(
                ZoneDetail(zone_id=detail["zoneId"], length_m=int(detail["lengthM"]))
                for detail in zones.get("details", [])
            ),
        )

    def build_project_record(
        self,
        summary: DesignSummary,
        project_id: Optional[str] = None,
        name: str = "Untitled Project",
        reference_time: Optional[datetime] = None
    ) -> ProjectRecord:
        """
        Build the persisted project entry for a design.

        Args:
            summary: Engine output
            project_id: Existing project id; a new one is generated when omitted
            name: Project name
            reference_time: Timestamp to stamp the record with

        Returns:
            ProjectRecord
        """
        design_input = summary.design_input
        return ProjectRecord(
            id=project_id or self.generate_project_id(),
            name=name,
            location=design_input.location,
            area=design_input.area_value,
            crop=design_input.crop_type,
            last_updated=self.date_utils.timestamp(reference_time),
            latest_metrics={
                "demandLday": round(summary.water_balance.water_demand_l_per_day),
                "totalPipeLength": round(summary.layout.total_pipe_length_m, 1),
                "headLossPct": round(summary.hydraulics.head_loss_percent, 2),
                "maxLateral": round(summary.max_lateral_length_m, 1),
                "validationOk": summary.validation.is_valid,
                "kc": design_input.crop_coefficients.kc,
                "eto": design_input.et0,
                "rainfall": design_input.rainfall,
                "mainDiameter": design_input.main_pipe_diameter_mm,
            },
        )

    @staticmethod
    def generate_project_id() -> str:
        """New short project id, e.g. proj_1a2b3c4."""
        return "proj_" + uuid.uuid4().hex[:7]
