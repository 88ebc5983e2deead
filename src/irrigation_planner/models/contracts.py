"""
External record contracts.

JSON-shaped records exchanged with the hosting application: the design
request/response pair, the persisted project record and the site context
annotation. Keys use the camelCase names the host expects.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class SiteContext:
    """Remote-sensing annotation for a field (never used in calculations)."""

    ndvi_mean: float
    slope_class: str
    soil_type: str
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ndviMean": self.ndvi_mean,
            "slopeClass": self.slope_class,
            "soilType": self.soil_type,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class DesignRequest:
    """Snapshot of what was asked of the engine."""

    boundary: Tuple[Tuple[float, float], ...]
    general: Dict[str, Any]
    water_model: Dict[str, Any]
    hydraulics: Dict[str, Any]
    design_options: Dict[str, Any]
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "boundary": [[lat, lng] for lat, lng in self.boundary],
            "general": dict(self.general),
            "waterModel": dict(self.water_model),
            "hydraulics": dict(self.hydraulics),
            "designOptions": dict(self.design_options),
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class DesignResponse:
    """Summary of engine outputs for display and export."""

    water_demand_l_day: float
    pipe_length_m: float
    head_loss_percent: float
    max_lateral_length_m: float
    zones: Dict[str, Any]
    validation: Dict[str, Any]
    bom: List[Dict[str, Any]]
    total_cost: float
    timestamp: str
    recommendations: List[str] = field(default_factory=list)
    pump_selection: Dict[str, str] = field(default_factory=dict)
    site_context: Optional[SiteContext] = None
    seasonal: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "waterDemandLday": self.water_demand_l_day,
            "pipeLengthM": self.pipe_length_m,
            "headLossPercent": self.head_loss_percent,
            "maxLateralLengthM": self.max_lateral_length_m,
            "zones": self.zones,
            "validation": self.validation,
            "bom": self.bom,
            "totalCost": self.total_cost,
            "timestamp": self.timestamp,
            "recommendations": list(self.recommendations),
            "pumpSelection": dict(self.pump_selection),
        }
        if self.site_context is not None:
            data["siteContext"] = self.site_context.to_dict()
        if self.seasonal is not None:
            data["seasonal"] = self.seasonal
        return data


@dataclass(frozen=True)
class ProjectRecord:
    """Durable project entry owned by the hosting application."""

    id: str
    name: str
    location: str
    area: float
    crop: str
    last_updated: str
    latest_metrics: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "area": self.area,
            "crop": self.crop,
            "lastUpdated": self.last_updated,
            "latestMetrics": dict(self.latest_metrics),
        }
