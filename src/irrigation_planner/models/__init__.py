"""
Data models for the irrigation planner.

Contains DTOs for design inputs, engine settings, calculation results and
external record contracts.
"""

from .design import (
    AreaUnit,
    LayoutMode,
    StageDays,
    StageCoefficients,
    CropCoefficients,
    DesignInput,
)
from .settings import (
    RainfallPolicy,
    ValidationPolicy,
    PumpPricing,
    LateralQuantity,
    EngineSettings,
)
from .results import (
    WaterBalanceResult,
    NetworkLayout,
    HydraulicResult,
    ZoneDetail,
    ZonePlan,
    BOMItem,
    BillOfMaterials,
    ValidationReport,
    PumpSizing,
    SeasonalRecord,
    SeasonalSummary,
    SeasonResult,
    DesignSummary,
)
from .contracts import SiteContext, DesignRequest, DesignResponse, ProjectRecord

__all__ = [
    "AreaUnit",
    "LayoutMode",
    "StageDays",
    "StageCoefficients",
    "CropCoefficients",
    "DesignInput",
    "RainfallPolicy",
    "ValidationPolicy",
    "PumpPricing",
    "LateralQuantity",
    "EngineSettings",
    "WaterBalanceResult",
    "NetworkLayout",
    "HydraulicResult",
    "ZoneDetail",
    "ZonePlan",
    "BOMItem",
    "BillOfMaterials",
    "ValidationReport",
    "PumpSizing",
    "SeasonalRecord",
    "SeasonalSummary",
    "SeasonResult",
    "DesignSummary",
    "SiteContext",
    "DesignRequest",
    "DesignResponse",
    "ProjectRecord",
]
