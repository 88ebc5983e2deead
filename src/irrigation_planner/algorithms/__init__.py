"""
Calculation algorithms for irrigation network design.

Provides the water balance, network sizing, Hazen-Williams, zoning,
bill-of-materials and seasonal simulation calculators.
"""

from .water_balance import WaterDemandCalculator, IrrigationDepth
from .network import NetworkSizingEstimator
from .hazen_williams import HazenWilliamsCalculator, FrictionComponents
from .zoning import ZonePartitioner
from .bom import BOMCostEstimator
from .seasonal import SeasonalSimulator

__all__ = [
    "WaterDemandCalculator",
    "IrrigationDepth",
    "NetworkSizingEstimator",
    "HazenWilliamsCalculator",
    "FrictionComponents",
    "ZonePartitioner",
    "BOMCostEstimator",
    "SeasonalSimulator",
]
