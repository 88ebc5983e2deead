"""
Irrigation Network Planner

This package sizes drip/sprinkler irrigation networks for a field: water
demand from the FAO-56 crop water balance, pipe layout, Hazen-Williams head
loss, zoning, bill of materials and a seasonal demand forecast.
"""

__version__ = "0.1.0"
__description__ = "Irrigation network design engine"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "IrrigationPlannerApp":
        from .main import IrrigationPlannerApp
        return IrrigationPlannerApp
    if name == "DesignEngine":
        from .designer import DesignEngine
        return DesignEngine
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "IrrigationPlannerApp",
    "DesignEngine",
]
