"""
Unit conversion module.

Converts field areas and water volumes into the units the engine works in.
"""

import logging
from typing import Optional, Union

from ..core import constants
from ..models.design import AreaUnit

_AREA_ALIASES = {
    "hectare": AreaUnit.HECTARE,
    "hectares": AreaUnit.HECTARE,
    "ha": AreaUnit.HECTARE,
    "rai": AreaUnit.RAI,
}


class UnitConverter:
    """Convert between area, flow and depth units."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize unit converter.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_area_unit(unit: Union[str, AreaUnit]) -> AreaUnit:
        """
        Resolve an area unit name.

        Args:
            unit: AreaUnit or name (hectare, ha, rai)

        Returns:
            AreaUnit

        Raises:
            ValueError: If the unit is not recognised
        """
        if isinstance(unit, AreaUnit):
            return unit
        resolved = _AREA_ALIASES.get(str(unit).strip().lower())
        if resolved is None:
            raise ValueError(f"Unknown area unit: {unit}")
        return resolved

    def area_to_m2(self, value: float, unit: Union[str, AreaUnit]) -> float:
        """
        Convert a field area to square meters.

        Args:
            value: Area value
            unit: Unit the value is expressed in

        Returns:
            Area in m² (never negative)
        """
        area_unit = self.parse_area_unit(unit)
        factor = constants.M2_PER_HECTARE if area_unit is AreaUnit.HECTARE else constants.M2_PER_RAI
        area_m2 = max(0.0, value) * factor
        self.logger.debug(f"Area {value} {area_unit.value} -> {area_m2:.1f} m²")
        return area_m2

    def m2_to_area(self, area_m2: float, unit: Union[str, AreaUnit]) -> float:
        """Convert square meters back to hectare or rai."""
        area_unit = self.parse_area_unit(unit)
        factor = constants.M2_PER_HECTARE if area_unit is AreaUnit.HECTARE else constants.M2_PER_RAI
        return area_m2 / factor

    def convert_area(
        self,
        value: float,
        from_unit: Union[str, AreaUnit],
        to_unit: Union[str, AreaUnit]
    ) -> float:
        """
        Convert area between hectare and rai.

        Args:
            value: Area value
            from_unit: Source unit
            to_unit: Target unit

        Returns:
            Converted area value
        """
        if self.parse_area_unit(from_unit) is self.parse_area_unit(to_unit):
            return value
        return self.m2_to_area(self.area_to_m2(value, from_unit), to_unit)

    @staticmethod
    def daily_volume_to_flow_lps(liters_per_day: float, operating_hours: float) -> float:
        """
        Spread a daily volume over the pumping window.

        Args:
            liters_per_day: Daily volume (L)
            operating_hours: Hours of operation per day (floored at 1 h)

        Returns:
            Flow rate (L/s)
        """
        seconds = max(1.0, operating_hours) * 3600.0
        return max(0.0, liters_per_day) / seconds

    @staticmethod
    def lps_to_m3s(flow_lps: float) -> float:
        """Convert L/s to m³/s."""
        return flow_lps / 1000.0

    @staticmethod
    def mm_to_m(value_mm: float) -> float:
        """Convert millimeters to meters."""
        return value_mm / 1000.0

    @staticmethod
    def depth_to_liters(depth_mm: float, area_m2: float) -> float:
        """Volume of a water depth spread over an area (1 mm on 1 m² is 1 L)."""
        return depth_mm * area_m2
