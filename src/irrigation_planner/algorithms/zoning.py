"""
Zone partitioning module.

Splits the network into irrigation zones so that no zone carries more than
the maximum daily volume. Zones share the pipe length equally.
"""

import logging
import math
from typing import Optional

from ..core import constants
from ..models.results import ZoneDetail, ZonePlan


class ZonePartitioner:
    """Equal-split zoning bounded by zone capacity."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize zone partitioner.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def partition_zones(
        self,
        water_demand_l_per_day: float,
        total_pipe_length_m: float,
        max_zone_capacity_l_per_day: float = constants.MAX_ZONE_CAPACITY_L_PER_DAY
    ) -> ZonePlan:
        """
        Split the network into capacity-bounded zones.

        Args:
            water_demand_l_per_day: Daily demand (L/day)
            total_pipe_length_m: Total pipe length (m)
            max_zone_capacity_l_per_day: Largest daily volume a zone may carry

        Returns:
            ZonePlan with at least one zone
        """
        capacity = max_zone_capacity_l_per_day
        if capacity <= 0:
            capacity = constants.MAX_ZONE_CAPACITY_L_PER_DAY

        zone_count = max(1, math.ceil(max(0.0, water_demand_l_per_day) / capacity))
        length_per_zone = math.ceil(max(0.0, total_pipe_length_m) / zone_count)

        zones = tuple(
            ZoneDetail(zone_id=f"Z{index}", length_m=length_per_zone)
            for index in range(1, zone_count + 1)
        )

        self.logger.debug(
            f"Zoning - Demand: {water_demand_l_per_day:.0f} L/day, "
            f"Zones: {zone_count}, Length per zone: {length_per_zone} m"
        )

        return ZonePlan(zone_count=zone_count, length_per_zone_m=length_per_zone, zones=zones)
