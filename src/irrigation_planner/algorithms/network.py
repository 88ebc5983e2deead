"""
Network sizing module.

Estimates main line and lateral lengths for a field by treating it as a square
with laterals laid at a fixed spacing across it. This is a grid approximation,
not a minimum spanning tree or Steiner point solver; the layout mode multiplier
stands in for routing slack (or savings from an optimized layout).
"""

import logging
import math
from typing import Optional

from ..core import constants
from ..models.design import LayoutMode
from ..models.results import NetworkLayout


class NetworkSizingEstimator:
    """Approximate pipe network extent from field area and emitter spacing."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize network sizing estimator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def estimate_layout(
        self,
        area_m2: float,
        emitter_spacing_x: float,
        emitter_spacing_y: float,
        layout_mode: LayoutMode = LayoutMode.HEURISTIC
    ) -> NetworkLayout:
        """
        Estimate the pipe network for a square field.

        Args:
            area_m2: Field area (m²)
            emitter_spacing_x: Emitter spacing along a lateral (m)
            emitter_spacing_y: Spacing between laterals (m)
            layout_mode: HEURISTIC (x1.05) or OPTIMIZED (x0.90)

        Returns:
            NetworkLayout with lengths in meters
        """
        area = max(0.0, area_m2)
        field_side = math.sqrt(area)
        lateral_spacing = max(constants.MIN_LATERAL_SPACING_M, emitter_spacing_y)
        lateral_count = max(1, math.ceil(field_side / lateral_spacing))

        factor = self.layout_factor(layout_mode)
        main_length = field_side * factor
        lateral_length = field_side * lateral_count * factor
        total_length = max(constants.MIN_TOTAL_PIPE_LENGTH_M, main_length + lateral_length)

        emitter_count = self.emitter_count(area, emitter_spacing_x, emitter_spacing_y)

        self.logger.debug(
            f"Layout ({LayoutMode(layout_mode).value}) - Side: {field_side:.1f} m, "
            f"Laterals: {lateral_count}, Main: {main_length:.1f} m, "
            f"Lateral total: {lateral_length:.1f} m, Total: {total_length:.1f} m, "
            f"Emitters: {emitter_count}"
        )

        return NetworkLayout(
            field_side_m=field_side,
            lateral_count=lateral_count,
            main_length_m=main_length,
            lateral_length_m=lateral_length,
            total_pipe_length_m=total_length,
            emitter_count=emitter_count,
        )

    @staticmethod
    def layout_factor(layout_mode: LayoutMode) -> float:
        """Length multiplier for a layout mode."""
        return constants.LAYOUT_FACTORS[LayoutMode(layout_mode).value]

    @staticmethod
    def emitter_count(area_m2: float, spacing_x: float, spacing_y: float) -> int:
        """
        Number of emitters on a rectangular grid.

        Args:
            area_m2: Field area (m²)
            spacing_x: Emitter spacing along laterals (m)
            spacing_y: Lateral spacing (m)

        Returns:
            Emitter count, at least 1
        """
        cell = max(constants.MIN_LATERAL_SPACING_M, spacing_x) * max(constants.MIN_LATERAL_SPACING_M, spacing_y)
        return max(1, math.ceil(max(0.0, area_m2) / cell))
