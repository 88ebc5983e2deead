"""
Hazen-Williams pipe friction module.

Implements the metric Hazen-Williams equation for friction head loss in
pressurised pipes and its closed-form inversion for the longest pipe that
stays within an allowable loss:

    hf = 10.67 x Q^1.852 x L / (C^1.852 x D^4.871)

with Q in m³/s, L and D in meters and C the roughness coefficient (150 for
smooth PVC).

Reference:
    Williams, G.S., Hazen, A. (1920). Hydraulic Tables, 3rd ed. Wiley.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..core import constants


@dataclass
class FrictionComponents:
    """Container for a friction calculation and its intermediate values."""

    flow_m3s: float
    length_m: float
    diameter_m: float
    friction_head_loss_m: float
    raw_head_loss_percent: float  # before clamping
    raw_lateral_head_loss_percent: float
    velocity_ms: float
    total_head_m: float


class HazenWilliamsCalculator:
    """
    Calculator for pipe friction using the Hazen-Williams equation.

    All methods are pure and static.
    """

    @staticmethod
    def friction_head_loss(
        flow_m3s: float,
        length_m: float,
        diameter_m: float,
        c: float = constants.HAZEN_WILLIAMS_C
    ) -> float:
        """
        Friction head loss over a pipe run.

        Args:
            flow_m3s: Flow rate (m³/s)
            length_m: Pipe length (m)
            diameter_m: Internal diameter (m)
            c: Hazen-Williams roughness coefficient

        Returns:
            Head loss (m), never negative
        """
        if flow_m3s <= 0 or length_m <= 0 or diameter_m <= 0:
            return 0.0
        return (
            constants.HAZEN_WILLIAMS_K
            * flow_m3s ** constants.FLOW_EXPONENT
            * length_m
            / (c ** constants.FLOW_EXPONENT * diameter_m ** constants.DIAMETER_EXPONENT)
        )

    @staticmethod
    def max_length(
        flow_m3s: float,
        diameter_m: float,
        allowable_head_loss_m: float,
        c: float = constants.HAZEN_WILLIAMS_C
    ) -> float:
        """
        Longest pipe run whose friction loss equals the allowable head loss.

        Args:
            flow_m3s: Flow rate (m³/s)
            diameter_m: Internal diameter (m)
            allowable_head_loss_m: Head loss budget (m)
            c: Hazen-Williams roughness coefficient

        Returns:
            Length (m); infinite when there is no flow
        """
        if flow_m3s <= 0:
            return math.inf
        return (
            allowable_head_loss_m
            * c ** constants.FLOW_EXPONENT
            * diameter_m ** constants.DIAMETER_EXPONENT
            / (constants.HAZEN_WILLIAMS_K * flow_m3s ** constants.FLOW_EXPONENT)
        )

    @staticmethod
    def velocity(flow_m3s: float, diameter_m: float) -> float:
        """
        Mean flow velocity.

        Args:
            flow_m3s: Flow rate (m³/s)
            diameter_m: Internal diameter (m)

        Returns:
            Velocity (m/s)
        """
        area = math.pi * (diameter_m / 2) ** 2
        return flow_m3s / area if area > 0 else 0.0

    @staticmethod
    def calculate_with_components(
        flow_m3s: float,
        length_m: float,
        diameter_m: float,
        operating_head_m: float = constants.OPERATING_HEAD_M,
        lateral_length_m: Optional[float] = None
    ) -> FrictionComponents:
        """
        Friction loss with percentages of operating head and velocity.

        The lateral percentage scales the total loss by the lateral share of
        the pipe length; without a lateral length the whole run is used.

        Args:
            flow_m3s: Flow rate (m³/s)
            length_m: Total pipe length (m)
            diameter_m: Internal diameter (m)
            operating_head_m: Design operating head (m)
            lateral_length_m: Lateral pipe length (m)

        Returns:
            FrictionComponents with unclamped percentages
        """
        hf = HazenWilliamsCalculator.friction_head_loss(flow_m3s, length_m, diameter_m)

        if lateral_length_m is None or length_m <= 0:
            lateral_share = 1.0
        else:
            lateral_share = max(0.0, lateral_length_m) / length_m

        head = operating_head_m if operating_head_m > 0 else constants.OPERATING_HEAD_M
        head_loss_percent = hf / head * 100
        lateral_head_loss_percent = hf * lateral_share / head * 100

        return FrictionComponents(
            flow_m3s=flow_m3s,
            length_m=length_m,
            diameter_m=diameter_m,
            friction_head_loss_m=hf,
            raw_head_loss_percent=head_loss_percent,
            raw_lateral_head_loss_percent=lateral_head_loss_percent,
            velocity_ms=HazenWilliamsCalculator.velocity(flow_m3s, diameter_m),
            total_head_m=head + hf,
        )
