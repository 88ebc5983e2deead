"""
Tests for network sizing and zoning modules.
"""

import math
import random

import pytest
from src.irrigation_planner.algorithms import NetworkSizingEstimator, ZonePartitioner
from src.irrigation_planner.models import LayoutMode


class TestNetworkSizingEstimator:
    """Test cases for NetworkSizingEstimator."""

    @pytest.fixture
    def estimator(self):
        """Create estimator instance."""
        return NetworkSizingEstimator()

    def test_heuristic_layout(self, estimator):
        """Test grid layout of a 10 rai field with 12 m spacing."""
        layout = estimator.estimate_layout(16000, 12, 12)
        side = math.sqrt(16000)

        assert layout.field_side_m == pytest.approx(side)
        assert layout.lateral_count == 11
        assert layout.main_length_m == pytest.approx(side * 1.05)
        assert layout.lateral_length_m == pytest.approx(side * 11 * 1.05)
        assert layout.total_pipe_length_m == pytest.approx(side * 12 * 1.05)
        assert layout.emitter_count == 112

    def test_optimized_shorter_than_heuristic(self, estimator):
        """Test the optimized mode applies the 0.90 multiplier."""
        heuristic = estimator.estimate_layout(40000, 10, 10, LayoutMode.HEURISTIC)
        optimized = estimator.estimate_layout(40000, 10, 10, LayoutMode.OPTIMIZED)

        assert optimized.total_pipe_length_m < heuristic.total_pipe_length_m
        assert optimized.main_length_m == pytest.approx(200 * 0.90)

    def test_minimum_total_length(self, estimator):
        """Test tiny fields still get 20 m of pipe."""
        layout = estimator.estimate_layout(1, 12, 12)
        assert layout.total_pipe_length_m == 20
        assert layout.lateral_count == 1

    def test_zero_area(self, estimator):
        """Test an empty field."""
        layout = estimator.estimate_layout(0, 12, 12)
        assert layout.field_side_m == 0
        assert layout.total_pipe_length_m == 20
        assert layout.emitter_count == 1

    def test_tiny_spacing_is_floored(self, estimator):
        """Test spacing below 0.5 m does not explode the lateral count."""
        layout = estimator.estimate_layout(100, 0.1, 0.0)
        # side 10 m / 0.5 m
        assert layout.lateral_count == 20

    def test_layout_factor(self):
        """Test layout multipliers."""
        assert NetworkSizingEstimator.layout_factor(LayoutMode.HEURISTIC) == 1.05
        assert NetworkSizingEstimator.layout_factor(LayoutMode.OPTIMIZED) == 0.90


class TestZonePartitioner:
    """Test cases for ZonePartitioner."""

    @pytest.fixture
    def partitioner(self):
        """Create partitioner instance."""
        return ZonePartitioner()

    def test_single_zone(self, partitioner):
        """Test demand under capacity gives one zone."""
        plan = partitioner.partition_zones(30000, 1593.8)
        assert plan.zone_count == 1
        assert plan.length_per_zone_m == 1594
        assert [zone.zone_id for zone in plan.zones] == ["Z1"]

    def test_multiple_zones(self, partitioner):
        """Test demand over capacity is split."""
        plan = partitioner.partition_zones(187500, 4000)
        assert plan.zone_count == 4
        assert plan.length_per_zone_m == 1000
        assert [zone.zone_id for zone in plan.zones] == ["Z1", "Z2", "Z3", "Z4"]
        assert all(zone.length_m == 1000 for zone in plan.zones)

    def test_exact_capacity(self, partitioner):
        """Test demand equal to capacity stays in one zone."""
        assert partitioner.partition_zones(50000, 100).zone_count == 1
        assert partitioner.partition_zones(50001, 100).zone_count == 2

    def test_zero_demand(self, partitioner):
        """Test no demand still yields one zone."""
        plan = partitioner.partition_zones(0, 20)
        assert plan.zone_count == 1
        assert plan.length_per_zone_m == 20

    def test_custom_capacity(self, partitioner):
        """Test configurable zone capacity."""
        plan = partitioner.partition_zones(30000, 900, max_zone_capacity_l_per_day=10000)
        assert plan.zone_count == 3
        assert plan.length_per_zone_m == 300

    def test_zone_count_at_least_one(self, partitioner):
        """Test zone count over random demands."""
        rng = random.Random(7)
        for _ in range(200):
            demand = rng.uniform(-1000, 2_000_000)
            length = rng.uniform(0, 50000)
            plan = partitioner.partition_zones(demand, length)
            assert plan.zone_count >= 1
            assert len(plan.zones) == plan.zone_count
            assert plan.zone_count * plan.length_per_zone_m >= length
