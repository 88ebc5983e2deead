"""
Tests for bill of materials module.
"""

import math
import random

import pytest
from src.irrigation_planner.algorithms import BOMCostEstimator, NetworkSizingEstimator, ZonePartitioner
from src.irrigation_planner.models import (
    BillOfMaterials,
    BOMItem,
    EngineSettings,
    HydraulicResult,
    LateralQuantity,
    PumpPricing,
)


@pytest.fixture
def layout():
    """Layout of a 10 rai field with 12 m spacing."""
    return NetworkSizingEstimator().estimate_layout(16000, 12, 12)


@pytest.fixture
def zone_plan(layout):
    return ZonePartitioner().partition_zones(30000, layout.total_pipe_length_m)


@pytest.fixture
def hydraulics():
    return HydraulicResult(
        friction_head_loss_m=0.03,
        head_loss_percent=0.1,
        lateral_head_loss_percent=0.09,
        velocity_ms=0.04,
        total_head_m=30.03,
        is_within_limit=True,
    )


@pytest.fixture
def pump(hydraulics):
    return BOMCostEstimator.calculate_pump_power(30000 / 86400, hydraulics.total_head_m)


class TestPumpPower:
    """Test cases for pump power."""

    def test_pump_power(self):
        """Test hp = Q x H / (0.65 x 75)."""
        sizing = BOMCostEstimator.calculate_pump_power(2.0, 30.0)
        assert sizing.power_hp == pytest.approx(60 / 48.75)
        assert sizing.power_kw == pytest.approx(60 / 48.75 * 0.746)

    def test_no_flow(self):
        """Test zero flow needs no power."""
        sizing = BOMCostEstimator.calculate_pump_power(0.0, 30.0)
        assert sizing.power_hp == 0
        assert sizing.power_kw == 0


class TestBOMCostEstimator:
    """Test cases for BOMCostEstimator."""

    @pytest.fixture
    def estimator(self):
        """Create estimator instance."""
        return BOMCostEstimator()

    def test_item_order_and_quantities(self, estimator, layout, hydraulics, zone_plan, pump):
        """Test the fixed parts list for a 10 rai field."""
        bom = estimator.build_bom(layout, hydraulics, zone_plan, 110, pump)
        names = [item.name for item in bom.items]

        assert names[0] == "Main pipe Ø110 mm"
        assert names[1:5] == ["Lateral pipe Ø32 mm", "Pipe fittings", "Control valves", "Sprinkler heads"]
        assert names[5].startswith("Pump (approx ")
        assert names[5].endswith("hp @ 30.0 m)")
        assert names[6:] == ["Filter set", "Irrigation controller"]

        quantities = [item.quantity for item in bom.items]
        assert quantities == [133, 1461, 80, 1, 112, 1, 1, 1]

    def test_default_prices(self, estimator, layout, hydraulics, zone_plan, pump):
        """Test default unit prices and total."""
        bom = estimator.build_bom(layout, hydraulics, zone_plan, 110, pump)
        prices = [item.unit_price for item in bom.items]

        assert prices == [230, 70, 45, 550, 85, 45000, 9500, 6500]
        assert bom.total_cost == pytest.approx(207530.0)

    def test_unknown_diameter_price(self, estimator):
        """Test diameters outside the table use the default price."""
        assert estimator.main_pipe_price(110) == 230
        assert estimator.main_pipe_price(100) == 120
        assert estimator.main_pipe_price(110.5) == 120

    def test_lateral_main_ratio(self, layout, hydraulics, zone_plan, pump):
        """Test lateral quantity as half the main length."""
        estimator = BOMCostEstimator(EngineSettings(lateral_quantity=LateralQuantity.MAIN_RATIO))
        bom = estimator.build_bom(layout, hydraulics, zone_plan, 110, pump)
        assert bom.items[1].quantity == math.ceil(133 * 0.5)

    def test_scaled_pump_price(self, layout, hydraulics, zone_plan, pump):
        """Test pump price scaled with power."""
        estimator = BOMCostEstimator(EngineSettings(pump_pricing=PumpPricing.SCALED))
        bom = estimator.build_bom(layout, hydraulics, zone_plan, 110, pump)
        assert bom.items[5].unit_price == pytest.approx(15000 + 6500 * pump.power_kw, abs=0.01)

    def test_deterministic(self, estimator, layout, hydraulics, zone_plan, pump):
        """Test identical inputs give identical lists."""
        first = estimator.build_bom(layout, hydraulics, zone_plan, 110, pump)
        second = estimator.build_bom(layout, hydraulics, zone_plan, 110, pump)
        assert first == second


class TestBillOfMaterials:
    """Test cases for BOM totals."""

    def test_item_total(self):
        """Test line total is quantity times unit price."""
        item = BOMItem("Filter set", 2, "set", 9500)
        assert item.total_price == 19000

    @pytest.mark.parametrize("seed", range(10))
    def test_total_is_sum_of_items(self, seed):
        """Test the total equals the sum of line totals for random lists."""
        rng = random.Random(seed)
        items = [
            BOMItem(
                name=f"Part {index}",
                quantity=rng.randint(0, 5000),
                unit=rng.choice(["m", "pcs", "set"]),
                unit_price=round(rng.uniform(0, 50000), 2),
            )
            for index in range(rng.randint(0, 20))
        ]
        bom = BillOfMaterials(items=tuple(items))
        assert bom.total_cost == pytest.approx(sum(item.total_price for item in items), abs=0.01)

    def test_empty_list(self):
        """Test an empty list costs nothing."""
        assert BillOfMaterials(items=()).total_cost == 0
