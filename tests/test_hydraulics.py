"""
Tests for Hazen-Williams calculator and hydraulic validator.
"""

import math
import random

import pytest
from src.irrigation_planner.algorithms import HazenWilliamsCalculator
from src.irrigation_planner.models import (
    DesignInput,
    EngineSettings,
    HydraulicResult,
    ValidationPolicy,
    WaterBalanceResult,
)
from src.irrigation_planner.processing import HydraulicValidator, clamp_percent

# 30,000 L/day pumped over 24 h
GOLDEN_FLOW_M3S = 30000 / 86400 / 1000


def make_water_balance(area_m2=16000.0, demand=30000.0):
    """Water balance with only the fields validation reads filled in."""
    return WaterBalanceResult(
        area_m2=area_m2,
        seasonal_kc=0.3,
        crop_evapotranspiration=1.5,
        effective_rainfall=0.0,
        net_irrigation_requirement=1.5,
        efficiency=0.8,
        gross_applied_depth=1.875,
        water_demand_l_per_day=demand,
    )


def make_hydraulics(main=1.0, lateral=0.5):
    return HydraulicResult(
        friction_head_loss_m=main * 0.3,
        head_loss_percent=main,
        lateral_head_loss_percent=lateral,
        velocity_ms=0.5,
        total_head_m=30 + main * 0.3,
        is_within_limit=True,
    )


class TestHazenWilliamsCalculator:
    """Test cases for HazenWilliamsCalculator."""

    def test_golden_friction_loss(self):
        """Test 110 mm, 600 m, 30,000 L/day over 24 h."""
        hf = HazenWilliamsCalculator.friction_head_loss(GOLDEN_FLOW_M3S, 600, 0.110)
        assert hf == pytest.approx(0.01096, rel=0.01)

    def test_no_flow(self):
        """Test zero flow gives zero loss."""
        assert HazenWilliamsCalculator.friction_head_loss(0, 600, 0.110) == 0
        assert HazenWilliamsCalculator.friction_head_loss(0.01, 600, 0) == 0

    def test_loss_proportional_to_length(self):
        """Test friction loss scales linearly with length."""
        short = HazenWilliamsCalculator.friction_head_loss(0.002, 100, 0.063)
        long = HazenWilliamsCalculator.friction_head_loss(0.002, 300, 0.063)
        assert long == pytest.approx(3 * short)

    def test_max_length_inverts_friction_loss(self):
        """Test the solved length uses exactly the allowed head."""
        rng = random.Random(11)
        for _ in range(50):
            flow = rng.uniform(1e-5, 0.05)
            diameter = rng.choice([0.032, 0.050, 0.075, 0.110, 0.160])
            allowable = rng.uniform(0.1, 5.0)
            length = HazenWilliamsCalculator.max_length(flow, diameter, allowable)
            hf = HazenWilliamsCalculator.friction_head_loss(flow, length, diameter)
            assert hf == pytest.approx(allowable, rel=1e-9)

    def test_max_length_without_flow(self):
        """Test any length is allowed without flow."""
        assert math.isinf(HazenWilliamsCalculator.max_length(0, 0.110, 1.5))

    def test_velocity(self):
        """Test mean velocity from flow and bore."""
        v = HazenWilliamsCalculator.velocity(0.01, 0.1)
        assert v == pytest.approx(0.01 / (math.pi * 0.05 ** 2))

    def test_components_lateral_share(self):
        """Test lateral percent is the lateral share of the total loss."""
        components = HazenWilliamsCalculator.calculate_with_components(
            flow_m3s=0.005, length_m=1000, diameter_m=0.075, lateral_length_m=900
        )
        assert components.raw_lateral_head_loss_percent == pytest.approx(
            0.9 * components.raw_head_loss_percent
        )
        assert components.total_head_m == pytest.approx(30 + components.friction_head_loss_m)


class TestHeadLoss:
    """Test cases for HydraulicValidator.compute_head_loss."""

    @pytest.fixture
    def validator(self):
        """Create validator instance."""
        return HydraulicValidator()

    def test_golden_head_loss_percent(self, validator):
        """Test golden value as a percent of 30 m operating head."""
        result = validator.compute_head_loss(GOLDEN_FLOW_M3S, 600, 110)
        assert result.head_loss_percent == pytest.approx(0.0365, abs=0.01)
        assert result.is_within_limit

    def test_percent_clamped(self, validator):
        """Test absurd losses are clamped to 100%."""
        result = validator.compute_head_loss(1.0, 10000, 20)
        assert result.head_loss_percent == 100
        assert result.lateral_head_loss_percent == 100
        assert not result.is_within_limit

    def test_percent_in_range_random(self, validator):
        """Test head loss percents stay in [0, 100]."""
        rng = random.Random(3)
        for _ in range(200):
            result = validator.compute_head_loss(
                flow_m3s=rng.uniform(0, 0.5),
                length_m=rng.uniform(0, 20000),
                diameter_mm=rng.choice([20, 32, 50, 110, 160]),
                lateral_length_m=rng.uniform(0, 20000),
            )
            assert 0 <= result.head_loss_percent <= 100
            assert 0 <= result.lateral_head_loss_percent <= 100

    def test_tiered_limit(self):
        """Test the tiered policy accepts losses up to 15%."""
        binary = HydraulicValidator()
        tiered = HydraulicValidator(EngineSettings(validation_policy=ValidationPolicy.TIERED))
        # About 2.3 m of 30 m
        flow = 0.0018
        result_binary = binary.compute_head_loss(flow, 400, 63)
        result_tiered = tiered.compute_head_loss(flow, 400, 63)
        assert result_binary.head_loss_percent == result_tiered.head_loss_percent
        assert 5 < result_binary.head_loss_percent < 15
        assert not result_binary.is_within_limit
        assert result_tiered.is_within_limit

    def test_clamp_percent(self):
        """Test percent clamping helper."""
        assert clamp_percent(-3) == 0
        assert clamp_percent(250) == 100
        assert clamp_percent(float("nan")) == 0
        assert clamp_percent(42.5) == 42.5


class TestMaxLateralLength:
    """Test cases for HydraulicValidator.solve_max_lateral_length."""

    def test_capped_by_user_maximum(self):
        """Test small demand is capped at the designer's limit."""
        validator = HydraulicValidator()
        assert validator.solve_max_lateral_length(30000, 110, user_max_lateral_m=100) == 100

    def test_no_demand(self):
        """Test zero demand returns the user maximum."""
        validator = HydraulicValidator()
        assert validator.solve_max_lateral_length(0, 110, user_max_lateral_m=80) == 80

    def test_floor(self):
        """Test large demand on a small pipe stops at the floor."""
        validator = HydraulicValidator()
        assert validator.solve_max_lateral_length(5_000_000, 32, user_max_lateral_m=100) == 20

    def test_configured_floor(self):
        """Test the alternative 50 m floor."""
        validator = HydraulicValidator(EngineSettings(max_lateral_floor_m=50.0))
        assert validator.solve_max_lateral_length(5_000_000, 32, user_max_lateral_m=100) == 50

    def test_between_bounds(self):
        """Test an unclamped solution matches the closed form."""
        validator = HydraulicValidator()
        demand = 400000
        flow_per_lateral = demand / 86400 / 1000 / 10
        expected = HazenWilliamsCalculator.max_length(flow_per_lateral, 0.032, 1.5)
        result = validator.solve_max_lateral_length(demand, 32, user_max_lateral_m=10000)

        # ~118 m for 400,000 L/day on a 32 mm lateral
        assert expected == pytest.approx(118.3, abs=1.0)
        assert result == pytest.approx(expected)


class TestValidate:
    """Test cases for HydraulicValidator.validate."""

    @pytest.fixture
    def validator(self):
        """Create validator instance."""
        return HydraulicValidator()

    def test_valid_design(self, validator):
        """Test a design within all limits."""
        report = validator.validate(DesignInput(), make_water_balance(), make_hydraulics(), 100)
        assert report.is_valid
        assert report.notes == ("Head loss ≤ 5% on the main line and laterals.",)

    def test_main_head_loss_failure(self, validator):
        """Test main line loss above 5% fails the design."""
        report = validator.validate(DesignInput(), make_water_balance(), make_hydraulics(7.5, 3.0), 100)
        assert not report.is_valid
        assert report.notes == (
            "Main line head loss 7.50% exceeds the 5% limit. Consider increasing the main pipe diameter.",
        )

    def test_both_head_loss_failures(self, validator):
        """Test main and lateral failures are both reported in order."""
        report = validator.validate(DesignInput(), make_water_balance(), make_hydraulics(9.0, 6.0), 100)
        assert not report.is_valid
        assert report.notes[0].startswith("Main line head loss 9.00%")
        assert report.notes[1].startswith("Lateral head loss 6.00%")

    def test_tiered_warning_is_valid(self):
        """Test the tiered policy warns between 10% and 15%."""
        validator = HydraulicValidator(EngineSettings(validation_policy=ValidationPolicy.TIERED))
        report = validator.validate(DesignInput(), make_water_balance(), make_hydraulics(12.0, 4.0), 100)
        assert report.is_valid
        assert report.notes == (
            "Main line head loss 12.00% is between 10% and 15%. Acceptable, but close to the limit.",
        )

    def test_tiered_failure(self):
        """Test the tiered policy fails above 15%."""
        validator = HydraulicValidator(EngineSettings(validation_policy=ValidationPolicy.TIERED))
        report = validator.validate(DesignInput(), make_water_balance(), make_hydraulics(4.0, 16.0), 100)
        assert not report.is_valid
        assert "exceeds the 15% limit" in report.notes[0]

    def test_tiered_pass_note(self):
        """Test the tiered pass note."""
        validator = HydraulicValidator(EngineSettings(validation_policy=ValidationPolicy.TIERED))
        report = validator.validate(DesignInput(), make_water_balance(), make_hydraulics(8.0, 8.0), 100)
        assert report.is_valid
        assert report.notes == ("Head loss ≤ 10% on the main line and laterals.",)

    def test_lateral_shortfall(self, validator):
        """Test a solved lateral below 80% of the setting fails."""
        report = validator.validate(
            DesignInput(user_max_lateral_m=100), make_water_balance(), make_hydraulics(), 60
        )
        assert not report.is_valid
        assert report.notes[1] == (
            "Maximum lateral length 60.0 m is below 80% of the 100 m setting. "
            "Use a larger pipe or more zones."
        )

    def test_large_area_small_main(self, validator):
        """Test a large field with a small main fails."""
        report = validator.validate(
            DesignInput(main_pipe_diameter_mm=90),
            make_water_balance(area_m2=600000, demand=90000),
            make_hydraulics(),
            100,
        )
        assert not report.is_valid
        assert any("over 50 ha" in note for note in report.notes)

    def test_high_demand_is_advisory(self, validator):
        """Test high demand adds a note without failing."""
        report = validator.validate(
            DesignInput(), make_water_balance(demand=150000), make_hydraulics(), 100
        )
        assert report.is_valid
        assert report.notes[-1] == (
            "Water demand 150,000 L/day exceeds 100,000 L/day. "
            "Consider splitting the field into irrigation zones."
        )

    def test_note_order(self, validator):
        """Test every triggered note is kept in a fixed order."""
        report = validator.validate(
            DesignInput(main_pipe_diameter_mm=90, user_max_lateral_m=100),
            make_water_balance(area_m2=600000, demand=250000),
            make_hydraulics(6.0, 1.0),
            30,
        )
        assert not report.is_valid
        assert len(report.notes) == 4
        assert report.notes[0].startswith("Main line head loss")
        assert report.notes[1].startswith("Maximum lateral length")
        assert report.notes[2].startswith("Water demand")
        assert report.notes[3].startswith("Field area")
