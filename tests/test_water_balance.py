"""
Tests for water balance module.

Tests the FAO-56 crop water balance and effective rainfall policies.
"""

import pytest
from src.irrigation_planner.algorithms import WaterDemandCalculator
from src.irrigation_planner.models import (
    AreaUnit,
    CropCoefficients,
    DesignInput,
    EngineSettings,
    RainfallPolicy,
    StageCoefficients,
    StageDays,
)


class TestWaterDemandCalculator:
    """Test cases for WaterDemandCalculator."""

    @pytest.fixture
    def calculator(self):
        """Create calculator instance."""
        return WaterDemandCalculator()

    def test_demand_for_ten_rai(self, calculator):
        """Test 10 rai, Kc 0.3, ET0 5 mm, no rain, 80% efficiency."""
        design_input = DesignInput(
            area_value=10,
            area_unit=AreaUnit.RAI,
            crop_coefficients=CropCoefficients(kc=0.3),
            et0=5.0,
            rainfall=0.0,
            irrigation_efficiency=0.8,
        )
        result = calculator.compute_water_balance(design_input)

        assert result.area_m2 == pytest.approx(16000)
        assert result.crop_evapotranspiration == pytest.approx(1.5)
        assert result.net_irrigation_requirement == pytest.approx(1.5)
        assert result.gross_applied_depth == pytest.approx(1.875)
        assert result.water_demand_l_per_day == pytest.approx(30000)

    def test_demand_for_ten_hectares(self, calculator):
        """Test the same field expressed in hectares."""
        design_input = DesignInput(
            area_value=10,
            area_unit=AreaUnit.HECTARE,
            crop_coefficients=CropCoefficients(kc=0.3),
            et0=5.0,
            rainfall=0.0,
            irrigation_efficiency=0.8,
        )
        result = calculator.compute_water_balance(design_input)
        assert result.water_demand_l_per_day == pytest.approx(187500)

    def test_rain_covers_demand(self, calculator):
        """Test rainfall above crop demand gives zero irrigation."""
        design_input = DesignInput(
            crop_coefficients=CropCoefficients(kc=0.5),
            et0=4.0,
            rainfall=20.0,
        )
        result = calculator.compute_water_balance(design_input)
        assert result.net_irrigation_requirement == 0
        assert result.water_demand_l_per_day == 0

    @pytest.mark.parametrize("et0", [0.0, -3.0])
    def test_non_positive_et0(self, calculator, et0):
        """Test zero or negative ET0 gives zero ETc and demand, never negative."""
        design_input = DesignInput(
            crop_coefficients=CropCoefficients(kc=0.9),
            et0=et0,
            rainfall=0.0,
        )
        result = calculator.compute_water_balance(design_input)

        assert result.crop_evapotranspiration == 0
        assert result.net_irrigation_requirement == 0
        assert result.water_demand_l_per_day == 0

    def test_zero_area(self, calculator):
        """Test an empty field needs no water."""
        result = calculator.compute_water_balance(DesignInput(area_value=0))
        assert result.area_m2 == 0
        assert result.water_demand_l_per_day == 0

    def test_efficiency_floor(self, calculator):
        """Test efficiency below 1% is floored."""
        design_input = DesignInput(
            area_value=1,
            crop_coefficients=CropCoefficients(kc=1.0),
            et0=1.0,
            irrigation_efficiency=0.0,
        )
        result = calculator.compute_water_balance(design_input)
        assert result.efficiency == pytest.approx(0.01)
        assert result.gross_applied_depth == pytest.approx(100.0)

    def test_idempotent(self, calculator):
        """Test repeated calls give identical results."""
        design_input = DesignInput(rainfall=3.2, et0=6.1)
        first = calculator.compute_water_balance(design_input)
        second = calculator.compute_water_balance(design_input)
        assert first == second

    def test_stage_weighted_kc(self):
        """Test duration-weighted seasonal Kc."""
        coefficients = CropCoefficients(
            kc=0.9,
            stages=StageCoefficients(initial=0.3, development=0.7, mid=1.0, late=0.7),
            stage_days=StageDays(initial=20, development=30, mid=40, late=30),
        )
        # (0.3*20 + 0.7*30 + 1.0*40 + 0.7*30) / 120
        assert WaterDemandCalculator.seasonal_kc(coefficients) == pytest.approx(88 / 120)

    def test_scalar_kc_without_stages(self):
        """Test the scalar Kc is used when no stage values are given."""
        assert WaterDemandCalculator.seasonal_kc(CropCoefficients(kc=0.85)) == 0.85

    def test_zero_stage_days_uses_scalar(self):
        """Test a zero-length season falls back to the scalar Kc."""
        coefficients = CropCoefficients(
            kc=0.6,
            stages=StageCoefficients(),
            stage_days=StageDays(initial=0, development=0, mid=0, late=0),
        )
        assert WaterDemandCalculator.seasonal_kc(coefficients) == 0.6

    def test_simple_rainfall_policy(self):
        """Test the simple policy credits all rainfall."""
        calculator = WaterDemandCalculator(EngineSettings(rainfall_policy=RainfallPolicy.SIMPLE))
        design_input = DesignInput(
            area_value=1,
            area_unit=AreaUnit.HECTARE,
            crop_coefficients=CropCoefficients(kc=1.0),
            et0=5.0,
            rainfall=2.0,
            irrigation_efficiency=1.0,
        )
        result = calculator.compute_water_balance(design_input)
        assert result.effective_rainfall == pytest.approx(2.0)
        assert result.water_demand_l_per_day == pytest.approx(30000)


class TestEffectiveRainfall:
    """Test cases for effective rainfall."""

    def test_zero_rainfall(self):
        """Test no rain gives no effective rain under both policies."""
        for policy in RainfallPolicy:
            assert WaterDemandCalculator.effective_rainfall(0.0, policy) == 0

    def test_usda_scs_below_threshold(self):
        """Test the USDA-SCS curve below 250 mm."""
        # 100 * (125 - 20) / 125
        assert WaterDemandCalculator.effective_rainfall(100.0) == pytest.approx(84.0)

    def test_usda_scs_above_threshold(self):
        """Test the USDA-SCS curve above 250 mm."""
        assert WaterDemandCalculator.effective_rainfall(300.0) == pytest.approx(155.0)

    def test_negative_rainfall(self):
        """Test negative rainfall is treated as zero."""
        assert WaterDemandCalculator.effective_rainfall(-5.0) == 0

    @pytest.mark.parametrize("policy", list(RainfallPolicy))
    def test_non_decreasing(self, policy):
        """Test effective rainfall never drops as rainfall rises."""
        previous = -1.0
        for tenth_mm in range(0, 6000, 7):
            pe = WaterDemandCalculator.effective_rainfall(tenth_mm / 10.0, policy)
            assert pe >= previous
            assert pe >= 0
            previous = pe
