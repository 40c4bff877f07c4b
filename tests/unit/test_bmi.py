"""
Unit tests for BMI calculation and classification.
"""

import pytest

from health_tracker.bmi import BMICategory, calculate_bmi, classify


class TestCalculateBMI:
    """Test suite for calculate_bmi."""

    def test_regular_values(self):
        assert calculate_bmi(70, 175) == pytest.approx(22.857, abs=1e-3)

    @pytest.mark.parametrize("height", [0, -10])
    def test_non_positive_height_yields_zero(self, height):
        assert calculate_bmi(70, height) == 0.0


class TestClassify:
    """Test suite for classify."""

    @pytest.mark.parametrize("bmi, expected", [
        (0.0, BMICategory.UNDERWEIGHT),
        (18.49, BMICategory.UNDERWEIGHT),
        (18.5, BMICategory.NORMAL),
        (24.99, BMICategory.NORMAL),
        (25.0, BMICategory.OVERWEIGHT),
        (29.99, BMICategory.OVERWEIGHT),
        (30.0, BMICategory.OBESE),
        (55.0, BMICategory.OBESE),
    ])
    def test_band_boundaries(self, bmi, expected):
        """Lower bounds are inclusive."""
        assert classify(bmi) == expected

    def test_monotonic(self):
        """Categories never go down as BMI increases."""
        order = list(BMICategory)
        previous = 0
        for tenth in range(0, 500):
            index = order.index(classify(tenth / 10))
            assert index >= previous
            previous = index

    def test_category_values_are_display_names(self):
        assert BMICategory.OVERWEIGHT.value == "Overweight"
        assert BMICategory.OVERWEIGHT == "Overweight"
