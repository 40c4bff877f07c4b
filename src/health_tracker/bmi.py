"""
BMI calculation and classification.
"""

from enum import Enum


class BMICategory(str, Enum):
    """BMI categories, ordered from lowest to highest band."""
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


# Lower bound (inclusive) of each band above Underweight
NORMAL_MIN = 18.5
OVERWEIGHT_MIN = 25.0
OBESE_MIN = 30.0


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """
    Calculate BMI from weight and height.

    A non-positive height yields 0, which classifies as Underweight.
    """
    if height_cm <= 0:
        return 0.0
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def classify(bmi: float) -> BMICategory:
    """
    Map a BMI value to its category.

    Bands are half-open: 18.5 is Normal, 25.0 is Overweight, 30.0 is Obese.
    """
    if bmi < NORMAL_MIN:
        return BMICategory.UNDERWEIGHT
    if bmi < OVERWEIGHT_MIN:
        return BMICategory.NORMAL
    if bmi < OBESE_MIN:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE
