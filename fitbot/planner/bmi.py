"""Body-mass index helpers."""

from __future__ import annotations

from fitbot.errors import InvalidPlanInput


def calculate_bmi(weight: float | None, height: float | None) -> float:
    """BMI from weight in kg and height in cm, rounded to two decimals.

    Raises:
        InvalidPlanInput: If either value is missing or not positive.
    """
    if not weight or not height or weight <= 0 or height <= 0:
        raise InvalidPlanInput("Please enter valid height and weight")
    height_m = height / 100
    return round(weight / (height_m * height_m), 2)


def bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Healthy"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def format_bmi(bmi: float) -> str:
    """Render a BMI without a trailing '.0' (22.0 -> '22', 22.5 -> '22.5')."""
    return f"{bmi:.2f}".rstrip("0").rstrip(".")
