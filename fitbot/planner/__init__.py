"""Rule-based plan generation: BMI, exercises, meals, weekly schedule."""

from fitbot.planner.bmi import bmi_category, calculate_bmi
from fitbot.planner.generator import (
    build_notes,
    generate_plan,
    generate_weekly_plan,
    recommend_diet,
    recommend_exercises,
)

__all__ = [
    "bmi_category",
    "build_notes",
    "calculate_bmi",
    "generate_plan",
    "generate_weekly_plan",
    "recommend_diet",
    "recommend_exercises",
]
