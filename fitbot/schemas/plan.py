"""Fitness plan schemas.

PlanRequest mirrors the planner form; FitnessPlan is the generated
result; SavedPlan is a plan row read back from history.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class Gender(StrEnum):
    MALE = "Male"
    FEMALE = "Female"


class ActivityLevel(StrEnum):
    """Self-reported activity level. Drives the number of rest days."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class Goal(StrEnum):
    """Training goal selected on the form."""

    LOSE = "lose"
    GAIN = "gain"
    MAINTAIN = "maintain"


class DietPreference(StrEnum):
    VEG = "veg"
    NONVEG = "nonveg"
    VEGAN = "vegan"
    KETO = "keto"
    PALEO = "paleo"


class Equipment(StrEnum):
    """Equipment ids offered on the form, in display order."""

    BODYWEIGHT = "bodyweight"
    DUMBBELLS = "dumbbells"
    BARBELL = "barbell"
    KETTLEBELL = "kettlebell"
    RESISTANCE_BANDS = "resistance_bands"
    PULL_UP_BAR = "pull_up_bar"
    TREADMILL = "treadmill"
    STATIONARY_BIKE = "stationary_bike"
    ROWING_MACHINE = "rowing_machine"
    CABLE_MACHINE = "cable_machine"
    BENCH = "bench"
    YOGA_MAT = "yoga_mat"
    MEDICINE_BALL = "medicine_ball"
    JUMP_ROPE = "jump_rope"
    FOAM_ROLLER = "foam_roller"


class PlanRequest(BaseModel):
    """Planner form values.

    Height and weight are optional here so that an incomplete form can
    be represented; the generator rejects missing or non-positive values.
    """

    name: str = Field(default="", description="Display name for the plan")
    age: int | None = Field(default=None, ge=0, description="Age in years")
    gender: Gender = Field(default=Gender.MALE)
    height: float | None = Field(default=None, description="Height in centimetres")
    weight: float | None = Field(default=None, description="Weight in kilograms")
    activity_level: ActivityLevel = Field(default=ActivityLevel.MODERATE)
    goal: Goal = Field(default=Goal.MAINTAIN)
    diet_preferences: list[DietPreference] = Field(
        default_factory=lambda: [DietPreference.VEG],
        description="At least one preference; an empty selection falls back to veg",
    )
    equipment: list[Equipment] = Field(
        default_factory=list, description="Selected equipment ids"
    )

    @field_validator("diet_preferences")
    @classmethod
    def _default_to_veg(cls, value: list[DietPreference]) -> list[DietPreference]:
        return value or [DietPreference.VEG]


class DayPlan(BaseModel):
    """One day of the weekly schedule."""

    day: str = Field(description="Weekday name")
    focus: str = Field(description="Training focus, 'Active Recovery' or 'Rest Day'")
    exercises: list[str] = Field(default_factory=list)
    duration: str = Field(description="Suggested session length, or 'Rest'")


class FitnessPlan(BaseModel):
    """A generated plan, ready to render or save."""

    bmi: float = Field(description="Body-mass index rounded to two decimals")
    category: str = Field(description="BMI category label")
    exercises: list[str] = Field(default_factory=list)
    diet: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    weekly_plan: list[DayPlan] = Field(default_factory=list)


class SavedPlan(BaseModel):
    """A plan row from the history table."""

    id: str
    name: str | None = None
    age: int | None = None
    gender: str | None = None
    height: float | None = None
    weight: float | None = None
    activity_level: str | None = None
    goal: str | None = None
    diet_preferences: list[str] | None = None
    equipment: str | None = None
    bmi: float | None = None
    bmi_category: str | None = None
    exercises: Any = None
    diet_plan: Any = None
    notes: Any = None
    medical_records: list[str] | None = None
    created_at: datetime

    @property
    def display_name(self) -> str:
        return self.name or "Unnamed Plan"
