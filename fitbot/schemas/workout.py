"""Workout log and progress schemas."""

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class Mood(StrEnum):
    """How the user felt after a workout."""

    GREAT = "great"
    GOOD = "good"
    OKAY = "okay"
    TIRED = "tired"
    EXHAUSTED = "exhausted"


DEFAULT_EXERCISES: list[str] = [
    "Push-Ups",
    "Squats",
    "Planks",
    "Lunges",
    "Burpees",
    "Mountain Climbers",
    "Jumping Jacks",
    "Crunches",
]


class WorkoutEntry(BaseModel):
    """A workout the user wants to log."""

    workout_date: date = Field(default_factory=date.today)
    exercises_completed: list[str] = Field(
        min_length=1, description="At least one completed exercise"
    )
    duration_minutes: int | None = Field(default=None, ge=0)
    calories_burned: int | None = Field(default=None, ge=0)
    mood: Mood = Field(default=Mood.GOOD)
    notes: str | None = Field(default=None)
    fitness_plan_id: str | None = Field(
        default=None, description="Plan this workout belongs to, if any"
    )

    @field_validator("notes")
    @classmethod
    def _blank_notes_to_none(cls, value: str | None) -> str | None:
        return value or None


class WorkoutLog(BaseModel):
    """A logged workout read back from the database."""

    id: str
    workout_date: date
    exercises_completed: list[str] = Field(default_factory=list)
    duration_minutes: int | None = None
    calories_burned: int | None = None
    mood: Mood | None = None
    notes: str | None = None
    fitness_plan_id: str | None = None
    created_at: datetime | None = None

    @field_validator("exercises_completed", mode="before")
    @classmethod
    def _coerce_exercises(cls, value: Any) -> Any:
        # jsonb column; anything that is not a list is treated as empty
        return value if isinstance(value, list) else []


class ProgressStats(BaseModel):
    """Aggregate numbers shown on the progress dashboard."""

    total_workouts: int = 0
    total_duration: int = 0
    total_calories: int = 0
    current_streak: int = 0
    this_week_workouts: int = 0


class DaySummary(BaseModel):
    """Workouts logged on one day of the weekly overview."""

    day: date
    is_today: bool = False
    logs: list[WorkoutLog] = Field(default_factory=list)

    @property
    def has_workout(self) -> bool:
        return bool(self.logs)
