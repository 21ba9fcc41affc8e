"""Rule-based fitness plan generator.

Turns planner form values into a FitnessPlan: BMI and category, an
exercise list driven by the selected equipment and goal, meal lines
driven by diet preferences, general notes, and a seven-day schedule.
Everything is a deterministic lookup into fitbot.planner.catalog.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from fitbot.planner import catalog
from fitbot.planner.bmi import bmi_category, calculate_bmi, format_bmi
from fitbot.schemas.plan import (
    ActivityLevel,
    DayPlan,
    DietPreference,
    Equipment,
    FitnessPlan,
    Goal,
    PlanRequest,
)

logger = logging.getLogger(__name__)

MAX_EXERCISES = 12
MAX_MEALS = 6


def _unique(items: Iterable[str]) -> list[str]:
    """De-duplicate, keeping first occurrences in order."""
    return list(dict.fromkeys(items))


def recommend_exercises(equipment: list[Equipment], goal: Goal) -> list[str]:
    """Exercise list for the selected equipment and goal.

    Not de-duplicated: the weekly schedule slices this raw list.
    """
    selected = set(equipment)
    exercises: list[str] = []

    if not selected or Equipment.BODYWEIGHT in selected:
        exercises.extend(catalog.BODYWEIGHT_EXERCISES)

    for item, block in catalog.EQUIPMENT_EXERCISES.items():
        if item in selected:
            exercises.extend(block)

    exercises.extend(catalog.GOAL_EXERCISES[goal])
    return exercises


def recommend_diet(preferences: list[DietPreference], goal: Goal) -> list[str]:
    """Meal lines for the goal, in nonveg, plant, keto, common order."""
    prefs = set(preferences)
    meals = catalog.DIET_MEALS[goal]
    diet: list[str] = []

    if DietPreference.NONVEG in prefs:
        diet.extend(meals["nonveg"])
    if DietPreference.VEG in prefs or DietPreference.VEGAN in prefs:
        diet.extend(meals["plant"])
    if DietPreference.KETO in prefs:
        diet.extend(meals["keto"])
    diet.extend(meals["common"])
    return diet


def build_notes(
    bmi: float,
    category: str,
    goal: Goal,
    preferences: list[DietPreference],
    equipment: list[Equipment],
) -> list[str]:
    diet_labels = ", ".join(catalog.DIET_LABELS[p] for p in preferences)
    equipment_labels = (
        ", ".join(catalog.EQUIPMENT_LABELS[e] for e in equipment)
        if equipment
        else "Bodyweight only"
    )
    return [
        f"Your BMI: {format_bmi(bmi)} ({category})",
        catalog.GOAL_ADVICE[goal],
        *catalog.GENERAL_NOTES,
        f"Diet preferences: {diet_labels}",
        f"Equipment: {equipment_labels}",
    ]


def generate_weekly_plan(
    goal: Goal, exercises: list[str], activity_level: ActivityLevel,
) -> list[DayPlan]:
    """Seven days, Monday first, with the rest days at the end of the week.

    Workout day ``i`` takes ``exercises[3i:3i+4]``, falling back to the
    first four exercises once the list runs out. Sunday is always a full
    rest day when it falls in the rest block.
    """
    workout_days = len(catalog.WEEKDAYS) - catalog.REST_DAYS[activity_level]
    focus_areas = catalog.FOCUS_AREAS[goal]
    durations = catalog.DURATIONS[goal]
    last = len(catalog.WEEKDAYS) - 1

    week: list[DayPlan] = []
    for index, day in enumerate(catalog.WEEKDAYS):
        if index >= workout_days:
            week.append(DayPlan(
                day=day,
                focus="Rest Day" if index == last else "Active Recovery",
                exercises=list(catalog.RECOVERY_EXERCISES),
                duration="Rest" if index == last else "20-30 mins",
            ))
            continue

        day_exercises = exercises[index * 3:index * 3 + 4] or exercises[:4]
        week.append(DayPlan(
            day=day,
            focus=focus_areas[index % len(focus_areas)],
            exercises=day_exercises,
            duration=durations[index % len(durations)],
        ))
    return week


def generate_plan(request: PlanRequest) -> FitnessPlan:
    """Build a complete plan from form values.

    Raises:
        InvalidPlanInput: If height or weight is missing or not positive.
    """
    bmi = calculate_bmi(request.weight, request.height)
    category = bmi_category(bmi)

    exercises = recommend_exercises(request.equipment, request.goal)
    diet = recommend_diet(request.diet_preferences, request.goal)

    plan = FitnessPlan(
        bmi=bmi,
        category=category,
        exercises=_unique(exercises)[:MAX_EXERCISES],
        diet=_unique(diet)[:MAX_MEALS],
        notes=build_notes(
            bmi, category, request.goal, request.diet_preferences, request.equipment,
        ),
        weekly_plan=generate_weekly_plan(
            request.goal, exercises, request.activity_level,
        ),
    )
    logger.debug(
        "Generated %s plan: BMI %.2f (%s), %d exercises",
        request.goal, bmi, category, len(plan.exercises),
    )
    return plan
