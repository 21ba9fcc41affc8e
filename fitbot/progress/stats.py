"""Workout progress statistics and the weekly calendar view.

Weeks start on Monday.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta

from fitbot.schemas.workout import DaySummary, ProgressStats, WorkoutLog


def week_start(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def shift_week(anchor: date, weeks: int) -> date:
    """Move an anchor date by whole weeks (negative = back in time)."""
    return anchor + timedelta(weeks=weeks)


def current_streak(logs: Sequence[WorkoutLog], today: date) -> int:
    """Consecutive workout days ending today or yesterday.

    Several workouts on the same day count once. A streak whose latest
    day is older than yesterday is already broken.
    """
    dates = sorted({log.workout_date for log in logs}, reverse=True)
    if not dates or dates[0] not in (today, today - timedelta(days=1)):
        return 0

    streak = 1
    for newer, older in zip(dates, dates[1:]):
        if (newer - older).days != 1:
            break
        streak += 1
    return streak


def calculate_stats(logs: Sequence[WorkoutLog], today: date | None = None) -> ProgressStats:
    """Totals, this week's count, and the current streak."""
    today = today or date.today()
    monday = week_start(today)

    return ProgressStats(
        total_workouts=len(logs),
        total_duration=sum(log.duration_minutes or 0 for log in logs),
        total_calories=sum(log.calories_burned or 0 for log in logs),
        current_streak=current_streak(logs, today),
        this_week_workouts=sum(1 for log in logs if log.workout_date >= monday),
    )


def week_overview(
    logs: Sequence[WorkoutLog], anchor: date, today: date | None = None,
) -> list[DaySummary]:
    """Seven DaySummary entries, Monday to Sunday, for the anchor's week."""
    today = today or date.today()
    monday = week_start(anchor)
    days = [monday + timedelta(days=offset) for offset in range(7)]

    return [
        DaySummary(
            day=day,
            is_today=day == today,
            logs=[log for log in logs if log.workout_date == day],
        )
        for day in days
    ]
