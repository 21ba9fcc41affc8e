"""Workout progress statistics."""

from fitbot.progress.stats import (
    calculate_stats,
    current_streak,
    shift_week,
    week_overview,
    week_start,
)

__all__ = [
    "calculate_stats",
    "current_streak",
    "shift_week",
    "week_overview",
    "week_start",
]
