"""FitBot persistence layer.

Supabase-backed storage for plan history, workout logs, and medical
record uploads.
"""

from fitbot.persistence.client import get_client, reset_client
from fitbot.persistence.plans import PlanStore
from fitbot.persistence.records import MedicalRecordStore
from fitbot.persistence.workouts import WorkoutStore

__all__ = [
    "MedicalRecordStore",
    "PlanStore",
    "WorkoutStore",
    "get_client",
    "reset_client",
]
