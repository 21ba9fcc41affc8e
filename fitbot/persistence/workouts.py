"""Workout log store backed by the workout_logs table."""

from __future__ import annotations

import logging

from supabase import Client

from fitbot.persistence.client import translate_errors
from fitbot.schemas.workout import WorkoutEntry, WorkoutLog

logger = logging.getLogger(__name__)

TABLE = "workout_logs"


class WorkoutStore:
    """Log, list, and delete a user's workouts."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def log_workout(self, user_id: str, entry: WorkoutEntry) -> WorkoutLog:
        row = {
            "user_id": user_id,
            **entry.model_dump(mode="json"),
        }
        with translate_errors("log workout"):
            result = self._client.table(TABLE).insert(row).execute()
            log = WorkoutLog.model_validate(result.data[0])
        logger.info("Logged workout %s for user %s", log.id, user_id)
        return log

    def list_logs(self, user_id: str) -> list[WorkoutLog]:
        """All workouts of a user, most recent workout date first."""
        with translate_errors("load workout logs"):
            result = (
                self._client.table(TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("workout_date", desc=True)
                .execute()
            )
            return [WorkoutLog.model_validate(row) for row in result.data or []]

    def delete_log(self, user_id: str, log_id: str) -> bool:
        """Delete one log. Returns False if the user owns no such log."""
        with translate_errors("delete log"):
            result = (
                self._client.table(TABLE)
                .delete()
                .eq("id", log_id)
                .eq("user_id", user_id)
                .execute()
            )
        return bool(result.data)
