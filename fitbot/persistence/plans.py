"""Plan history store backed by the fitness_plans table."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from supabase import Client

from fitbot.persistence.client import translate_errors
from fitbot.schemas.plan import FitnessPlan, PlanRequest, SavedPlan

logger = logging.getLogger(__name__)

TABLE = "fitness_plans"


def plan_row(
    user_id: str,
    request: PlanRequest,
    plan: FitnessPlan,
    medical_records: Sequence[str] = (),
) -> dict[str, Any]:
    """Flatten a request and its generated plan into a table row."""
    return {
        "user_id": user_id,
        "name": request.name or f"{request.goal} Plan",
        "age": request.age,
        "gender": str(request.gender),
        "height": request.height,
        "weight": request.weight,
        "activity_level": str(request.activity_level),
        "goal": str(request.goal),
        "diet_preferences": [str(p) for p in request.diet_preferences],
        "equipment": ", ".join(str(e) for e in request.equipment),
        "bmi": plan.bmi,
        "bmi_category": plan.category,
        "exercises": {
            "list": plan.exercises,
            "weeklyPlan": [day.model_dump() for day in plan.weekly_plan],
        },
        "diet_plan": plan.diet,
        "notes": plan.notes,
        "medical_records": list(medical_records),
    }


class PlanStore:
    """Save, list, and delete a user's generated plans."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def save_plan(
        self,
        user_id: str,
        request: PlanRequest,
        plan: FitnessPlan,
        medical_records: Sequence[str] = (),
    ) -> SavedPlan:
        row = plan_row(user_id, request, plan, medical_records)
        with translate_errors("save plan"):
            result = self._client.table(TABLE).insert(row).execute()
            saved = SavedPlan.model_validate(result.data[0])
        logger.info("Saved plan %s for user %s", saved.id, user_id)
        return saved

    def list_plans(self, user_id: str) -> list[SavedPlan]:
        """All plans of a user, newest first."""
        with translate_errors("load fitness plans"):
            result = (
                self._client.table(TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
            return [SavedPlan.model_validate(row) for row in result.data or []]

    def delete_plan(self, user_id: str, plan_id: str) -> bool:
        """Delete one plan. Returns False if the user owns no such plan."""
        with translate_errors("delete plan"):
            result = (
                self._client.table(TABLE)
                .delete()
                .eq("id", plan_id)
                .eq("user_id", user_id)
                .execute()
            )
        return bool(result.data)
