"""Tests for fitbot.persistence — Supabase-backed stores.

The Supabase client is a MagicMock; query-builder chains are asserted
on the mock's recorded calls.
"""

from __future__ import annotations

from datetime import date
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from fitbot.errors import PersistenceError, UploadRejected
from fitbot.persistence import client as client_module
from fitbot.persistence.client import get_client, reset_client, translate_errors
from fitbot.persistence.plans import PlanStore, plan_row
from fitbot.persistence.records import (
    BUCKET,
    MedicalRecordStore,
    object_path,
    owns_path,
    validate_record,
)
from fitbot.persistence.workouts import WorkoutStore
from fitbot.planner.generator import generate_plan
from fitbot.schemas.plan import DietPreference, Equipment, Goal, PlanRequest
from fitbot.schemas.records import MAX_RECORD_BYTES
from fitbot.schemas.workout import Mood, WorkoutEntry

USER = "user-123"


def _result(data) -> SimpleNamespace:
    return SimpleNamespace(data=data)


def _saved_row(**overrides) -> dict:
    row = {
        "id": "plan-1",
        "user_id": USER,
        "name": "Sam",
        "goal": "lose",
        "bmi": 22.86,
        "bmi_category": "Healthy",
        "exercises": {"list": [], "weeklyPlan": []},
        "diet_plan": [],
        "notes": [],
        "medical_records": [],
        "created_at": "2025-03-12T10:00:00+00:00",
    }
    row.update(overrides)
    return row


def _log_row(**overrides) -> dict:
    row = {
        "id": "log-1",
        "user_id": USER,
        "workout_date": "2025-03-12",
        "exercises_completed": ["Squats"],
        "duration_minutes": 30,
        "calories_burned": 200,
        "mood": "good",
        "notes": None,
        "fitness_plan_id": None,
        "created_at": "2025-03-12T10:00:00+00:00",
    }
    row.update(overrides)
    return row


# ── Client ────────────────────────────────────────────────────


class TestClient:
    def setup_method(self):
        reset_client()

    def teardown_method(self):
        reset_client()

    def test_client_created_once_with_service_key(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key")
        with patch.object(client_module, "create_client") as create:
            first = get_client()
            second = get_client()
        create.assert_called_once_with("https://x.supabase.co", "service-key")
        assert first is second

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
        with pytest.raises(RuntimeError, match="SUPABASE_SERVICE_ROLE_KEY"):
            get_client()

    def test_translate_errors_wraps_failures(self):
        with pytest.raises(PersistenceError, match="Failed to load things") as exc_info:
            with translate_errors("load things"):
                raise ConnectionError("network down")
        assert isinstance(exc_info.value.__cause__, ConnectionError)


# ── Plans ─────────────────────────────────────────────────────


class TestPlanStore:
    def _request(self, **overrides) -> PlanRequest:
        values = {
            "height": 175, "weight": 70, "goal": Goal.LOSE,
            "diet_preferences": [DietPreference.VEG, DietPreference.KETO],
            "equipment": [Equipment.DUMBBELLS, Equipment.JUMP_ROPE],
        }
        values.update(overrides)
        return PlanRequest(**values)

    def test_plan_row_shape(self):
        request = self._request()
        plan = generate_plan(request)
        row = plan_row(USER, request, plan, ["user-123/1-abc.pdf"])

        assert row["user_id"] == USER
        assert row["name"] == "lose Plan"
        assert row["equipment"] == "dumbbells, jump_rope"
        assert row["diet_preferences"] == ["veg", "keto"]
        assert row["bmi_category"] == "Healthy"
        assert row["exercises"]["list"] == plan.exercises
        assert len(row["exercises"]["weeklyPlan"]) == 7
        assert row["exercises"]["weeklyPlan"][0]["day"] == "Monday"
        assert row["diet_plan"] == plan.diet
        assert row["medical_records"] == ["user-123/1-abc.pdf"]

    def test_save_plan(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value = _result([_saved_row()])
        request = self._request(name="Sam")

        saved = PlanStore(client).save_plan(USER, request, generate_plan(request))

        client.table.assert_called_with("fitness_plans")
        inserted = client.table.return_value.insert.call_args.args[0]
        assert inserted["name"] == "Sam"
        assert saved.id == "plan-1"
        assert saved.display_name == "Sam"

    def test_list_plans_scoped_and_ordered(self):
        client = MagicMock()
        chain = client.table.return_value.select.return_value
        chain.eq.return_value.order.return_value.execute.return_value = _result([
            _saved_row(id="b"), _saved_row(id="a", name=None),
        ])

        plans = PlanStore(client).list_plans(USER)

        chain.eq.assert_called_once_with("user_id", USER)
        chain.eq.return_value.order.assert_called_once_with("created_at", desc=True)
        assert [p.id for p in plans] == ["b", "a"]
        assert plans[1].display_name == "Unnamed Plan"

    def test_delete_plan(self):
        client = MagicMock()
        first_eq = client.table.return_value.delete.return_value.eq
        first_eq.return_value.eq.return_value.execute.return_value = _result([_saved_row()])

        assert PlanStore(client).delete_plan(USER, "plan-1") is True
        first_eq.assert_called_once_with("id", "plan-1")
        first_eq.return_value.eq.assert_called_once_with("user_id", USER)

    def test_delete_missing_plan(self):
        client = MagicMock()
        first_eq = client.table.return_value.delete.return_value.eq
        first_eq.return_value.eq.return_value.execute.return_value = _result([])
        assert PlanStore(client).delete_plan(USER, "nope") is False

    def test_failure_becomes_persistence_error(self):
        client = MagicMock()
        client.table.return_value.select.side_effect = RuntimeError("boom")
        with pytest.raises(PersistenceError, match="Failed to load fitness plans"):
            PlanStore(client).list_plans(USER)


# ── Workouts ──────────────────────────────────────────────────


class TestWorkoutStore:
    def test_log_workout(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value = _result([_log_row()])
        entry = WorkoutEntry(
            workout_date=date(2025, 3, 12),
            exercises_completed=["Squats"],
            duration_minutes=30,
            mood=Mood.GREAT,
            notes="",
        )

        log = WorkoutStore(client).log_workout(USER, entry)

        client.table.assert_called_with("workout_logs")
        row = client.table.return_value.insert.call_args.args[0]
        assert row["user_id"] == USER
        assert row["workout_date"] == "2025-03-12"
        assert row["mood"] == "great"
        assert row["notes"] is None
        assert log.id == "log-1"

    def test_entry_requires_an_exercise(self):
        with pytest.raises(ValueError):
            WorkoutEntry(exercises_completed=[])

    def test_list_logs_coerces_bad_exercise_column(self):
        client = MagicMock()
        chain = client.table.return_value.select.return_value.eq.return_value
        chain.order.return_value.execute.return_value = _result([
            _log_row(exercises_completed="not a list"),
        ])

        logs = WorkoutStore(client).list_logs(USER)

        chain.order.assert_called_once_with("workout_date", desc=True)
        assert logs[0].exercises_completed == []
        assert logs[0].workout_date == date(2025, 3, 12)

    def test_delete_log(self):
        client = MagicMock()
        first_eq = client.table.return_value.delete.return_value.eq
        first_eq.return_value.eq.return_value.execute.return_value = _result([_log_row()])
        assert WorkoutStore(client).delete_log(USER, "log-1") is True


# ── Medical records ───────────────────────────────────────────


class TestMedicalRecords:
    def test_validate_accepts_pdf(self):
        validate_record("scan.pdf", "application/pdf", 1024)

    def test_validate_rejects_type(self):
        with pytest.raises(UploadRejected, match="PDF or image files only"):
            validate_record("notes.txt", "text/plain", 10)

    def test_validate_rejects_size(self):
        with pytest.raises(UploadRejected, match="scan.png exceeds 10MB limit"):
            validate_record("scan.png", "image/png", MAX_RECORD_BYTES + 1)

    def test_object_path(self):
        path = object_path(USER, "blood.test.pdf", now_ms=1700000000000)
        folder, name = path.split("/")
        assert folder == USER
        assert name.startswith("1700000000000-")
        assert name.endswith(".pdf")
        assert len(name) == len("1700000000000-") + 6 + len(".pdf")

    def test_upload(self):
        client = MagicMock()
        record = MedicalRecordStore(client).upload(USER, "xray.png", "image/png", b"\x89PNG")

        client.storage.from_.assert_called_with(BUCKET)
        path, data, options = client.storage.from_.return_value.upload.call_args.args
        assert path == record.path
        assert path.startswith(f"{USER}/")
        assert data == b"\x89PNG"
        assert options == {"content-type": "image/png"}
        assert record.size == 4

    def test_rejected_upload_never_reaches_storage(self):
        client = MagicMock()
        with pytest.raises(UploadRejected):
            MedicalRecordStore(client).upload(USER, "a.exe", "application/octet-stream", b"MZ")
        client.storage.from_.assert_not_called()

    def test_remove_own_record(self):
        client = MagicMock()
        MedicalRecordStore(client).remove(USER, f"{USER}/1-abc.pdf")
        client.storage.from_.return_value.remove.assert_called_once_with([f"{USER}/1-abc.pdf"])

    def test_remove_other_users_record(self):
        client = MagicMock()
        with pytest.raises(UploadRejected, match="does not belong"):
            MedicalRecordStore(client).remove(USER, "someone-else/1-abc.pdf")
        client.storage.from_.assert_not_called()

    @pytest.mark.parametrize("path", [
        f"{USER}/../someone-else/1-abc.pdf",
        f"{USER}/./1-abc.pdf",
        f"{USER}//1-abc.pdf",
        f"{USER}/",
        USER,
        f"{USER}-evil/1-abc.pdf",
    ])
    def test_remove_rejects_paths_outside_own_folder(self, path):
        client = MagicMock()
        with pytest.raises(UploadRejected, match="does not belong"):
            MedicalRecordStore(client).remove(USER, path)
        client.storage.from_.assert_not_called()

    def test_owns_path(self):
        assert owns_path(USER, f"{USER}/1-abc.pdf")
        assert owns_path(USER, f"{USER}/scans/1-abc.pdf")
        assert not owns_path(USER, f"{USER}/scans/../../x.pdf")
