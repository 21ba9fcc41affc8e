"""Pydantic schemas used only by the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from fitbot.schemas.plan import PlanRequest
from fitbot.schemas.records import MedicalRecord
from fitbot.schemas.workout import DaySummary, ProgressStats


class SavePlanRequest(BaseModel):
    """Form values to regenerate and save, plus attached record paths."""

    request: PlanRequest = Field(description="Planner form values")
    medical_records: list[str] = Field(
        default_factory=list, description="Storage paths of uploaded records",
    )


class ProgressResponse(BaseModel):
    """Dashboard payload: aggregate stats and one calendar week."""

    stats: ProgressStats
    week: list[DaySummary]


class RejectedUpload(BaseModel):
    filename: str
    reason: str


class RecordUploadResponse(BaseModel):
    """Outcome of a multi-file upload; invalid files do not fail the batch."""

    uploaded: list[MedicalRecord] = Field(default_factory=list)
    rejected: list[RejectedUpload] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    status: str = "deleted"
