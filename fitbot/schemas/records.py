"""Medical record upload schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

ALLOWED_RECORD_TYPES: frozenset[str] = frozenset({
    "application/pdf",
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
})

MAX_RECORD_BYTES = 10 * 1024 * 1024


class MedicalRecord(BaseModel):
    """A file stored in the medical-records bucket."""

    path: str = Field(description="Object path, '<user_id>/<name>.<ext>'")
    content_type: str = Field(description="MIME type accepted at upload")
    size: int = Field(ge=0, description="Size in bytes")
