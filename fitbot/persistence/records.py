"""Medical record uploads to the medical-records storage bucket.

Objects live under a folder named after the owner's user id, which is
what the bucket's access policies key on.
"""

from __future__ import annotations

import logging
import secrets
import time

from supabase import Client

from fitbot.errors import UploadRejected
from fitbot.persistence.client import translate_errors
from fitbot.schemas.records import ALLOWED_RECORD_TYPES, MAX_RECORD_BYTES, MedicalRecord

logger = logging.getLogger(__name__)

BUCKET = "medical-records"


def validate_record(filename: str, content_type: str, size: int) -> None:
    """Raise UploadRejected unless the file is an allowed type and size."""
    if content_type not in ALLOWED_RECORD_TYPES:
        raise UploadRejected("Please upload PDF or image files only")
    if size > MAX_RECORD_BYTES:
        raise UploadRejected(f"{filename} exceeds 10MB limit")


def owns_path(user_id: str, path: str) -> bool:
    """True if ``path`` names an object inside the user's own folder."""
    folder, _, rest = path.partition("/")
    if folder != user_id or not rest:
        return False
    return all(part not in ("", ".", "..") for part in rest.split("/"))


def object_path(user_id: str, filename: str, *, now_ms: int | None = None) -> str:
    """Storage path: ``<user_id>/<epoch ms>-<random>.<extension>``."""
    extension = filename.rsplit(".", 1)[-1]
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{user_id}/{stamp}-{secrets.token_hex(3)}.{extension}"


class MedicalRecordStore:
    """Upload and remove a user's medical records."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def upload(
        self, user_id: str, filename: str, content_type: str, data: bytes,
    ) -> MedicalRecord:
        validate_record(filename, content_type, len(data))
        path = object_path(user_id, filename)
        with translate_errors("upload files"):
            self._client.storage.from_(BUCKET).upload(
                path, data, {"content-type": content_type},
            )
        logger.info("Uploaded medical record %s (%d bytes)", path, len(data))
        return MedicalRecord(path=path, content_type=content_type, size=len(data))

    def remove(self, user_id: str, path: str) -> None:
        if not owns_path(user_id, path):
            raise UploadRejected("Record does not belong to this user")
        with translate_errors("remove file"):
            self._client.storage.from_(BUCKET).remove([path])
        logger.info("Removed medical record %s", path)
