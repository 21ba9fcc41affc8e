"""FitBot HTTP API.

FastAPI application serving the streaming chat function, stateless plan
generation, and the user-scoped history, workout log, progress, and
medical record routes backed by Supabase.
"""

from __future__ import annotations

import logging
from datetime import date

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

from fitbot import __version__
from fitbot.api.auth import verify_client_key, verify_user
from fitbot.api.models import (
    DeleteResponse,
    ProgressResponse,
    RecordUploadResponse,
    RejectedUpload,
    SavePlanRequest,
)
from fitbot.errors import InvalidPlanInput, PersistenceError, UploadRejected
from fitbot.keys import CHAT_FUNCTION_PATH
from fitbot.persistence.client import get_client
from fitbot.persistence.plans import PlanStore
from fitbot.persistence.records import MedicalRecordStore
from fitbot.persistence.workouts import WorkoutStore
from fitbot.planner.generator import generate_plan
from fitbot.progress.stats import calculate_stats, week_overview
from fitbot.providers.base import ChatProvider
from fitbot.providers.litellm_provider import LiteLLMChatProvider
from fitbot.providers.sse import encode_sse
from fitbot.schemas.chat import ChatRequest
from fitbot.schemas.config import FitbotSettings
from fitbot.schemas.plan import FitnessPlan, PlanRequest, SavedPlan
from fitbot.schemas.workout import WorkoutEntry, WorkoutLog
from fitbot.settings import load_settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_plan_store() -> PlanStore:
    return PlanStore(get_client())


def get_workout_store() -> WorkoutStore:
    return WorkoutStore(get_client())


def get_record_store() -> MedicalRecordStore:
    return MedicalRecordStore(get_client())


def get_chat_provider(request: Request) -> ChatProvider:
    return request.app.state.chat_provider


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------


def create_app(
    settings: FitbotSettings | None = None,
    provider: ChatProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or load_settings()

    app = FastAPI(
        title="FitBot API",
        version=__version__,
    )
    app.state.settings = settings
    app.state.chat_provider = provider or LiteLLMChatProvider(settings.model)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidPlanInput)
    async def _invalid_plan(request: Request, exc: InvalidPlanInput) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(UploadRejected)
    async def _upload_rejected(request: Request, exc: UploadRejected) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(PersistenceError)
    async def _persistence(request: Request, exc: PersistenceError) -> JSONResponse:
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    # ── Chat ─────────────────────────────────────────────────────

    @app.post(CHAT_FUNCTION_PATH, dependencies=[Depends(verify_client_key)])
    async def fitness_chat(
        body: ChatRequest,
        provider: ChatProvider = Depends(get_chat_provider),
    ) -> StreamingResponse:
        """Stream an assistant reply as ``data:`` frames ending in [DONE]."""
        try:
            deltas = await provider.open_stream(body.messages)
        except TimeoutError:
            logger.warning("Chat completion timed out")
            raise HTTPException(status_code=504, detail="AI service timed out") from None
        except RuntimeError as e:
            logger.error("Chat completion failed: %s", e)
            raise HTTPException(status_code=502, detail="AI service unavailable") from None

        return StreamingResponse(
            encode_sse(deltas),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache"},
        )

    # ── Plans ────────────────────────────────────────────────────

    @app.post("/api/v1/plans/generate", response_model=FitnessPlan)
    async def generate(body: PlanRequest) -> FitnessPlan:
        """Generate a plan without saving it. No login required."""
        return generate_plan(body)

    @app.post("/api/v1/plans", response_model=SavedPlan, status_code=201)
    async def save_plan(
        body: SavePlanRequest,
        user_id: str = Depends(verify_user),
        store: PlanStore = Depends(get_plan_store),
    ) -> SavedPlan:
        """Regenerate the plan from the form values and save it to history."""
        plan = generate_plan(body.request)
        return store.save_plan(user_id, body.request, plan, body.medical_records)

    @app.get("/api/v1/plans", response_model=list[SavedPlan])
    async def list_plans(
        user_id: str = Depends(verify_user),
        store: PlanStore = Depends(get_plan_store),
    ) -> list[SavedPlan]:
        return store.list_plans(user_id)

    @app.delete("/api/v1/plans/{plan_id}", response_model=DeleteResponse)
    async def delete_plan(
        plan_id: str,
        user_id: str = Depends(verify_user),
        store: PlanStore = Depends(get_plan_store),
    ) -> DeleteResponse:
        if not store.delete_plan(user_id, plan_id):
            raise HTTPException(status_code=404, detail="Plan not found")
        return DeleteResponse()

    # ── Workouts & progress ──────────────────────────────────────

    @app.post("/api/v1/workouts", response_model=WorkoutLog, status_code=201)
    async def log_workout(
        body: WorkoutEntry,
        user_id: str = Depends(verify_user),
        store: WorkoutStore = Depends(get_workout_store),
    ) -> WorkoutLog:
        return store.log_workout(user_id, body)

    @app.get("/api/v1/workouts", response_model=list[WorkoutLog])
    async def list_workouts(
        user_id: str = Depends(verify_user),
        store: WorkoutStore = Depends(get_workout_store),
    ) -> list[WorkoutLog]:
        return store.list_logs(user_id)

    @app.delete("/api/v1/workouts/{log_id}", response_model=DeleteResponse)
    async def delete_workout(
        log_id: str,
        user_id: str = Depends(verify_user),
        store: WorkoutStore = Depends(get_workout_store),
    ) -> DeleteResponse:
        if not store.delete_log(user_id, log_id):
            raise HTTPException(status_code=404, detail="Workout log not found")
        return DeleteResponse()

    @app.get("/api/v1/progress", response_model=ProgressResponse)
    async def progress(
        week: date | None = None,
        user_id: str = Depends(verify_user),
        store: WorkoutStore = Depends(get_workout_store),
    ) -> ProgressResponse:
        """Stats over all logs plus the calendar week containing ``week``."""
        today = date.today()
        logs = store.list_logs(user_id)
        return ProgressResponse(
            stats=calculate_stats(logs, today),
            week=week_overview(logs, week or today, today),
        )

    # ── Medical records ──────────────────────────────────────────

    @app.post("/api/v1/records", response_model=RecordUploadResponse, status_code=201)
    async def upload_records(
        files: list[UploadFile] = File(...),
        user_id: str = Depends(verify_user),
        store: MedicalRecordStore = Depends(get_record_store),
    ) -> RecordUploadResponse:
        """Upload PDFs or images; invalid files are reported, not fatal."""
        response = RecordUploadResponse()
        for upload in files:
            data = await upload.read()
            filename = upload.filename or "record"
            try:
                record = store.upload(
                    user_id, filename, upload.content_type or "", data,
                )
            except UploadRejected as e:
                response.rejected.append(RejectedUpload(filename=filename, reason=str(e)))
                continue
            response.uploaded.append(record)
        return response

    @app.delete("/api/v1/records/{path:path}", response_model=DeleteResponse)
    async def remove_record(
        path: str,
        user_id: str = Depends(verify_user),
        store: MedicalRecordStore = Depends(get_record_store),
    ) -> DeleteResponse:
        store.remove(user_id, path)
        return DeleteResponse()

    # ── Health ───────────────────────────────────────────────────

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
