"""FitBot schema definitions.

All Pydantic v2 models shared by the decoder, chat session, planner,
persistence layer, and HTTP API.
"""

from fitbot.schemas.chat import ChatMessage, ChatRequest, ChatRole
from fitbot.schemas.config import ApiSettings, ChatConfig, FitbotSettings, ModelSettings
from fitbot.schemas.plan import (
    ActivityLevel,
    DayPlan,
    DietPreference,
    Equipment,
    FitnessPlan,
    Gender,
    Goal,
    PlanRequest,
    SavedPlan,
)
from fitbot.schemas.records import MedicalRecord
from fitbot.schemas.streaming import StreamEvent, StreamEventType
from fitbot.schemas.workout import (
    DaySummary,
    Mood,
    ProgressStats,
    WorkoutEntry,
    WorkoutLog,
)

__all__ = [
    "ActivityLevel",
    "ApiSettings",
    "ChatConfig",
    "ChatMessage",
    "ChatRequest",
    "ChatRole",
    "DayPlan",
    "DaySummary",
    "DietPreference",
    "Equipment",
    "FitbotSettings",
    "FitnessPlan",
    "Gender",
    "Goal",
    "MedicalRecord",
    "ModelSettings",
    "Mood",
    "PlanRequest",
    "ProgressStats",
    "SavedPlan",
    "StreamEvent",
    "StreamEventType",
    "WorkoutEntry",
    "WorkoutLog",
]
