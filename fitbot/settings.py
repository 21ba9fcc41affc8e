"""TOML configuration loader.

Loads bundled defaults from fitbot/config/defaults.toml and applies
environment overrides for the chat endpoint and completion model.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from fitbot.keys import CHAT_URL_ENV, MODEL_ENV, default_chat_url
from fitbot.schemas.config import FitbotSettings

# Default config directory inside the fitbot package
_CONFIG_DIR = Path(__file__).parent / "config"


def load_settings(config_path: Path | None = None) -> FitbotSettings:
    """Load FitBot settings from a TOML file.

    Args:
        config_path: Path to a TOML file. Defaults to fitbot/config/defaults.toml.

    Returns:
        FitbotSettings with environment overrides applied.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the TOML structure is invalid.
    """
    path = config_path or _CONFIG_DIR / "defaults.toml"
    if not path.exists():
        raise FileNotFoundError(f"FitBot config not found: {path}")

    with open(path, "rb") as f:
        raw = tomllib.load(f)

    chat = dict(raw.get("chat", {}))
    model = dict(raw.get("model", {}))

    # -1 in TOML stands for "no bound"
    if chat.get("max_line_retries", 0) == -1:
        chat["max_line_retries"] = None

    chat["url"] = os.environ.get(CHAT_URL_ENV) or chat.get("url") or default_chat_url()
    if os.environ.get(MODEL_ENV):
        model["model"] = os.environ[MODEL_ENV]

    try:
        return FitbotSettings(chat=chat, model=model, api=raw.get("api", {}))
    except ValidationError as e:
        raise ValueError(f"Invalid FitBot config in {path}: {e}") from e
